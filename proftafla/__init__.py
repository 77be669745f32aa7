"""
Exam schedules (próftafla) for the University of Iceland divisions, cached in redis.
"""

from .config import Config
from .errors import FetchError, ProftaflaError
from .fetcher import ScheduleFetcher
from .models import Department, Division, DivisionResult, Stats, Test
from .schools import SCHOOLS, all_schools, find_by_slug
from .service import ScheduleService, compute_stats
from .storage import CacheStore, RedisStore, ScheduleCache


def create_service(config: Config, store: CacheStore = None, transport=None) -> ScheduleService:
    """Wire a ScheduleService from configuration.

    `store` and `transport` replace redis and the network, mostly for tests.
    """
    upstream = config.upstream
    fetcher_kwargs = {
        'timeout': float(upstream.get('timeout', 30.0)),
        'user_agent': upstream.get('user_agent', 'Proftafla/1.0'),
        'html_field': upstream.get('html_field', 'html'),
        'transport': transport,
    }
    if upstream.get('url'):
        fetcher_kwargs['url_template'] = upstream['url']

    return ScheduleService(
        cache=ScheduleCache(store if store is not None else RedisStore(config.redis_url)),
        fetcher=ScheduleFetcher(**fetcher_kwargs),
        ttl=config.ttl,
        prefix=config.prefix,
    )


__all__ = [
    "CacheStore",
    "Config",
    "Department",
    "Division",
    "DivisionResult",
    "FetchError",
    "ProftaflaError",
    "RedisStore",
    "SCHOOLS",
    "ScheduleCache",
    "ScheduleFetcher",
    "ScheduleService",
    "Stats",
    "Test",
    "all_schools",
    "compute_stats",
    "create_service",
    "find_by_slug",
]
