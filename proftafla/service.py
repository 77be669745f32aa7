"""
Looks up exam listings per division through the cache and folds them into stats.
"""

import asyncio
from typing import Iterable, Optional, Tuple

import structlog

from .fetcher import ScheduleFetcher
from .models import Division, DivisionResult, Stats
from .schools import SCHOOLS, find_by_slug
from .storage import ScheduleCache

logger = structlog.get_logger(__name__)


class ScheduleService:
    """Cached lookups of division exam listings"""

    def __init__(
        self,
        cache: ScheduleCache,
        fetcher: ScheduleFetcher,
        ttl: int,
        prefix: str = 'proftafla',
        schools: Tuple[Division, ...] = SCHOOLS,
    ):
        self.cache = cache
        self.fetcher = fetcher
        self.ttl = ttl
        self.prefix = prefix
        self.schools = schools

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    def find_school(self, slug: str) -> Optional[Division]:
        return find_by_slug(slug, self.schools)

    def cache_key(self, slug: str) -> str:
        return f"{self.prefix}:{slug}"

    async def get_tests(self, slug: str) -> Optional[DivisionResult]:
        """Listing for `slug` from cache or upstream, None for an unknown slug.

        Upstream failures propagate. Cache failures only cost a refetch.
        """
        school = self.find_school(slug)
        if school is None:
            logger.info("unknown_slug", slug=slug)
            return None

        key = self.cache_key(slug)
        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug("cache_hit", key=key)
            return cached

        logger.info("cache_miss", key=key)
        data = await self.fetcher.fetch_and_parse(school.id, school.name)
        await self.cache.set(key, data, self.ttl)
        return data

    async def clear_cache(self) -> bool:
        return await self.cache.clear(self.prefix)

    async def get_stats(self) -> Stats:
        """Stats over every test of every department of every division.

        All lookups run at once and the first failure fails the whole call.
        """
        results = await asyncio.gather(*(self.get_tests(s.slug) for s in self.schools))
        return compute_stats(results)

    async def close(self):
        await self.fetcher.close()
        await self.cache.close()


def compute_stats(results: Iterable[DivisionResult]) -> Stats:
    minimum = None
    maximum = 0
    num_tests = 0
    num_students = 0

    for school in results:
        for department in school.departments:
            for test in department.tests:
                students = test.students or 0

                num_tests += 1
                num_students += students
                maximum = max(maximum, students)
                minimum = students if minimum is None else min(minimum, students)

    if num_tests == 0:
        return Stats(min=0, max=0, num_tests=0, num_students=0, average_students='0.00')

    return Stats(
        min=minimum,
        max=maximum,
        num_tests=num_tests,
        num_students=num_students,
        average_students=f"{num_students / num_tests:.2f}",
    )
