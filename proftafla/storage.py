"""
Cache for parsed division listings, a thin wrapper around redis.

Store trouble never reaches the caller: reads degrade to a miss, writes and
clears are logged and dropped.
"""
import asyncio
from typing import List, Optional, Protocol

import redis.asyncio as redis
import structlog

from .models import DivisionResult


class CacheStore(Protocol):
    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str, ttl: int) -> None: ...

    async def keys(self, pattern: str) -> List[str]: ...

    async def delete(self, key: str) -> None: ...

    async def close(self) -> None: ...


class RedisStore:
    def __init__(self, url: str):
        self.url = url
        self.client = redis.from_url(url, decode_responses=True)

    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def set(self, key: str, value: str, ttl: int) -> None:
        await self.client.set(key, value, ex=ttl)

    async def keys(self, pattern: str) -> List[str]:
        return await self.client.keys(pattern)

    async def delete(self, key: str) -> None:
        await self.client.delete(key)

    async def close(self) -> None:
        await self.client.aclose()


class ScheduleCache:
    def __init__(self, store: CacheStore, logger=None):
        self.store = store
        self.logger = logger or structlog.get_logger(__name__)

    async def get(self, key: str) -> Optional[DivisionResult]:
        """Cached listing for `key`, None on a miss or any failure."""
        try:
            raw = await self.store.get(key)
            if raw is None:
                return None
            return DivisionResult.model_validate_json(raw)
        except Exception as e:
            self.logger.warning("cache_get_failed", key=key, error=str(e))
        return None

    async def set(self, key: str, value: DivisionResult, ttl: int) -> None:
        try:
            await self.store.set(key, value.model_dump_json(), ttl)
        except Exception as e:
            self.logger.warning("cache_set_failed", key=key, ttl=ttl, error=str(e))

    async def clear(self, prefix: str) -> bool:
        """Delete every key under `prefix:`. Partial deletes are not reported."""
        try:
            keys = await self.store.keys(f"{prefix}:*")
            await asyncio.gather(*(self.store.delete(key) for key in keys))
        except Exception as e:
            self.logger.warning("cache_clear_failed", prefix=prefix, error=str(e))
            return False

        self.logger.info("cache_cleared", prefix=prefix, keys=len(keys))
        return True

    async def close(self) -> None:
        await self.store.close()
