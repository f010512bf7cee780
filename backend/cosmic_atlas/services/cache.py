"""
TTL caches used by the vendor clients.

Entries are keyed by plain strings built from the request parameters and
hold JSON-compatible dicts. Two backends: an in-process dict and Redis.
"""

import json
import logging
import time
from typing import Any, Dict, Optional, Protocol, Tuple

import redis.asyncio as redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class Cache(Protocol):
    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        ...

    async def set(self, key: str, value: Dict[str, Any], ttl: int) -> None:
        ...


class MemoryCache:
    """In-memory cache. Expired entries are dropped when read and swept on every write."""

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Dict[str, Any]]] = {}

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: Dict[str, Any], ttl: int) -> None:
        if ttl <= 0:
            return
        now = self._clock()
        self._purge_expired(now)
        self._entries[key] = (now + ttl, value)

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for k in expired:
            del self._entries[k]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class RedisCache:
    """
    Redis-backed cache (values stored as JSON with SETEX).

    A Redis outage degrades to cache misses; errors are logged, not raised.
    """

    def __init__(self, client: "redis.Redis", prefix: str = "cosmic-atlas:"):
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str) -> "RedisCache":
        client = redis.Redis.from_url(url, decode_responses=True, socket_connect_timeout=1)
        return cls(client)

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            raw = await self.client.get(self.prefix + key)
        except RedisError as e:
            logger.warning(f"Redis cache get failed for {key}: {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding undecodable cache entry {key}")
            return None

    async def set(self, key: str, value: Dict[str, Any], ttl: int) -> None:
        if ttl <= 0:
            return
        try:
            await self.client.setex(self.prefix + key, ttl, json.dumps(value))
        except RedisError as e:
            logger.warning(f"Redis cache set failed for {key}: {e}")

    async def aclose(self) -> None:
        await self.client.aclose()


def build_cache(settings) -> Cache:
    if settings.CACHE_BACKEND == "redis":
        logger.info(f"Using Redis cache at {settings.REDIS_HOST}:{settings.REDIS_PORT}")
        return RedisCache.from_url(settings.REDIS_URL)
    if settings.CACHE_BACKEND != "memory":
        raise ValueError(f"Unknown CACHE_BACKEND: {settings.CACHE_BACKEND}")
    logger.info("Using in-memory cache")
    return MemoryCache()
