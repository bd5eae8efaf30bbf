"""Redis adapter - async Redis via redis.asyncio."""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

log = structlog.get_logger(__name__)


class RedisAdapter:
    """Async Redis cache for text values.

    - Uses `redis.asyncio.Redis` (async-native, no to_thread needed).
    - Semaphore limits parallel Redis ops (prevents connection exhaustion).
    - Values are stored as UTF-8 text; an undecodable value reads as a miss.

    Args:
        url: Redis URL (e.g. `redis://localhost:6379/0`).
        ttl_seconds: Default TTL.
        max_concurrent: Max parallel Redis ops (default: 50, tunable).
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        ttl_seconds: int = 3600,
        max_concurrent: int = 50,
    ) -> None:
        self.url = url
        self.default_ttl = ttl_seconds
        self._client: Redis | None = None
        self._semaphore = asyncio.Semaphore(max_concurrent)

        log.info(
            "redis_adapter_init",
            url=url,
            default_ttl=ttl_seconds,
            max_concurrent=max_concurrent,
        )

    # --- Context Manager ---
    async def __aenter__(self) -> RedisAdapter:
        """Initialize Redis client (connection pool)."""
        if self._client is None:
            self._client = Redis.from_url(self.url, decode_responses=False)
            try:
                await self._client.ping()
                log.info("redis_connected", url=self.url)
            except RedisError as e:
                log.error("redis_connection_failed", url=self.url, error=str(e))
                raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Cleanup: close Redis connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.info("redis_closed")

    # --- CachePort implementation ---
    async def get(self, key: str) -> Any | None:
        if self._client is None:
            raise RuntimeError("Redis not initialized. Use 'async with cache:'")

        async with self._semaphore:
            try:
                raw = await self._client.get(key)
            except RedisError as e:
                log.error("redis_get_error", key=key, error=str(e))
                return None

        if raw is None:
            log.debug("cache_miss", key=key)
            return None
        try:
            value = raw.decode("utf-8")
        except UnicodeDecodeError:
            log.warning("cache_get_corrupt", key=key)
            return None
        log.debug("cache_hit", key=key)
        return value

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        """SET with TTL (0 = no expiry)."""
        if self._client is None:
            raise RuntimeError("Redis not initialized.")

        expire_time = ttl if ttl is not None else self.default_ttl
        packed = str(value).encode("utf-8")

        async with self._semaphore:
            try:
                if expire_time:
                    await self._client.setex(key, expire_time, packed)
                else:
                    await self._client.set(key, packed)
                log.debug(
                    "cache_set",
                    key=key,
                    ttl=expire_time,
                    size_bytes=len(packed),
                )
            except RedisError as e:
                log.error("redis_set_error", key=key, error=str(e))
