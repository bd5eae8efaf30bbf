"""Cache factory - creates the adapter selected in config."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import structlog

from ytlinks.domain.ports.cache import CachePort
from ytlinks.infrastructure.cache.diskcache_adapter import DiskcacheAdapter
from ytlinks.infrastructure.cache.redis_adapter import RedisAdapter

log = structlog.get_logger(__name__)

CacheBackend = Literal["diskcache", "redis"]


def create_cache(
    backend: CacheBackend = "diskcache",
    *,
    directory: str | Path = "./cache",
    redis_url: str = "redis://localhost:6379/0",
    ttl_seconds: int = 3600,
    max_concurrent: int = 10,
) -> CachePort:
    """Create the cache adapter for ``backend``.

    Args:
        backend: "diskcache" (SQLite) or "redis".
        directory: Diskcache path.
        redis_url: Redis connection string.
        ttl_seconds: Default TTL for both backends.
        max_concurrent: Semaphore limit (Redis uses at least 50).

    Raises:
        ValueError: If `backend` is unknown.
    """
    if backend == "diskcache":
        log.info(
            "cache_factory_create",
            backend=backend,
            directory=str(directory),
            ttl=ttl_seconds,
            max_concurrent=max_concurrent,
        )
        return DiskcacheAdapter(
            directory=directory,
            ttl_seconds=ttl_seconds,
            max_concurrent=max_concurrent,
        )
    elif backend == "redis":
        redis_concurrency = max(max_concurrent, 50)
        log.info(
            "cache_factory_create",
            backend=backend,
            url=redis_url,
            ttl=ttl_seconds,
            max_concurrent=redis_concurrency,
        )
        return RedisAdapter(
            url=redis_url,
            ttl_seconds=ttl_seconds,
            max_concurrent=redis_concurrency,
        )
    else:
        raise ValueError(
            f"Unknown cache backend: {backend!r}. Must be 'diskcache' or 'redis'."
        )
