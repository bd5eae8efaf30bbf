"""Diskcache adapter - SQLite-based cache without daemon process."""

from __future__ import annotations

import asyncio
import pickle
import sqlite3
from pathlib import Path
from typing import Any, Optional

import structlog
from diskcache import Cache as DiskCache

log = structlog.get_logger(__name__)

# Raised by diskcache when a row or its value file was only partially written.
_CORRUPT_READ_ERRORS = (
    EOFError,
    OSError,
    pickle.UnpicklingError,
    sqlite3.DatabaseError,
)


class DiskcacheAdapter:
    """Async wrapper for diskcache.Cache (sync-only library).

    - Uses `asyncio.to_thread` for I/O (no blocking of the event loop).
    - Semaphore prevents too many parallel disk writes (SQLite lock contention).
    - Implements context manager (`async with`).
    - An entry that cannot be read back is reported as a miss.

    Args:
        directory: SQLite DB path (default: `./cache`).
        ttl_seconds: Default TTL for `set()` without explicit value.
        max_concurrent: Max parallel disk ops (default: 10, tunable).
    """

    def __init__(
        self,
        directory: str | Path = "./cache",
        ttl_seconds: int = 3600,
        max_concurrent: int = 10,
    ) -> None:
        self.directory = Path(directory)
        self.default_ttl = ttl_seconds
        self._cache: DiskCache | None = None
        self._semaphore = asyncio.Semaphore(max_concurrent)

        log.info(
            "diskcache_adapter_init",
            directory=str(self.directory),
            default_ttl=ttl_seconds,
            max_concurrent=max_concurrent,
        )

    # --- Context Manager ---
    async def __aenter__(self) -> DiskcacheAdapter:
        """Open SQLite cache (lazy, on first access)."""
        if self._cache is None:
            self._cache = await asyncio.to_thread(
                DiskCache,
                str(self.directory),
            )
            log.info("diskcache_opened", path=str(self.directory))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._cache is not None:
            await asyncio.to_thread(self._cache.close)
            self._cache = None
            log.info("diskcache_closed", directory=str(self.directory))

    # --- CachePort implementation ---
    async def get(self, key: str) -> Optional[Any]:
        """Read from cache (sync disk I/O -> to_thread)."""
        if self._cache is None:
            raise RuntimeError(
                "Cache not initialized. Use 'async with cache:' or await cache.__aenter__()"
            )

        async with self._semaphore:
            try:
                value = await asyncio.to_thread(self._cache.get, key, default=None)
            except _CORRUPT_READ_ERRORS as e:
                log.warning("cache_get_corrupt", key=key, error=str(e))
                return None
            log.debug("cache_get", key=key, hit=value is not None)
            return value

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        """Write to cache with TTL (default: self.default_ttl, 0 = no expiry)."""
        if self._cache is None:
            raise RuntimeError("Cache not initialized.")

        expire_time = ttl if ttl is not None else self.default_ttl

        async with self._semaphore:
            await asyncio.to_thread(
                self._cache.set,
                key,
                value,
                expire=expire_time or None,
            )
            log.debug("cache_set", key=key, ttl=expire_time)
