"""Cache Port - URL-keyed text store for fetched upstream content."""

from __future__ import annotations

from typing import Any, Protocol


class CachePort(Protocol):
    """Async text store the fetcher keeps player scripts in.

    Keys are derived from the source URL; values are the fetcher's
    envelope text. ``get`` returns None for anything it cannot hand back
    whole: a missing or expired key, a row another writer left half
    written, or a value the backend cannot decode. Callers never see a
    partial entry, so a torn write costs one refetch and nothing more.

    Implementations: DiskcacheAdapter, RedisAdapter. Both are opened and
    closed with ``async with``.
    """

    async def get(self, key: str) -> Any:
        """Stored value, or None on miss / expiry / unreadable entry."""
        ...

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        """Store ``value``; ``ttl`` in seconds, 0 = no expiry, None = adapter default."""
        ...

    async def aclose(self) -> None: ...

    async def __aenter__(self) -> CachePort: ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None: ...
