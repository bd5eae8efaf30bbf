"""Port for fetching watch pages and player scripts."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PageFetcherPort(Protocol):
    """Fetches upstream text content.

    Transport failures are reported as ``None``, never raised.
    """

    async def fetch(self, url: str) -> str | None:
        """Fetch ``url`` uncached (watch pages change per request)."""
        ...

    async def fetch_cached(self, url: str) -> str | None:
        """Fetch ``url`` through the content cache keyed by URL."""
        ...
