"""Download links use case.

video id -> watch page -> (rate-limit check) -> player response + player
script -> decipher sequence -> resolved links -> selector.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, Literal, Protocol

import structlog

from ytlinks.domain.entities.cipher import OperationSequence
from ytlinks.domain.entities.failures import Failure, FailureKind, Outcome
from ytlinks.domain.entities.links import FormatEntry, ResolutionResult, ResolvedLink
from ytlinks.domain.ports.page_fetcher import PageFetcherPort

log = structlog.get_logger(__name__)

RATE_LIMIT_ERROR = "HTTP 429: Too many requests."

Selector = str | Literal[False] | None

# ---------------------------------------------------------------------------
# Protocols: define what this use case needs from its dependencies.
# Infrastructure components satisfy these via structural subtyping.
# ---------------------------------------------------------------------------


class _WatchPage(Protocol):
    """Text lookups on watch page markup."""

    def video_id(self, text: str) -> str | None: ...

    def watch_url(self, video_id: str) -> str: ...

    def is_rate_limited(self, html: str) -> bool: ...

    def player_url(self, html: str) -> str | None: ...

    def player_response(self, html: str) -> dict[str, Any] | None: ...

    def format_entries(self, player_response: dict[str, Any]) -> list[FormatEntry]: ...


# Type aliases for injected pure functions.
_DeriveFn = Callable[[str], Outcome[OperationSequence]]
_ResolveFn = Callable[[Iterable[FormatEntry], Outcome[OperationSequence]], list[ResolvedLink]]
_SelectFn = Callable[[Sequence[ResolvedLink], Selector], list[ResolvedLink]]


def _empty(kind: FailureKind, reason: str, error: str | None = None) -> ResolutionResult:
    return ResolutionResult(links=[], error=error, failure=Failure(kind, reason))


class DownloadLinksUseCase:
    """Resolves one video into direct download links.

    Every call returns a fresh ``ResolutionResult``; nothing is shared
    between calls except the fetcher's content cache.
    """

    def __init__(
        self,
        fetcher: PageFetcherPort,
        page: _WatchPage,
        *,
        derive_sequence: _DeriveFn,
        resolve: _ResolveFn,
        select: _SelectFn,
    ) -> None:
        self._fetcher = fetcher
        self._page = page
        self._derive_sequence = derive_sequence
        self._resolve = resolve
        self._select = select

    async def execute(self, video: str, selector: Selector = False) -> ResolutionResult:
        """Resolve ``video`` (id or URL) into links filtered by ``selector``."""
        video_id = self._page.video_id(video)
        if video_id is None:
            log.info("download_links_no_video_id", video=video)
            return _empty(FailureKind.UPSTREAM_UNAVAILABLE, "video id not found")

        html = await self._fetcher.fetch(self._page.watch_url(video_id))
        if html is None:
            return _empty(FailureKind.UPSTREAM_UNAVAILABLE, "watch page unavailable")

        if self._page.is_rate_limited(html):
            log.warning("download_links_rate_limited", video_id=video_id)
            return _empty(
                FailureKind.UPSTREAM_UNAVAILABLE, "rate limited", error=RATE_LIMIT_ERROR
            )

        player_response = self._page.player_response(html)
        if player_response is None:
            log.info("download_links_metadata_absent", video_id=video_id)
            return _empty(FailureKind.METADATA_ABSENT, "player response not found")

        player_url = self._page.player_url(html)
        if player_url is None:
            log.info("download_links_no_player_url", video_id=video_id)
            return _empty(FailureKind.UPSTREAM_UNAVAILABLE, "player script url not found")

        script = await self._fetcher.fetch_cached(player_url)
        if script is None:
            return _empty(FailureKind.UPSTREAM_UNAVAILABLE, "player script unavailable")

        entries = self._page.format_entries(player_response)
        sequence = self._derive_sequence(script)
        if not sequence.ok:
            log.info(
                "download_links_decipher_unavailable",
                video_id=video_id,
                player_url=player_url,
                reason=sequence.failure.reason if sequence.failure else "",
            )

        links = self._select(self._resolve(entries, sequence), selector)
        log.info(
            "download_links_resolved",
            video_id=video_id,
            entries=len(entries),
            links=len(links),
            selector=selector or None,
        )
        return ResolutionResult(links=links)
