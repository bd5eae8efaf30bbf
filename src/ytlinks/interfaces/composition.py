"""Composition root: wires config, cache, HTTP client and the use case."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
import structlog

from ytlinks.application.use_cases.download_links import DownloadLinksUseCase, Selector
from ytlinks.domain.entities.links import ResolutionResult
from ytlinks.domain.ports.cache import CachePort
from ytlinks.infrastructure.cache.cache_factory import create_cache
from ytlinks.infrastructure.config import AppConfig, load_config
from ytlinks.infrastructure.http.fetcher import HttpFetcher
from ytlinks.infrastructure.http.retry_transport import RetryTransport
from ytlinks.infrastructure.logging.setup import configure_logging
from ytlinks.infrastructure.resolution.orchestrator import resolve_links, select_links
from ytlinks.infrastructure.signature import derive_operation_sequence
from ytlinks.infrastructure.youtube.page import WatchPageParser

log = structlog.get_logger(__name__)


def build_http_client(config: AppConfig) -> httpx.AsyncClient:
    """HTTP client with 429/503 retry and configured timeout/User-Agent."""
    transport = RetryTransport(
        wrapped=httpx.AsyncHTTPTransport(),
        max_retries=config.http_max_retries,
    )
    return httpx.AsyncClient(
        transport=transport,
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=config.http_follow_redirects,
    )


def build_use_case(
    config: AppConfig,
    http_client: httpx.AsyncClient,
    cache: CachePort | None,
) -> DownloadLinksUseCase:
    fetcher = HttpFetcher(
        http_client,
        cache,
        cache_ttl_seconds=config.script_ttl_seconds,
    )
    return DownloadLinksUseCase(
        fetcher,
        WatchPageParser(base_url=config.youtube_base_url),
        derive_sequence=derive_operation_sequence,
        resolve=resolve_links,
        select=select_links,
    )


@asynccontextmanager
async def open_use_case(config: AppConfig) -> AsyncIterator[DownloadLinksUseCase]:
    """Configure logging, open cache + HTTP client, yield the use case, then close both.

    Order matters: the cache must be open before the fetcher reads it.
    """
    configure_logging(config)
    cache = create_cache(
        backend=config.cache.backend,
        directory=config.cache.directory,
        redis_url=config.cache.redis_url,
        ttl_seconds=config.cache.ttl_seconds,
        max_concurrent=config.cache.max_concurrent,
    )
    async with cache:
        log.info("cache_initialized", backend=config.cache.backend)
        async with build_http_client(config) as http_client:
            log.info("http_client_initialized", max_retries=config.http_max_retries)
            yield build_use_case(config, http_client, cache)


async def get_download_links(
    video: str,
    selector: Selector = False,
    *,
    config: AppConfig | None = None,
) -> ResolutionResult:
    """One-shot convenience: resolve ``video`` with a freshly wired use case."""
    config = config or load_config()
    async with open_use_case(config) as use_case:
        return await use_case.execute(video, selector)
