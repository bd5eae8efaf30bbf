"""HTTP fetcher for watch pages and player scripts, with URL-keyed caching.

Player scripts are large and immutable per URL, so they go through the
cache. Cached bodies are wrapped in a small envelope carrying their
length and digest; an entry that does not check out (partial write from
a concurrent writer, foreign value, corrupt backend row) is a miss.
"""

from __future__ import annotations

import hashlib
import json

import httpx
import structlog

from ytlinks.domain.ports.cache import CachePort

log = structlog.get_logger(__name__)


def cache_key(url: str) -> str:
    return f"content:{hashlib.md5(url.encode('utf-8')).hexdigest()}"  # noqa: S324


def _digest(body: str) -> str:
    return hashlib.sha256(body.encode("utf-8")).hexdigest()


def encode_envelope(url: str, body: str) -> str:
    return json.dumps(
        {"url": url, "length": len(body), "sha256": _digest(body), "body": body}
    )


def decode_envelope(url: str, raw: object) -> str | None:
    """Return the cached body, or None if ``raw`` is not a complete entry."""
    if not isinstance(raw, str):
        return None
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None

    body = data.get("body")
    if not isinstance(body, str) or data.get("url") != url:
        return None
    if data.get("length") != len(body) or data.get("sha256") != _digest(body):
        return None
    return body


class HttpFetcher:
    """Fetches upstream text via httpx; failures come back as None."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        cache: CachePort | None = None,
        *,
        cache_ttl_seconds: int | None = None,
    ) -> None:
        self._http = http_client
        self._cache = cache
        self._ttl = cache_ttl_seconds

    async def fetch(self, url: str) -> str | None:
        """GET ``url``; None on transport error, non-200 or empty body."""
        try:
            resp = await self._http.get(url)
        except httpx.HTTPError as e:
            log.warning("fetch_request_failed", url=url, error=str(e))
            return None

        if resp.status_code != 200:
            log.warning("fetch_http_error", status=resp.status_code, url=url)
            return None

        text = resp.text
        if not text:
            log.warning("fetch_empty_body", url=url)
            return None
        return text

    async def fetch_cached(self, url: str) -> str | None:
        """Like ``fetch`` but served from / stored into the cache."""
        cache = self._cache
        if cache is None:
            return await self.fetch(url)

        key = cache_key(url)
        cached = await self._read_cache(cache, key, url)
        if cached is not None:
            log.debug("fetch_cache_hit", url=url)
            return cached

        body = await self.fetch(url)
        if body is None:
            return None

        try:
            await cache.set(key, encode_envelope(url, body), ttl=self._ttl)
        except Exception as e:  # noqa: BLE001
            log.warning("fetch_cache_write_failed", url=url, error=str(e))
        return body

    async def _read_cache(self, cache: CachePort, key: str, url: str) -> str | None:
        try:
            raw = await cache.get(key)
        except Exception as e:  # noqa: BLE001
            log.warning("fetch_cache_read_failed", url=url, error=str(e))
            return None

        if raw is None:
            return None

        body = decode_envelope(url, raw)
        if body is None:
            log.warning("fetch_cache_corrupt", url=url, key=key)
        return body
