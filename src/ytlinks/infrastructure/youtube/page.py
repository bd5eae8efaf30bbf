"""Watch page extractors: video id, player script URL, player response.

Simple text lookups on page markup; nothing here interprets the player
script itself.
"""

from __future__ import annotations

import json
import re
from typing import Any
from urllib.parse import parse_qs, urljoin, urlparse

import structlog
from bs4 import BeautifulSoup

from ytlinks.domain.entities.links import FormatEntry
from ytlinks.infrastructure.youtube.formats import parse_format_entries

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://www.youtube.com"

RATE_LIMIT_MARKERS = (
    "We have been receiving a large volume of requests",
    "systems have detected unusual traffic",
)

_VIDEO_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{11}$")
_VIDEO_ID_PATH_RE = re.compile(r"(?:youtu\.be/|/embed/|/shorts/|/v/)([a-zA-Z0-9_-]{11})")
_VIDEO_ID_ANY_RE = re.compile(r"[a-zA-Z0-9_-]{11}")

_PLAYER_SRC_RE = re.compile(r".+player.+js")
_JS_URL_RE = re.compile(r"\"jsUrl\"\s*:\s*\"([^\"]+)\"")

_ESCAPED_RESPONSE_RE = re.compile(r"player_response\":\"(.*?)\",\"")
_INITIAL_RESPONSE_RE = re.compile(r"ytInitialPlayerResponse\s*=\s*(?=\{)")


def extract_video_id(text: str) -> str | None:
    """Extract an 11-character video id from a URL or any piece of text."""
    query = parse_qs(urlparse(text).query)
    for candidate in query.get("v", []):
        if _VIDEO_ID_RE.match(candidate):
            return candidate

    match = _VIDEO_ID_PATH_RE.search(text)
    if match:
        return match.group(1)

    match = _VIDEO_ID_ANY_RE.search(text)
    return match.group(0) if match else None


def watch_url(video_id: str, base_url: str = DEFAULT_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/watch?v={video_id}"


def is_rate_limited(html: str) -> bool:
    """Check the page for upstream "too many requests" markers."""
    return any(marker in html for marker in RATE_LIMIT_MARKERS)


def extract_player_url(html: str, base_url: str = DEFAULT_BASE_URL) -> str | None:
    """Find the player script URL and make it absolute."""
    src: str | None = None

    soup = BeautifulSoup(html, "lxml")
    for script in soup.find_all("script", src=True):
        candidate = str(script["src"])
        if _PLAYER_SRC_RE.search(candidate):
            src = candidate
            break

    if src is None:
        match = _JS_URL_RE.search(html)
        if match:
            src = match.group(1).replace("\\/", "/")

    if src is None:
        log.debug("player_url_not_found")
        return None

    # Handles protocol-relative (//host/...) and root-relative (/s/...) paths.
    return urljoin(base_url.rstrip("/") + "/", src)


def _decode_escaped_response(html: str) -> dict[str, Any] | None:
    match = _ESCAPED_RESPONSE_RE.search(html)
    if not match:
        return None
    try:
        # The blob is embedded as a JSON string literal holding JSON.
        raw = json.loads(f'"{match.group(1)}"')
        data = json.loads(raw)
    except (json.JSONDecodeError, ValueError):
        log.debug("player_response_undecodable", pattern="escaped")
        return None
    return data if isinstance(data, dict) else None


def _decode_initial_response(html: str) -> dict[str, Any] | None:
    match = _INITIAL_RESPONSE_RE.search(html)
    if not match:
        return None
    try:
        data, _ = json.JSONDecoder().raw_decode(html, match.end())
    except (json.JSONDecodeError, ValueError):
        log.debug("player_response_undecodable", pattern="initial")
        return None
    return data if isinstance(data, dict) else None


def extract_player_response(html: str) -> dict[str, Any] | None:
    """Locate and decode the embedded player response (stream metadata)."""
    for decoder in (_decode_escaped_response, _decode_initial_response):
        data = decoder(html)
        if data is not None:
            return data
    return None


class WatchPageParser:
    """Page extractors bound to one upstream origin."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL) -> None:
        self._base_url = base_url

    def video_id(self, text: str) -> str | None:
        return extract_video_id(text)

    def watch_url(self, video_id: str) -> str:
        return watch_url(video_id, self._base_url)

    def is_rate_limited(self, html: str) -> bool:
        return is_rate_limited(html)

    def player_url(self, html: str) -> str | None:
        return extract_player_url(html, self._base_url)

    def player_response(self, html: str) -> dict[str, Any] | None:
        return extract_player_response(html)

    def format_entries(self, player_response: dict[str, Any]) -> list[FormatEntry]:
        return parse_format_entries(player_response)
