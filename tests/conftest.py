"""Shared test fixtures for ytlinks test suite."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock
from urllib.parse import urlencode

import pytest

# ---------------------------------------------------------------------------
# Player script fixtures
# ---------------------------------------------------------------------------

# Decode routine Qk: swap(3), reverse, drop(2), reverse.
PLAYER_SCRIPT = """
var _yt_player={};(function(g){var window=this;
var Xy={ab:function(a,b){a.splice(0,b)},
cd:function(a){a.reverse()},
"ef":function(a,b){var c=a[0];a[0]=a[b%a.length];a[b%a.length]=c}};
var Zq=function(a){return a.split("").reverse().join("")};
Qk=function(a){a=a.split("");Xy.ef(a,3);Xy.cd(a,47);Xy.ab(a,2);Xy.cd(a);return a.join("")};
g.Pd=function(x){var c=x.s,d=new g.Ur(x.url);c&&d.set(x.sp,encodeURIComponent(Qk(decodeURIComponent(c))));return d};
})(_yt_player);
"""

ENCRYPTED_SIGNATURE = "ABCDEFGHIJ"
DECODED_SIGNATURE = "DBCAEFGH"

PLAYER_PATH = "/s/player/abc123/player_ias.vflset/en_US/base.js"
PLAYER_URL = f"https://www.youtube.com{PLAYER_PATH}"
VIDEO_ID = "dQw4w9WgXcQ"
WATCH_URL = f"https://www.youtube.com/watch?v={VIDEO_ID}"

DIRECT_URL = "https://r1.googlevideo.com/videoplayback?itag=18&id=direct"
CIPHER_BASE_URL = "https://r1.googlevideo.com/videoplayback?itag=22&id=cipher"


def make_cipher(
    signature: str = ENCRYPTED_SIGNATURE,
    sp: str = "sig",
    url: str = CIPHER_BASE_URL,
) -> str:
    return urlencode({"s": signature, "sp": sp, "url": url})


def make_player_response(*, cipher_key: str = "signatureCipher") -> dict[str, Any]:
    """Player response with one direct muxed format and one ciphered adaptive format."""
    return {
        "playabilityStatus": {"status": "OK"},
        "streamingData": {
            "formats": [{"itag": 18, "url": DIRECT_URL, "mimeType": "video/mp4"}],
            "adaptiveFormats": [
                {"itag": 22, cipher_key: make_cipher(), "mimeType": "video/mp4"},
            ],
        },
    }


def make_watch_page(
    player_response: dict[str, Any] | None = None,
    *,
    player_path: str | None = PLAYER_PATH,
    extra: str = "",
) -> str:
    script_tag = f'<script src="{player_path}" nonce="x"></script>' if player_path else ""
    data = "" if player_response is None else (
        f"<script>var ytInitialPlayerResponse = {json.dumps(player_response)};"
        "var meta = document.createElement('meta');</script>"
    )
    return (
        "<!DOCTYPE html><html><head><title>Video</title>"
        f"{script_tag}</head><body>{extra}{data}</body></html>"
    )


@pytest.fixture()
def player_script() -> str:
    return PLAYER_SCRIPT


@pytest.fixture()
def player_response() -> dict[str, Any]:
    return make_player_response()


@pytest.fixture()
def watch_page(player_response: dict[str, Any]) -> str:
    return make_watch_page(player_response)


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_cache() -> AsyncMock:
    """Mock CachePort."""
    cache = AsyncMock()
    cache.get = AsyncMock(return_value=None)
    cache.set = AsyncMock()
    cache.aclose = AsyncMock()
    return cache


class Samples:
    """Constants and builders shared across test modules."""

    player_script = PLAYER_SCRIPT
    encrypted_signature = ENCRYPTED_SIGNATURE
    decoded_signature = DECODED_SIGNATURE
    player_path = PLAYER_PATH
    player_url = PLAYER_URL
    video_id = VIDEO_ID
    watch_url = WATCH_URL
    direct_url = DIRECT_URL
    cipher_base_url = CIPHER_BASE_URL

    make_cipher = staticmethod(make_cipher)
    make_player_response = staticmethod(make_player_response)
    make_watch_page = staticmethod(make_watch_page)


@pytest.fixture()
def samples() -> type[Samples]:
    return Samples
