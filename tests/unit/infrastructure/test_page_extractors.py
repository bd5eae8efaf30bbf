"""Tests for watch page extractors."""

from __future__ import annotations

import json
from typing import Any

import pytest

from ytlinks.infrastructure.youtube import (
    WatchPageParser,
    extract_player_response,
    extract_player_url,
    extract_video_id,
    is_rate_limited,
    watch_url,
)


class TestExtractVideoId:
    @pytest.mark.parametrize(
        "text",
        [
            "dQw4w9WgXcQ",
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ&t=42",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://www.youtube.com/embed/dQw4w9WgXcQ?autoplay=1",
            "https://www.youtube.com/shorts/dQw4w9WgXcQ",
            "https://www.youtube.com/v/dQw4w9WgXcQ",
        ],
    )
    def test_forms(self, text: str) -> None:
        assert extract_video_id(text) == "dQw4w9WgXcQ"

    def test_ids_with_dash_and_underscore(self) -> None:
        assert extract_video_id("https://youtu.be/a-b_c-d_e-f") == "a-b_c-d_e-f"

    def test_too_short(self) -> None:
        assert extract_video_id("abc") is None

    def test_empty(self) -> None:
        assert extract_video_id("") is None


class TestWatchUrl:
    def test_default_base(self) -> None:
        assert watch_url("dQw4w9WgXcQ") == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"

    def test_trailing_slash(self) -> None:
        assert watch_url("x" * 11, "https://yt.test/") == f"https://yt.test/watch?v={'x' * 11}"


class TestIsRateLimited:
    @pytest.mark.parametrize(
        "html",
        [
            "<p>We have been receiving a large volume of requests from your network.</p>",
            "<div>Our systems have detected unusual traffic from your computer.</div>",
        ],
    )
    def test_markers(self, html: str) -> None:
        assert is_rate_limited(html)

    def test_normal_page(self, watch_page: str) -> None:
        assert not is_rate_limited(watch_page)


class TestExtractPlayerUrl:
    def test_root_relative_src(self, watch_page: str, samples) -> None:
        assert extract_player_url(watch_page) == samples.player_url

    def test_protocol_relative_src(self, samples) -> None:
        html = samples.make_watch_page(
            player_path="//www.youtube.com/yts/jsbin/player-en_US-vfl/base.js"
        )
        assert extract_player_url(html) == (
            "https://www.youtube.com/yts/jsbin/player-en_US-vfl/base.js"
        )

    def test_absolute_src(self, samples) -> None:
        html = samples.make_watch_page(player_path="https://cdn.test/s/player/x/base.js")
        assert extract_player_url(html) == "https://cdn.test/s/player/x/base.js"

    def test_non_player_scripts_skipped(self) -> None:
        html = (
            '<html><head><script src="/s/desktop/www-i18n.js"></script>'
            '<script src="/s/player/p1/base.js"></script></head></html>'
        )
        assert extract_player_url(html) == "https://www.youtube.com/s/player/p1/base.js"

    def test_js_url_fallback(self) -> None:
        html = '<script>ytcfg.set({"jsUrl":"\\/s\\/player\\/p2\\/base.js"});</script>'
        assert extract_player_url(html) == "https://www.youtube.com/s/player/p2/base.js"

    def test_custom_base_url(self, samples) -> None:
        html = samples.make_watch_page()
        assert extract_player_url(html, "https://yt.test") == (
            f"https://yt.test{samples.player_path}"
        )

    def test_missing(self, samples) -> None:
        assert extract_player_url(samples.make_watch_page(player_path=None)) is None


class TestExtractPlayerResponse:
    def test_initial_player_response(
        self, watch_page: str, player_response: dict[str, Any]
    ) -> None:
        assert extract_player_response(watch_page) == player_response

    def test_escaped_player_response(self, player_response: dict[str, Any]) -> None:
        embedded = json.dumps(json.dumps(player_response))
        html = (
            '<script>ytplayer.config = {"args":{"player_response":'
            f'{embedded},"title":"Video"}}}};</script>'
        )
        assert extract_player_response(html) == player_response

    def test_missing(self, samples) -> None:
        assert extract_player_response(samples.make_watch_page(None)) is None

    def test_malformed_json(self) -> None:
        html = "<script>var ytInitialPlayerResponse = {broken;</script>"
        assert extract_player_response(html) is None

    def test_trailing_script_ignored(self) -> None:
        html = '<script>var ytInitialPlayerResponse = {"a":1}["a"];</script>'
        assert extract_player_response(html) == {"a": 1}


class TestWatchPageParser:
    def test_delegates_with_base_url(self, watch_page: str, samples) -> None:
        parser = WatchPageParser(base_url="https://yt.test")
        assert parser.watch_url(samples.video_id) == f"https://yt.test/watch?v={samples.video_id}"
        assert parser.player_url(watch_page) == f"https://yt.test{samples.player_path}"
        assert parser.video_id(samples.watch_url) == samples.video_id
        assert not parser.is_rate_limited(watch_page)

    def test_format_entries(self, watch_page: str) -> None:
        parser = WatchPageParser()
        response = parser.player_response(watch_page)
        assert response is not None
        assert [entry.itag for entry in parser.format_entries(response)] == [18, 22]
