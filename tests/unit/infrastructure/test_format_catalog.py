"""Tests for the itag format catalog."""

from __future__ import annotations

import pytest

from ytlinks.infrastructure.formats import KNOWN_ITAGS, describe_itag


class TestDescribeItag:
    @pytest.mark.parametrize(
        ("itag", "expected"),
        [
            (18, "mp4, video, 360p, audio"),
            (22, "mp4, video, 720p, audio"),
            (140, "m4a, audio, 128k"),
            (137, "mp4, video, 1080p"),
            (251, "webm, audio, 160k, opus"),
        ],
    )
    def test_known(self, itag: int, expected: str) -> None:
        assert describe_itag(itag) == expected

    def test_unknown(self) -> None:
        assert describe_itag(9999) == "unknown format #9999"

    def test_known_itags_all_described(self) -> None:
        for itag in KNOWN_ITAGS:
            assert not describe_itag(itag).startswith("unknown format")

    def test_muxed_carry_video_and_audio(self) -> None:
        descriptor = describe_itag(18)
        assert "video" in descriptor
        assert "audio" in descriptor

    def test_video_only_has_no_audio(self) -> None:
        assert "audio" not in describe_itag(137)

    def test_audio_only_has_no_video(self) -> None:
        assert "video" not in describe_itag(140)

    def test_container_leads_descriptor(self) -> None:
        for itag in KNOWN_ITAGS:
            container = describe_itag(itag).split(",")[0]
            assert container in {"mp4", "webm", "flv", "3gp", "m4a"}
