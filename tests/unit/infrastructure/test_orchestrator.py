"""Tests for link resolution and selector filtering."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from ytlinks.domain.entities.cipher import CipherOperation, OperationSequence
from ytlinks.domain.entities.failures import FailureKind, Outcome
from ytlinks.domain.entities.links import CipherPayload, FormatEntry, ResolvedLink
from ytlinks.infrastructure.resolution import resolve_links, select_links

SEQUENCE: OperationSequence = (
    CipherOperation.swap_with_front(3),
    CipherOperation.reverse(),
    CipherOperation.drop_front(2),
    CipherOperation.reverse(),
)
DECODABLE = Outcome.success(SEQUENCE)
UNDECODABLE: Outcome[OperationSequence] = Outcome.failed(
    FailureKind.DECIPHER_UNAVAILABLE, "decode routine not found"
)

BASE = "https://r1.googlevideo.com/videoplayback?itag=22&id=cipher"


def _direct(itag: int, url: str = "https://cdn.test/direct") -> FormatEntry:
    return FormatEntry(itag=itag, url=url)


def _ciphered(itag: int, signature: str = "ABCDEFGHIJ", sp: str = "sig") -> FormatEntry:
    return FormatEntry(
        itag=itag, cipher=CipherPayload(url=BASE, sig_param=sp, signature=signature)
    )


def _link(itag: int, fmt: str) -> ResolvedLink:
    return ResolvedLink(url=f"https://cdn.test/{itag}", itag=itag, format=fmt)


# ---------------------------------------------------------------------------
# resolve_links
# ---------------------------------------------------------------------------
class TestResolveLinks:
    def test_direct_and_ciphered(self) -> None:
        links = resolve_links([_direct(18), _ciphered(22)], DECODABLE)
        assert links == [
            ResolvedLink(url="https://cdn.test/direct", itag=18, format="mp4, video, 360p, audio"),
            ResolvedLink(url=f"{BASE}&sig=DBCAEFGH", itag=22, format="mp4, video, 720p, audio"),
        ]

    def test_signature_param_name_from_payload(self) -> None:
        links = resolve_links([_ciphered(22, sp="signature")], DECODABLE)
        assert links[0].url == f"{BASE}&signature=DBCAEFGH"

    def test_undecodable_script_keeps_direct_entries(self) -> None:
        links = resolve_links([_ciphered(22), _direct(18), _ciphered(140)], UNDECODABLE)
        assert [link.itag for link in links] == [18]

    def test_direct_entries_skip_applier(self) -> None:
        apply = MagicMock(return_value=Outcome.success("X"))
        resolve_links([_direct(18), _direct(140)], DECODABLE, apply=apply)
        apply.assert_not_called()

    def test_applier_called_with_signature_and_sequence(self) -> None:
        apply = MagicMock(return_value=Outcome.success("DEC"))
        links = resolve_links([_ciphered(22, signature="SIG")], DECODABLE, apply=apply)
        apply.assert_called_once_with("SIG", SEQUENCE)
        assert links[0].url == f"{BASE}&sig=DEC"

    def test_per_entry_failure_is_isolated(self) -> None:
        # "AB" is too short for swap(3); the other entries still resolve.
        entries = [_ciphered(22), _ciphered(137, signature="AB"), _direct(18)]
        links = resolve_links(entries, DECODABLE)
        assert [link.itag for link in links] == [22, 18]

    def test_malformed_cipher_dropped(self) -> None:
        links = resolve_links([FormatEntry(itag=22), _direct(18)], DECODABLE)
        assert [link.itag for link in links] == [18]

    def test_metadata_order_preserved(self) -> None:
        entries = [_direct(140), _ciphered(22), _direct(18)]
        links = resolve_links(entries, DECODABLE)
        assert [link.itag for link in links] == [140, 22, 18]

    def test_unknown_itag_described(self) -> None:
        links = resolve_links([_direct(9999)], DECODABLE)
        assert links[0].format == "unknown format #9999"

    def test_custom_describe(self) -> None:
        links = resolve_links([_direct(18)], DECODABLE, describe=lambda itag: f"fmt{itag}")
        assert links[0].format == "fmt18"

    def test_empty_entries(self) -> None:
        assert resolve_links([], DECODABLE) == []


# ---------------------------------------------------------------------------
# select_links
# ---------------------------------------------------------------------------
MUXED_360 = _link(18, "mp4, video, 360p, audio")
MUXED_WEBM = _link(43, "webm, video, 360p, audio")
AUDIO_M4A = _link(140, "m4a, audio, 128k")
VIDEO_1080 = _link(137, "mp4, video, 1080p")
ALL = [MUXED_360, MUXED_WEBM, AUDIO_M4A, VIDEO_1080]


class TestSelectLinks:
    @pytest.mark.parametrize("selector", [False, None, ""])
    def test_falsy_selector_keeps_everything(self, selector) -> None:
        assert select_links(ALL, selector) == ALL

    def test_single_term(self) -> None:
        assert select_links(ALL, "mp4") == [MUXED_360, VIDEO_1080]

    def test_terms_in_selector_order(self) -> None:
        assert select_links(ALL, "m4a, webm") == [AUDIO_M4A, MUXED_WEBM]

    def test_duplicates_preserved(self) -> None:
        assert select_links(ALL, "mp4,360p") == [
            MUXED_360,
            VIDEO_1080,
            MUXED_360,
            MUXED_WEBM,
        ]

    def test_case_insensitive(self) -> None:
        assert select_links(ALL, "WEBM") == [MUXED_WEBM]

    def test_any_matches_everything(self) -> None:
        assert select_links(ALL, "any") == ALL

    def test_any_after_specific_term(self) -> None:
        assert select_links(ALL, "m4a,any") == [AUDIO_M4A, *ALL]

    def test_whitespace_around_terms(self) -> None:
        assert select_links(ALL, "  1080p ,   m4a  ") == [VIDEO_1080, AUDIO_M4A]

    def test_no_match(self) -> None:
        assert select_links(ALL, "flv") == []

    def test_input_not_mutated(self) -> None:
        links = list(ALL)
        select_links(links, "mp4")
        assert links == ALL
