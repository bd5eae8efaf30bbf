"""Player response -> FormatEntry records."""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qs

import structlog

from ytlinks.domain.entities.links import CipherPayload, FormatEntry

log = structlog.get_logger(__name__)

# Query parameter for the decoded signature when the payload names none.
DEFAULT_SIG_PARAM = "signature"

_CIPHER_KEYS = ("signatureCipher", "cipher")


def parse_cipher(raw: str) -> CipherPayload | None:
    """Decode a URL-encoded cipher bundle (``s=...&sp=sig&url=...``)."""
    fields = parse_qs(raw, keep_blank_values=False)
    url = fields.get("url", [""])[0]
    signature = fields.get("s", [""])[0]
    if not url or not signature:
        return None
    sig_param = fields.get("sp", [DEFAULT_SIG_PARAM])[0] or DEFAULT_SIG_PARAM
    return CipherPayload(url=url, sig_param=sig_param, signature=signature)


def _entry_from_record(record: Any) -> FormatEntry | None:
    if not isinstance(record, dict):
        return None
    itag = record.get("itag")
    if isinstance(itag, bool) or not isinstance(itag, int):
        log.debug("format_record_without_itag", keys=sorted(record))
        return None

    url = record.get("url")
    if isinstance(url, str) and url:
        return FormatEntry(itag=itag, url=url)

    raw = next((record[k] for k in _CIPHER_KEYS if isinstance(record.get(k), str)), "")
    # A missing or malformed cipher still yields an entry; the
    # orchestrator drops it as a per-entry decode failure.
    return FormatEntry(itag=itag, cipher=parse_cipher(raw) if raw else None)


def parse_format_entries(player_response: dict[str, Any]) -> list[FormatEntry]:
    """Collect muxed then adaptive formats, in metadata order."""
    streaming = player_response.get("streamingData")
    if not isinstance(streaming, dict):
        return []

    entries: list[FormatEntry] = []
    for section in ("formats", "adaptiveFormats"):
        records = streaming.get(section)
        if not isinstance(records, list):
            continue
        for record in records:
            entry = _entry_from_record(record)
            if entry is not None:
                entries.append(entry)
    return entries
