"""Resolution orchestrator: format entries + decipher sequence -> download links.

Per-entry failures are absorbed here: a bad entry is dropped and the
batch continues.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from typing import Literal

import structlog

from ytlinks.domain.entities.cipher import CipherOperation, OperationSequence
from ytlinks.domain.entities.failures import FailureKind, Outcome
from ytlinks.domain.entities.links import FormatEntry, ResolvedLink
from ytlinks.infrastructure.formats.catalog import describe_itag
from ytlinks.infrastructure.signature.applier import apply_operations

log = structlog.get_logger(__name__)

_DescribeFn = Callable[[int], str]
_ApplyFn = Callable[[str, Iterable[CipherOperation]], Outcome[str]]

# Falsy selector = keep every link in metadata order.
Selector = str | Literal[False] | None

# Selector term matching every link.
ANY_FORMAT = "any"

_SELECTOR_SPLIT_RE = re.compile(r"\s*,\s*")


def resolve_links(
    entries: Iterable[FormatEntry],
    sequence: Outcome[OperationSequence],
    *,
    describe: _DescribeFn = describe_itag,
    apply: _ApplyFn = apply_operations,
) -> list[ResolvedLink]:
    """Build download links for ``entries`` in metadata order.

    Direct-URL entries never go through ``apply``. Cipher entries are
    dropped when the script is undecodable or their signature fails.
    """
    links: list[ResolvedLink] = []
    dropped: dict[FailureKind, int] = {}

    def _drop(entry: FormatEntry, kind: FailureKind, reason: str) -> None:
        dropped[kind] = dropped.get(kind, 0) + 1
        log.debug("format_entry_dropped", itag=entry.itag, failure=kind.value, reason=reason)

    for entry in entries:
        if entry.url:
            links.append(ResolvedLink(url=entry.url, itag=entry.itag, format=describe(entry.itag)))
            continue

        if entry.cipher is None:
            _drop(entry, FailureKind.PER_ENTRY_DECODE_FAILURE, "malformed cipher payload")
            continue

        if not sequence.ok or sequence.value is None:
            reason = sequence.failure.reason if sequence.failure else ""
            _drop(entry, FailureKind.DECIPHER_UNAVAILABLE, reason)
            continue

        decoded = apply(entry.cipher.signature, sequence.value)
        if not decoded.ok or decoded.value is None:
            reason = decoded.failure.reason if decoded.failure else ""
            _drop(entry, FailureKind.PER_ENTRY_DECODE_FAILURE, reason)
            continue

        url = f"{entry.cipher.url}&{entry.cipher.sig_param}={decoded.value}"
        links.append(ResolvedLink(url=url, itag=entry.itag, format=describe(entry.itag)))

    log.debug(
        "format_entries_resolved",
        resolved=len(links),
        dropped={kind.value: count for kind, count in dropped.items()},
    )
    return links


def select_links(links: Sequence[ResolvedLink], selector: Selector) -> list[ResolvedLink]:
    """Filter and order ``links`` by a comma-separated selector.

    For each term in order, every link whose format contains the term
    (case-insensitive) is appended. A link matching several terms is
    appended once per term.
    """
    if not selector:
        return list(links)

    terms = [t.lower() for t in _SELECTOR_SPLIT_RE.split(selector.strip()) if t]
    selected: list[ResolvedLink] = []
    for term in terms:
        for link in links:
            if term == ANY_FORMAT or term in link.format.lower():
                selected.append(link)
    return selected
