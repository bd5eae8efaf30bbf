"""Domain entities for format metadata and resolved download links."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ytlinks.domain.entities.failures import Failure


@dataclass(frozen=True)
class CipherPayload:
    """URL-decoded cipher bundle of one protected stream variant."""

    url: str  # base URL without the signature parameter
    sig_param: str  # query parameter the decoded signature goes under
    signature: str  # encrypted signature


@dataclass(frozen=True)
class FormatEntry:
    """One stream variant from the player response.

    Carries either a ready ``url`` or a ``cipher`` payload. An entry
    with neither had a malformed cipher and cannot be resolved.
    """

    itag: int
    url: str | None = None
    cipher: CipherPayload | None = None


@dataclass(frozen=True)
class ResolvedLink:
    """Direct, time-limited download URL annotated with its format."""

    url: str
    itag: int
    format: str

    def as_dict(self) -> dict[str, Any]:
        return {"url": self.url, "itag": self.itag, "format": self.format}


@dataclass(frozen=True)
class ResolutionResult:
    """Result of one resolution call.

    ``error`` is the user-visible message (set on rate limiting only);
    ``failure`` records why a call came back empty.
    """

    links: list[ResolvedLink] = field(default_factory=list)
    error: str | None = None
    failure: Failure | None = None

    def as_dicts(self) -> list[dict[str, Any]]:
        return [link.as_dict() for link in self.links]
