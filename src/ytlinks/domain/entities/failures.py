"""Failure taxonomy and explicit decode outcomes.

Every decode step returns an ``Outcome`` instead of raising, so callers
inspect the failure kind rather than relying on ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class FailureKind(str, Enum):
    """Why (part of) a resolution produced fewer links than expected."""

    # Whole-call failures: empty result.
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    METADATA_ABSENT = "metadata_absent"
    # Absorbed by the orchestrator.
    DECIPHER_UNAVAILABLE = "decipher_unavailable"
    PER_ENTRY_DECODE_FAILURE = "per_entry_decode_failure"


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    reason: str = ""


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Success value or failure of a single decode step."""

    value: T | None = None
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failed(cls, kind: FailureKind, reason: str = "") -> Outcome[T]:
        return cls(failure=Failure(kind, reason))
