"""Domain entities for signature deciphering.

Pure value objects, no framework dependencies, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OperationKind(str, Enum):
    """Primitive array operations a player's helper object may implement."""

    REVERSE = "reverse"
    DROP_FRONT = "drop_front"
    SWAP_WITH_FRONT = "swap_with_front"
    UNKNOWN = "unknown"  # classifier output only, never part of a sequence


@dataclass(frozen=True)
class CipherOperation:
    """One argument-bound step of a decipher sequence."""

    kind: OperationKind
    argument: int = 0

    @classmethod
    def reverse(cls) -> CipherOperation:
        return cls(OperationKind.REVERSE)

    @classmethod
    def drop_front(cls, count: int) -> CipherOperation:
        return cls(OperationKind.DROP_FRONT, count)

    @classmethod
    def swap_with_front(cls, index: int) -> CipherOperation:
        return cls(OperationKind.SWAP_WITH_FRONT, index)


# Order is load-bearing: replaying the same steps in another order
# yields a different signature.
OperationSequence = tuple[CipherOperation, ...]


@dataclass(frozen=True)
class LocatedRoutine:
    """Decode routine found inside a player script."""

    name: str
    parameter: str  # working-array variable
    body: str
    helper: str  # object whose methods implement the primitives
    matcher: str = ""
