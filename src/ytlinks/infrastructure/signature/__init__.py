"""Signature cipher decoder.

Locator -> Classifier -> Builder derive an operation sequence once per
player script; the Applier replays it per signature.
"""

from __future__ import annotations

from ytlinks.domain.entities.cipher import OperationSequence
from ytlinks.domain.entities.failures import FailureKind, Outcome

from .applier import apply_operations
from .builder import build_operation_sequence
from .classifier import classify_helper_methods
from .locator import DEFAULT_MATCHERS, locate_decipher_routine


def derive_operation_sequence(script: str) -> Outcome[OperationSequence]:
    """Derive the decipher sequence for one player script.

    Failure kind is always DECIPHER_UNAVAILABLE: the script uses an idiom
    we do not recognize.
    """
    routine = locate_decipher_routine(script)
    if routine is None:
        return Outcome.failed(FailureKind.DECIPHER_UNAVAILABLE, "decode routine not found")

    kinds = classify_helper_methods(script, routine.helper)
    if kinds is None:
        return Outcome.failed(
            FailureKind.DECIPHER_UNAVAILABLE,
            f"helper object {routine.helper!r} not found",
        )

    return build_operation_sequence(routine, kinds)


__all__ = [
    "DEFAULT_MATCHERS",
    "apply_operations",
    "build_operation_sequence",
    "classify_helper_methods",
    "derive_operation_sequence",
    "locate_decipher_routine",
]
