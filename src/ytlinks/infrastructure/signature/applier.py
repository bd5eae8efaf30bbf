"""Sequence applier: replays an operation sequence against one signature."""

from __future__ import annotations

from collections.abc import Iterable

from ytlinks.domain.entities.cipher import CipherOperation, OperationKind
from ytlinks.domain.entities.failures import FailureKind, Outcome


def _out_of_range(op: CipherOperation, length: int) -> Outcome[str]:
    return Outcome.failed(
        FailureKind.PER_ENTRY_DECODE_FAILURE,
        f"{op.kind.value}({op.argument}) out of range for length {length}",
    )


def apply_operations(signature: str, sequence: Iterable[CipherOperation]) -> Outcome[str]:
    """Decode ``signature`` by applying ``sequence`` in order.

    Arguments are checked against the length of the signature as it is
    at that step, not the original length. An out-of-range argument
    fails this signature only.
    """
    chars = list(signature)
    for op in sequence:
        length = len(chars)
        if op.kind is OperationKind.REVERSE:
            chars.reverse()
        elif op.kind is OperationKind.DROP_FRONT:
            if op.argument > length:
                return _out_of_range(op, length)
            del chars[: op.argument]
        elif op.kind is OperationKind.SWAP_WITH_FRONT:
            # Strict bound: an index past the end fails instead of wrapping.
            if op.argument >= length:
                return _out_of_range(op, length)
            chars[0], chars[op.argument] = chars[op.argument], chars[0]
        else:
            return Outcome.failed(
                FailureKind.PER_ENTRY_DECODE_FAILURE,
                f"unsupported operation {op.kind.value}",
            )
    return Outcome.success("".join(chars))
