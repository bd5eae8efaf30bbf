"""Operation sequence builder: turns the decode routine into bound operations."""

from __future__ import annotations

import re
from collections.abc import Mapping

import structlog

from ytlinks.domain.entities.cipher import (
    CipherOperation,
    LocatedRoutine,
    OperationKind,
    OperationSequence,
)
from ytlinks.domain.entities.failures import FailureKind, Outcome
from ytlinks.infrastructure.signature._js import IDENT

log = structlog.get_logger(__name__)

_INT_LITERAL_RE = re.compile(r"\d+")


def _bind_argument(
    args: list[str], parameter: str, kind: OperationKind
) -> int | None:
    """Return the literal argument of a helper call, or None if malformed.

    The working array and the literal may appear in either position.
    """
    if len(args) == 1 and args[0] == parameter and kind is OperationKind.REVERSE:
        return 0
    if len(args) != 2 or parameter not in args:
        return None
    other = args[1] if args[0] == parameter else args[0]
    if not _INT_LITERAL_RE.fullmatch(other):
        return None
    return int(other)


def build_operation_sequence(
    routine: LocatedRoutine,
    kinds: Mapping[str, OperationKind],
) -> Outcome[OperationSequence]:
    """Walk helper calls in textual order and bind their literal arguments.

    Any call that does not fit ``helper.method(array, literal)`` makes
    the whole script undecodable.
    """
    helper = re.escape(routine.helper)
    ref_re = re.compile(rf"(?<![a-zA-Z0-9_$.]){helper}\s*[.\[]")
    call_re = re.compile(
        rf"{helper}\s*(?:\.\s*({IDENT})|\[\s*[\"']([^\"']+)[\"']\s*\])\s*\(([^()]*)\)"
    )

    operations: list[CipherOperation] = []
    for ref in ref_re.finditer(routine.body):
        call = call_re.match(routine.body, ref.start())
        if call is None:
            return _undecodable(routine, "malformed helper call")

        method = call.group(1) or call.group(2)
        kind = kinds.get(method)
        if kind is None:
            return _undecodable(routine, f"undefined helper method {method!r}")
        if kind is OperationKind.UNKNOWN:
            return _undecodable(routine, f"unrecognized helper method {method!r}")

        args = [a.strip() for a in call.group(3).split(",")]
        argument = _bind_argument(args, routine.parameter, kind)
        if argument is None:
            return _undecodable(routine, f"unexpected arguments to {method!r}")

        if kind is OperationKind.REVERSE:
            argument = 0
        operations.append(CipherOperation(kind, argument))

    if not operations:
        return _undecodable(routine, "no helper calls")

    log.debug(
        "operation_sequence_built",
        routine=routine.name,
        operations=[f"{op.kind.value}({op.argument})" for op in operations],
    )
    return Outcome.success(tuple(operations))


def _undecodable(routine: LocatedRoutine, reason: str) -> Outcome[OperationSequence]:
    log.info("operation_sequence_failed", routine=routine.name, reason=reason)
    return Outcome.failed(FailureKind.DECIPHER_UNAVAILABLE, reason)
