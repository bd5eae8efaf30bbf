"""Helper operation classifier.

Each method on the helper object implements one primitive array
operation. Classification is structural, on the method body alone,
with whatever parameter names the deployment chose::

    reverse:          function(a){a.reverse()}
    drop front:       function(a,b){a.splice(0,b)}
    swap with front:  function(a,b){var c=a[0];a[0]=a[b%a.length];a[b%a.length]=c}
"""

from __future__ import annotations

import re
from collections.abc import Iterator

import structlog

from ytlinks.domain.entities.cipher import OperationKind
from ytlinks.infrastructure.signature._js import IDENT, balanced_block

log = structlog.get_logger(__name__)

_MEMBER_RE = re.compile(
    r"(?:\"([^\"]+)\"|'([^']+)'|(?<![a-zA-Z0-9_$.\"'])(" + IDENT + r"))"
    r"\s*:\s*function\s*\(([^)]*)\)\s*(?P<open>\{)"
)


def _object_literal(script: str, helper: str) -> str | None:
    """Return the body of the ``helper={...}`` object literal."""
    escaped = re.escape(helper)
    patterns = (
        rf"\b(?:var|let|const)\s+{escaped}\s*=\s*\{{",
        rf"(?<![a-zA-Z0-9_$.]){escaped}\s*=\s*\{{",
    )
    for pattern in patterns:
        for m in re.finditer(pattern, script):
            body = balanced_block(script, m.end() - 1)
            if body is not None:
                return body
    return None


def _iter_members(obj: str) -> Iterator[tuple[str, list[str], str]]:
    """Yield (name, parameters, body) for each function-valued member."""
    pos = 0
    while True:
        m = _MEMBER_RE.search(obj, pos)
        if m is None:
            return
        body = balanced_block(obj, m.start("open"))
        if body is None:
            return
        name = m.group(1) or m.group(2) or m.group(3)
        params = [p.strip() for p in m.group(4).split(",") if p.strip()]
        yield name, params, body
        pos = m.start("open") + len(body) + 2


def classify_body(params: list[str], body: str) -> OperationKind:
    """Classify one helper method body."""
    if not params:
        return OperationKind.UNKNOWN
    arr = re.escape(params[0])

    if len(params) == 1 or len(params) == 2:
        if re.fullmatch(rf"\s*{arr}\.reverse\(\s*\)\s*;?\s*", body):
            return OperationKind.REVERSE

    if len(params) != 2:
        return OperationKind.UNKNOWN
    arg = re.escape(params[1])

    if re.fullmatch(rf"\s*{arr}\.splice\(\s*0\s*,\s*{arg}\s*\)\s*;?\s*", body):
        return OperationKind.DROP_FRONT

    modulo = rf"{arg}\s*%\s*{arr}\.length"
    swap = (
        rf"\s*var\s+(?P<tmp>{IDENT})\s*=\s*{arr}\[\s*0\s*\]\s*;"
        rf"\s*{arr}\[\s*0\s*\]\s*=\s*{arr}\[\s*{modulo}\s*\]\s*;"
        rf"\s*{arr}\[\s*{arg}(?:\s*%\s*{arr}\.length)?\s*\]\s*=\s*(?P=tmp)\s*;?\s*"
    )
    if re.fullmatch(swap, body):
        return OperationKind.SWAP_WITH_FRONT

    return OperationKind.UNKNOWN


def classify_helper_methods(script: str, helper: str) -> dict[str, OperationKind] | None:
    """Map every method of ``helper`` to the primitive it implements.

    Returns None when the helper object is not defined in ``script``.
    """
    obj = _object_literal(script, helper)
    if obj is None:
        log.info("helper_object_not_found", helper=helper)
        return None

    kinds = {name: classify_body(params, body) for name, params, body in _iter_members(obj)}
    log.debug(
        "helper_methods_classified",
        helper=helper,
        methods={name: kind.value for name, kind in kinds.items()},
    )
    return kinds
