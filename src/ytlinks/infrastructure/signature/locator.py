"""Decipher function locator: finds the signature decode routine in a player script.

The routine always follows the same idiom: its single parameter is split
into characters, passed through a handful of calls on a short-named
helper object, then joined back::

    Xy=function(a){a=a.split("");Ab.cd(a,3);Ab.ef(a,52);return a.join("")}

Matchers are tried in order, most specific first. Call-site matchers pin
the routine by the way the player attaches the decoded signature to the
stream URL; definition matchers fall back to scanning for the idiom
itself. New deployment idioms are added as new matchers.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Sequence
from typing import Protocol

import structlog

from ytlinks.domain.entities.cipher import LocatedRoutine
from ytlinks.infrastructure.signature._js import IDENT, balanced_block, function_definition

log = structlog.get_logger(__name__)

# Minimum number of helper calls in a routine body.
MIN_HELPER_CALLS = 2

_HELPER_CALL_RE = re.compile(
    r"(?<![a-zA-Z0-9_$.])(" + IDENT + r")"
    r"(?:\.(" + IDENT + r")|\[\s*[\"']([^\"']+)[\"']\s*\])\s*\("
)


def _helper_name(parameter: str, body: str) -> str | None:
    """Return the object the body calls most often, if called often enough."""
    calls = Counter(
        m.group(1) for m in _HELPER_CALL_RE.finditer(body) if m.group(1) != parameter
    )
    if not calls:
        return None
    helper, count = calls.most_common(1)[0]
    if count < MIN_HELPER_CALLS:
        return None
    return helper


def _split_statement_re(parameter: str) -> re.Pattern[str]:
    p = re.escape(parameter)
    return re.compile(rf"^\s*{p}\s*=\s*{p}\.split\(\s*(?:\"\"|'')\s*\)")


def qualify(name: str, parameter: str, body: str, matcher: str) -> LocatedRoutine | None:
    """Check a candidate definition against the decode-routine idiom."""
    if not _split_statement_re(parameter).search(body):
        return None
    helper = _helper_name(parameter, body)
    if helper is None:
        return None
    return LocatedRoutine(
        name=name, parameter=parameter, body=body, helper=helper, matcher=matcher
    )


class RoutineMatcher(Protocol):
    """One strategy for finding the decode routine."""

    name: str

    def match(self, script: str) -> LocatedRoutine | None: ...


class CallSiteMatcher:
    """Finds the routine name at a call site, then looks up its definition."""

    def __init__(self, name: str, pattern: str) -> None:
        self.name = name
        self._pattern = re.compile(pattern)

    def match(self, script: str) -> LocatedRoutine | None:
        seen: set[str] = set()
        for m in self._pattern.finditer(script):
            routine = m.group(1)
            if routine in seen:
                continue
            seen.add(routine)
            definition = function_definition(script, routine)
            if definition is None:
                continue
            parameter, body = definition
            located = qualify(routine, parameter, body, self.name)
            if located is not None:
                return located
        return None


class DefinitionMatcher:
    """Scans for definitions that split their parameter into characters.

    ``pattern`` must capture the routine name, its parameter and a named
    group ``open`` on the body's opening brace.
    """

    def __init__(self, name: str, pattern: str) -> None:
        self.name = name
        self._pattern = re.compile(pattern)

    def match(self, script: str) -> LocatedRoutine | None:
        for m in self._pattern.finditer(script):
            body = balanced_block(script, m.start("open"))
            if body is None:
                continue
            located = qualify(m.group(1), m.group(2), body, self.name)
            if located is not None:
                return located
        return None


_SPLIT = r"\s*\2\s*=\s*\2\.split\(\s*(?:\"\"|'')\s*\)"

DEFAULT_MATCHERS: tuple[RoutineMatcher, ...] = (
    CallSiteMatcher(
        "set_encoded_call",
        r"\b[a-zA-Z0-9$]+\s*&&\s*[a-zA-Z0-9$]+\.set\([^,)]+\s*,\s*"
        r"encodeURIComponent\s*\(\s*(" + IDENT + r")\s*\(",
    ),
    CallSiteMatcher(
        "set_plain_call",
        r"\b[cs]\s*&&\s*[adf]\.set\([^,)]+\s*,\s*(" + IDENT + r")\s*\(",
    ),
    CallSiteMatcher(
        "signature_param",
        r"(?:\.sig\s*\|\|\s*|[\"']signature[\"']\s*,\s*)(" + IDENT + r")\s*\(",
    ),
    DefinitionMatcher(
        "assigned_function",
        r"(?<![a-zA-Z0-9_$.])(" + IDENT + r")\s*=\s*function\s*\(\s*(" + IDENT
        + r")\s*\)\s*(?P<open>\{)" + _SPLIT,
    ),
    DefinitionMatcher(
        "declared_function",
        r"\bfunction\s+(" + IDENT + r")\s*\(\s*(" + IDENT
        + r")\s*\)\s*(?P<open>\{)" + _SPLIT,
    ),
)


def locate_decipher_routine(
    script: str,
    matchers: Sequence[RoutineMatcher] = DEFAULT_MATCHERS,
) -> LocatedRoutine | None:
    """Return the first routine any matcher finds, or None (undecodable)."""
    for matcher in matchers:
        located = matcher.match(script)
        if located is not None:
            log.debug(
                "decipher_routine_located",
                matcher=matcher.name,
                routine=located.name,
                helper=located.helper,
            )
            return located

    log.info("decipher_routine_not_found", matchers=[m.name for m in matchers])
    return None
