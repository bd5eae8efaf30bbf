"""Small text helpers for scanning minified player JavaScript."""

from __future__ import annotations

import re

# Minified identifiers: letters, digits, "$" and "_".
IDENT = r"[a-zA-Z_$][a-zA-Z0-9_$]*"

_QUOTES = frozenset("\"'`")


def balanced_block(text: str, open_index: int) -> str | None:
    """Return the contents of the ``{...}`` block opening at ``open_index``.

    String literals are skipped so braces inside them do not count.
    Returns None when ``open_index`` is not a ``{`` or the block never
    closes.
    """
    if open_index >= len(text) or text[open_index] != "{":
        return None

    depth = 0
    quote: str | None = None
    i = open_index
    while i < len(text):
        ch = text[i]
        if quote is not None:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[open_index + 1 : i]
        i += 1
    return None


def function_definition(script: str, name: str) -> tuple[str, str] | None:
    """Find the definition of function ``name`` and return (parameter, body).

    Matches ``name=function(p){...}`` and ``function name(p){...}``.
    Only single-parameter functions qualify.
    """
    escaped = re.escape(name)
    patterns = (
        rf"(?:^|[^a-zA-Z0-9_$.]){escaped}\s*=\s*function\s*\(\s*({IDENT})\s*\)\s*\{{",
        rf"\bfunction\s+{escaped}\s*\(\s*({IDENT})\s*\)\s*\{{",
    )
    for pattern in patterns:
        match = re.search(pattern, script)
        if not match:
            continue
        body = balanced_block(script, match.end() - 1)
        if body is not None:
            return match.group(1), body
    return None
