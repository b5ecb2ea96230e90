"""Source-to-source expansion of `define_routes!(...)` invocations.

Scans a Python template file, compiles the body of every invocation with
the route compiler, and splices the generated builder chain in its place.
Intended to run as a pre-build step:

    routes.py.in  --expand_source-->  routes.py
"""

from __future__ import annotations

import logging

from routegen.compiler.generator import compile_routes
from routegen.core.config import RouteGenConfig, get_config
from routegen.dsl.errors import RouteSyntaxError

logger = logging.getLogger(__name__)


class ExpansionError(RouteSyntaxError):
    """Raised when a template invocation cannot be delimited."""

    label = "Expansion error"


def expand_source(text: str, config: RouteGenConfig | None = None) -> str:
    """Replace every macro invocation in ``text`` with generated code."""
    config = config or get_config()
    macro = config.macro_name

    out: list[str] = []
    count = 0
    last = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "#":
            i = _skip_comment(text, i)
            continue
        if ch in ('"', "'"):
            i = _skip_string(text, i)
            continue
        if text.startswith(macro, i) and not _is_word_char(text, i - 1):
            body_start = _find_open_paren(text, i + len(macro))
            if body_start is not None:
                body_end = _find_close_paren(text, body_start)
                if body_end is None:
                    line, column = _position(text, i)
                    raise ExpansionError(f"Unterminated {macro}( invocation", line, column)

                line, column = _position(text, body_start)
                body = text[body_start:body_end]
                out.append(text[last:i])
                out.append(compile_routes(body, config, line=line, column=column))
                count += 1
                last = i = body_end + 1
                continue
        i += 1

    out.append(text[last:])
    logger.debug("Expanded %d %s invocation(s)", count, macro)
    return "".join(out)


# ---------------------------------------------------------------------------
# Scanning helpers
# ---------------------------------------------------------------------------


def _is_word_char(text: str, index: int) -> bool:
    return index >= 0 and (text[index].isalnum() or text[index] == "_")


def _position(text: str, index: int) -> tuple[int, int]:
    """Return the 1-based (line, column) of ``index``."""
    line = text.count("\n", 0, index) + 1
    column = index - (text.rfind("\n", 0, index) + 1) + 1
    return line, column


def _skip_comment(text: str, i: int) -> int:
    end = text.find("\n", i)
    return len(text) if end == -1 else end


def _skip_string(text: str, i: int) -> int:
    """Return the index just past the string literal starting at ``i``."""
    quote = text[i]
    if text.startswith(quote * 3, i):
        delimiter = quote * 3
        j = i + 3
        while j < len(text):
            if text[j] == "\\":
                j += 2
                continue
            if text.startswith(delimiter, j):
                return j + 3
            j += 1
        return len(text)

    j = i + 1
    while j < len(text):
        if text[j] == "\\":
            j += 2
            continue
        if text[j] == quote or text[j] == "\n":
            return j + 1
        j += 1
    return len(text)


def _find_open_paren(text: str, i: int) -> int | None:
    """Return the index after '(' if only whitespace separates it from ``i``."""
    while i < len(text) and text[i] in " \t":
        i += 1
    if i < len(text) and text[i] == "(":
        return i + 1
    return None


def _find_close_paren(text: str, i: int) -> int | None:
    """Return the index of the ')' matching an already-consumed '('."""
    depth = 1
    while i < len(text):
        ch = text[i]
        if ch == "#":
            i = _skip_comment(text, i)
            continue
        if ch in ('"', "'"):
            i = _skip_string(text, i)
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None
