# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Value comparator shared by header, body and JSON path checks."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any

from ..models.checks import Operator
from ..models.values import ABSENT
from .values import render_number, render_string

_JS_BACKREF_RE = re.compile(r"\\k<([A-Za-z_][A-Za-z0-9_]*)>")
_JS_NAMED_GROUP_RE = re.compile(r"\(\?<(?=[A-Za-z_])")

MATCH_OPERATORS = frozenset({Operator.MATCHES, Operator.NOT_MATCHES})
NEGATED_OPERATORS = frozenset({Operator.NOT_EQUALS, Operator.NOT_CONTAINS, Operator.NOT_MATCHES})


class PatternError(ValueError):
    """A `matches`/`not_matches` pattern that failed to compile."""


def translate_pattern(pattern: str) -> str:
    """
    Rewrite JavaScript regex syntax that Python reads differently.

    `(?<name>` and `\\k<name>` become `(?P<name>` and `(?P=name)`. An unescaped `$` outside
    a character class becomes `\\Z`: without the `m` flag a JavaScript `$` matches only at
    the very end of the input, while Python's also matches before a trailing newline.
    """
    out: list[str] = []
    in_class = False
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            backref = None if in_class else _JS_BACKREF_RE.match(pattern, i)
            if backref:
                out.append(f"(?P={backref.group(1)})")
                i = backref.end()
                continue
            out.append(pattern[i : i + 2])
            i += 2
            continue
        if in_class:
            in_class = ch != "]"
        elif ch == "[":
            in_class = True
        elif ch == "$":
            out.append(r"\Z")
            i += 1
            continue
        elif _JS_NAMED_GROUP_RE.match(pattern, i):
            out.append("(?P<")
            i += 3
            continue
        out.append(ch)
        i += 1
    return "".join(out)


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    translated = translate_pattern(pattern)
    try:
        return re.compile(translated)
    except re.error as exc:
        raise PatternError(f"Invalid regular expression /{pattern}/: {exc}") from exc


def compare(actual: Any, operator: Operator | str, expected: str | None = None) -> bool:
    """
    Compare an extracted value against an expected string.

    Unknown operators return False. A malformed pattern raises PatternError, which
    callers report as a failed check. Non-numeric operands make greater_than and
    less_than compare NaN, which is always False.
    """
    try:
        op = Operator(operator)
    except ValueError:
        return False

    if op is Operator.EXISTS:
        return actual is not ABSENT and actual is not None
    if op is Operator.NOT_EXISTS:
        return actual is ABSENT or actual is None
    if op is Operator.EQUALS:
        return render_string(actual) == expected
    if op is Operator.NOT_EQUALS:
        return render_string(actual) != expected
    if op is Operator.CONTAINS:
        return (expected or "") in render_string(actual)
    if op is Operator.NOT_CONTAINS:
        return (expected or "") not in render_string(actual)
    if op is Operator.MATCHES:
        return compile_pattern(expected or "").search(render_string(actual)) is not None
    if op is Operator.NOT_MATCHES:
        return compile_pattern(expected or "").search(render_string(actual)) is None
    if op is Operator.GREATER_THAN:
        return render_number(actual) > render_number(ABSENT if expected is None else expected)
    if op is Operator.LESS_THAN:
        return render_number(actual) < render_number(ABSENT if expected is None else expected)
    return False


__all__ = ["MATCH_OPERATORS", "NEGATED_OPERATORS", "PatternError", "compare", "compile_pattern", "translate_pattern"]
