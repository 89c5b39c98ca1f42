# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
String and number coercions for dynamic values.

Values reaching the comparator come from headers, bodies and parsed JSON, so they may
be str, int, float, bool, None, list, dict or ABSENT. Existing check files assume
JavaScript coercion rules (`String(x)`, `Number(x)`,
`JSON.stringify(x)`), which these helpers reproduce:

- render_string(30) == "30", render_string(1.5) == "1.5", render_string(True) == "true"
- render_string(None) == "null", render_string(ABSENT) == "undefined"
- render_string([1, "a"]) == "1,a", render_string({...}) == "[object Object]"
- render_number("  42 ") == 42.0, render_number("") == 0.0, render_number("abc") is NaN
"""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal
from typing import Any

from ..models.values import ABSENT

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_INFINITY_RE = re.compile(r"([+-]?)Infinity")
_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}
_RADIX_DIGITS = {16: re.compile(r"[0-9a-fA-F]+"), 8: re.compile(r"[0-7]+"), 2: re.compile(r"[01]+")}

NAN = float("nan")


def format_number(value: float) -> str:
    """Render a number the way JavaScript's Number#toString does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if float(value).is_integer() and abs(value) < 1e21:
        return str(int(value))

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(float(value)))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k  # position of the decimal point relative to the digit string

    if k <= n <= 21:
        return f"{sign}{digits}{'0' * (n - k)}"
    if 0 < n <= 21:
        return f"{sign}{digits[:n]}.{digits[n:]}"
    if -6 < n <= 0:
        return f"{sign}0.{'0' * -n}{digits}"
    e = n - 1
    mantissa = digits[0] if k == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{sign}{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"


def render_string(value: Any) -> str:
    """String rendering used by equals/contains/matches."""
    if value is ABSENT:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value) if abs(value) < 10**21 else format_number(float(value))
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None or item is ABSENT else render_string(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def _parse_numeric_string(text: str) -> float:
    stripped = text.strip()
    if not stripped:
        return 0.0
    if _DECIMAL_RE.fullmatch(stripped):
        return float(stripped)
    infinity = _INFINITY_RE.fullmatch(stripped)
    if infinity:
        return -math.inf if infinity.group(1) == "-" else math.inf
    radix = _RADIX_PREFIXES.get(stripped[:2].lower())
    if radix and _RADIX_DIGITS[radix].fullmatch(stripped[2:]):
        return float(int(stripped[2:], radix))
    return NAN


def render_number(value: Any) -> float:
    """Numeric rendering used by greater_than/less_than; NaN when not numeric."""
    if value is ABSENT:
        return NAN
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return _parse_numeric_string(value)
    if isinstance(value, (list, tuple)):
        return _parse_numeric_string(render_string(value))
    return NAN


def _json_string(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def to_json(value: Any) -> str:
    """
    Compact JSON rendering (JSON.stringify) of a parsed JSON value.

    Numbers use the same rendering as String(x) (`1e-7`, not `1e-07`); NaN and
    infinities become null. ABSENT members are dropped from objects and written as
    null inside arrays.
    """
    if value is None or value is ABSENT:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return "null"
        return render_string(value)
    if isinstance(value, str):
        return _json_string(value)
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(to_json(item) for item in value) + "]"
    if isinstance(value, dict):
        members = (f"{_json_string(str(k))}:{to_json(v)}" for k, v in value.items() if v is not ABSENT)
        return "{" + ",".join(members) + "}"
    return _json_string(str(value))


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name} in JSON")


def parse_json(text: str) -> Any:
    """Strict JSON parse (NaN/Infinity literals are rejected); raises ValueError."""
    return json.loads(text, parse_constant=_reject_constant)


__all__ = [
    "NAN",
    "format_number",
    "parse_json",
    "render_number",
    "render_string",
    "to_json",
]
