# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Check model.

A check is one declarative assertion about a probe's response. Each variant is a
frozen dataclass carrying only the fields it needs, and validates its operator
against the subset legal for that variant when constructed. `Check` is the closed
union of the variants; the evaluator dispatches over it exhaustively.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from ..errors import CheckDefinitionError


class Operator(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    MATCHES = "matches"
    NOT_MATCHES = "not_matches"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    EXISTS = "exists"
    NOT_EXISTS = "not_exists"


class ArrayElement(str, Enum):
    """Selection policy applied when a JSON path resolves to an array."""

    FIRST = "first"
    LAST = "last"
    ANY = "any"
    ALL = "all"


COMPARISON_OPERATORS = frozenset(Operator)
STATUS_CODE_OPERATORS = frozenset({Operator.EQUALS, Operator.NOT_EQUALS, Operator.MATCHES, Operator.NOT_MATCHES})
RESPONSE_TIME_OPERATORS = frozenset({Operator.LESS_THAN, Operator.GREATER_THAN})

CHECK_STATUS_CODE = "status_code"
CHECK_HEADER = "header"
CHECK_BODY = "body"
CHECK_JSONPATH = "jsonpath"
CHECK_RESPONSE_TIME = "response_time"
CHECK_UNKNOWN = "unknown"


def _coerce_operator(value: Any, allowed: frozenset[Operator], check_type: str) -> Operator:
    try:
        operator = Operator(value)
    except ValueError:
        raise CheckDefinitionError(f"Unknown operator {value!r} for {check_type} check") from None
    if operator not in allowed:
        raise CheckDefinitionError(f"Operator {operator.value!r} is not supported by {check_type} checks")
    return operator


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class StatusCodeCheck:
    """Status code assertion; `value` is `200|301` for (not_)equals or a regex for (not_)matches."""

    operator: Operator
    value: str
    type: str = field(default=CHECK_STATUS_CODE, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", _coerce_operator(self.operator, STATUS_CODE_OPERATORS, self.type))
        if self.value is None:
            raise CheckDefinitionError("status_code checks require a value")
        object.__setattr__(self, "value", _optional_text(self.value))


@dataclass(frozen=True)
class HeaderCheck:
    name: str
    operator: Operator
    value: str | None = None
    type: str = field(default=CHECK_HEADER, init=False)

    def __post_init__(self) -> None:
        if not self.name or not str(self.name).strip():
            raise CheckDefinitionError("header checks require a header name")
        object.__setattr__(self, "name", str(self.name))
        object.__setattr__(self, "operator", _coerce_operator(self.operator, COMPARISON_OPERATORS, self.type))
        object.__setattr__(self, "value", _optional_text(self.value))


@dataclass(frozen=True)
class BodyCheck:
    operator: Operator
    value: str | None = None
    type: str = field(default=CHECK_BODY, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", _coerce_operator(self.operator, COMPARISON_OPERATORS, self.type))
        object.__setattr__(self, "value", _optional_text(self.value))


@dataclass(frozen=True)
class JsonPathCheck:
    """
    JSON body assertion.

    `element` picks which array member is compared when `path` resolves to an array:
    an ArrayElement policy or a zero-based index.
    """

    path: str
    operator: Operator
    value: str | None = None
    element: ArrayElement | int = ArrayElement.FIRST
    type: str = field(default=CHECK_JSONPATH, init=False)

    def __post_init__(self) -> None:
        if self.path is None or not str(self.path).strip():
            raise CheckDefinitionError("jsonpath checks require a path")
        object.__setattr__(self, "path", str(self.path))
        object.__setattr__(self, "operator", _coerce_operator(self.operator, COMPARISON_OPERATORS, self.type))
        object.__setattr__(self, "value", _optional_text(self.value))
        object.__setattr__(self, "element", _coerce_element(self.element))


def _coerce_element(value: Any) -> ArrayElement | int:
    if value is None:
        return ArrayElement.FIRST
    if isinstance(value, ArrayElement):
        return value
    if isinstance(value, bool):
        raise CheckDefinitionError(f"Invalid array element selector: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise CheckDefinitionError(f"Array element index must be non-negative: {value}")
        return value
    text = str(value).strip().lower()
    if text.isascii() and text.isdigit():
        return int(text)
    try:
        return ArrayElement(text)
    except ValueError:
        raise CheckDefinitionError(f"Invalid array element selector: {value!r}") from None


@dataclass(frozen=True)
class ResponseTimeCheck:
    """Latency threshold in milliseconds."""

    operator: Operator
    value: float
    type: str = field(default=CHECK_RESPONSE_TIME, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", _coerce_operator(self.operator, RESPONSE_TIME_OPERATORS, self.type))
        if isinstance(self.value, bool) or self.value is None:
            raise CheckDefinitionError("response_time checks require a numeric value")
        try:
            threshold = float(self.value)
        except (TypeError, ValueError):
            raise CheckDefinitionError(f"Invalid response_time threshold: {self.value!r}") from None
        object.__setattr__(self, "value", int(threshold) if threshold.is_integer() else threshold)


@dataclass(frozen=True)
class UnknownCheck:
    """A check whose type is not recognised; evaluates to a single failed result."""

    check_type: str
    type: str = field(default=CHECK_UNKNOWN, init=False)


Check = Union[StatusCodeCheck, HeaderCheck, BodyCheck, JsonPathCheck, ResponseTimeCheck, UnknownCheck]


def check_from_mapping(data: Mapping[str, Any]) -> Check:
    """Build a Check variant from a configuration mapping."""
    if not isinstance(data, Mapping):
        raise CheckDefinitionError("Check definitions must be objects")
    check_type = data.get("type")
    operator = data.get("operator")
    value = data.get("value")

    if check_type == CHECK_STATUS_CODE:
        return StatusCodeCheck(operator=operator, value=value)
    if check_type == CHECK_HEADER:
        return HeaderCheck(name=data.get("name"), operator=operator, value=value)
    if check_type == CHECK_BODY:
        return BodyCheck(operator=operator, value=value)
    if check_type == CHECK_JSONPATH:
        return JsonPathCheck(path=data.get("path"), operator=operator, value=value, element=data.get("element"))
    if check_type == CHECK_RESPONSE_TIME:
        return ResponseTimeCheck(operator=operator, value=value)
    return UnknownCheck(check_type=str(check_type))


__all__ = [
    "ArrayElement",
    "BodyCheck",
    "CHECK_BODY",
    "CHECK_HEADER",
    "CHECK_JSONPATH",
    "CHECK_RESPONSE_TIME",
    "CHECK_STATUS_CODE",
    "CHECK_UNKNOWN",
    "COMPARISON_OPERATORS",
    "Check",
    "HeaderCheck",
    "JsonPathCheck",
    "Operator",
    "RESPONSE_TIME_OPERATORS",
    "ResponseTimeCheck",
    "STATUS_CODE_OPERATORS",
    "StatusCodeCheck",
    "UnknownCheck",
    "check_from_mapping",
]
