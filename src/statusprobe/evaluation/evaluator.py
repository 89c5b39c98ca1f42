# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Check evaluation.

`evaluate_checks` maps each check onto one CheckResult, in input order. Evaluation is
pure: it reads only the check and the response snapshot, so independent probes may
evaluate concurrently. Failures inside a single check (bad pattern, unparsable JSON,
invalid status code list) fail that check with an `error` and never affect siblings.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from ..models.checks import (
    CHECK_UNKNOWN,
    ArrayElement,
    BodyCheck,
    Check,
    HeaderCheck,
    JsonPathCheck,
    Operator,
    ResponseTimeCheck,
    StatusCodeCheck,
    UnknownCheck,
)
from ..models.probe import CheckResult, ResponseSnapshot, truncate_text
from ..models.values import ABSENT
from .comparator import MATCH_OPERATORS, NEGATED_OPERATORS, compare, compile_pattern
from .jsonpath import extract, select_element
from .values import parse_json, render_string, to_json

logger = logging.getLogger(__name__)

BODY_DIAGNOSTIC_LIMIT = 100

_STATUS_CODE_RE = re.compile(r"\s*([+-]?\d+)", re.ASCII)


def _describe(*parts: Any) -> str:
    return " ".join(render_string(part) for part in parts if part is not None and part != "")


def _expected(value: Any) -> Any:
    return ABSENT if value is None else value


def parse_status_codes(value: str) -> set[int]:
    """Parse `200|301|302`; each segment must start with an integer."""
    codes: set[int] = set()
    for segment in value.split("|"):
        match = _STATUS_CODE_RE.match(segment)
        if not match:
            raise ValueError(f"Invalid status code {segment.strip()!r} in {value!r}")
        codes.add(int(match.group(1)))
    return codes


def evaluate_status_code(check: StatusCodeCheck, response: ResponseSnapshot) -> CheckResult:
    status_code = response.status_code
    passed = False
    error = None
    try:
        if check.operator in MATCH_OPERATORS:
            found = compile_pattern(check.value).search(str(status_code)) is not None
            passed = found if check.operator is Operator.MATCHES else not found
        else:
            member = status_code in parse_status_codes(check.value)
            passed = member if check.operator is Operator.EQUALS else not member
    except ValueError as exc:
        error = str(exc)
        passed = False

    return CheckResult(
        type=check.type,
        description=_describe("Status code", check.operator.value, check.value),
        passed=passed,
        error=error,
        actual_value=status_code,
        expected_value=check.value,
    )


def evaluate_header(check: HeaderCheck, response: ResponseSnapshot) -> CheckResult:
    header = response.header(check.name)
    passed = False
    error = None
    try:
        if check.operator is Operator.EXISTS:
            passed = header is not None
        elif check.operator is Operator.NOT_EXISTS:
            passed = header is None
        elif header is None:
            # A missing header fails every positive assertion and satisfies every negated one.
            if check.operator in MATCH_OPERATORS:
                compile_pattern(check.value or "")
            passed = check.operator in NEGATED_OPERATORS
        else:
            passed = compare(header, check.operator, check.value)
    except ValueError as exc:
        error = str(exc)
        passed = False

    return CheckResult(
        type=check.type,
        description=_describe("Header", check.name, check.operator.value, check.value),
        passed=passed,
        error=error,
        actual_value=ABSENT if header is None else header,
        expected_value=_expected(check.value),
    )


def evaluate_body(check: BodyCheck, response: ResponseSnapshot) -> CheckResult:
    body = response.body
    passed = False
    error = None
    try:
        if check.operator is Operator.EXISTS:
            passed = len(body) > 0
        elif check.operator is Operator.NOT_EXISTS:
            passed = len(body) == 0
        else:
            passed = compare(body, check.operator, check.value)
    except ValueError as exc:
        error = str(exc)
        passed = False

    return CheckResult(
        type=check.type,
        description=_describe("Body", check.operator.value, check.value),
        passed=passed,
        error=error,
        # Diagnostic only; the comparison above always sees the full body.
        actual_value=truncate_text(body, BODY_DIAGNOSTIC_LIMIT),
        expected_value=_expected(check.value),
    )


def _report_value(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return to_json(value)
    return value


def evaluate_jsonpath(check: JsonPathCheck, response: ResponseSnapshot) -> CheckResult:
    operator = check.operator
    description = _describe("JSON path", check.path, operator.value, check.value)
    passed = False
    error = None
    actual: Any = None
    try:
        document = parse_json(response.body)
        extracted = extract(document, check.path)

        if isinstance(extracted, list) and check.element in (ArrayElement.ANY, ArrayElement.ALL):
            outcomes = [compare(item, operator, check.value) for item in extracted]
            passed = any(outcomes) if check.element is ArrayElement.ANY else all(outcomes)
            return CheckResult(
                type=check.type,
                description=_describe("JSON path", check.path, check.element.value, operator.value, check.value),
                passed=passed,
                actual_value=to_json(extracted),
                expected_value=_expected(check.value),
            )

        selected = select_element(extracted, check.element) if isinstance(extracted, list) else extracted
        compared = selected
        if operator in (Operator.CONTAINS, Operator.NOT_CONTAINS) and isinstance(selected, (dict, list)):
            compared = to_json(selected)
        actual = _report_value(selected)
        passed = compare(compared, operator, check.value)
    except ValueError as exc:
        error = str(exc)
        passed = False

    return CheckResult(
        type=check.type,
        description=description,
        passed=passed,
        error=error,
        actual_value=actual,
        expected_value=_expected(check.value),
    )


def evaluate_response_time(check: ResponseTimeCheck, response: ResponseSnapshot) -> CheckResult:
    elapsed = response.response_time_ms
    if check.operator is Operator.LESS_THAN:
        passed = elapsed < check.value
    else:
        passed = elapsed > check.value

    return CheckResult(
        type=check.type,
        description=f"Response time {check.operator.value} {render_string(check.value)}ms",
        passed=passed,
        actual_value=elapsed,
        expected_value=check.value,
    )


def _unknown(check_type: Any) -> CheckResult:
    return CheckResult(
        type=CHECK_UNKNOWN,
        description="Unknown check type",
        passed=False,
        error=f"Unknown check type: {check_type}",
    )


def evaluate_check(check: Check, response: ResponseSnapshot) -> CheckResult:
    """Evaluate one check; never raises."""
    try:
        if isinstance(check, StatusCodeCheck):
            return evaluate_status_code(check, response)
        if isinstance(check, HeaderCheck):
            return evaluate_header(check, response)
        if isinstance(check, BodyCheck):
            return evaluate_body(check, response)
        if isinstance(check, JsonPathCheck):
            return evaluate_jsonpath(check, response)
        if isinstance(check, ResponseTimeCheck):
            return evaluate_response_time(check, response)
        if isinstance(check, UnknownCheck):
            return _unknown(check.check_type)
        return _unknown(getattr(check, "type", type(check).__name__))
    except Exception as exc:  # noqa: BLE001
        logger.exception("Check evaluation crashed for %r", check)
        return CheckResult(
            type=str(getattr(check, "type", CHECK_UNKNOWN)),
            description=f"Check {getattr(check, 'type', CHECK_UNKNOWN)} could not be evaluated",
            passed=False,
            error=str(exc) or type(exc).__name__,
        )


def evaluate_checks(checks: Iterable[Check], response: ResponseSnapshot) -> list[CheckResult]:
    """Evaluate every check against one response, preserving order."""
    return [evaluate_check(check, response) for check in checks]


__all__ = [
    "BODY_DIAGNOSTIC_LIMIT",
    "evaluate_body",
    "evaluate_check",
    "evaluate_checks",
    "evaluate_header",
    "evaluate_jsonpath",
    "evaluate_response_time",
    "evaluate_status_code",
    "parse_status_codes",
]
