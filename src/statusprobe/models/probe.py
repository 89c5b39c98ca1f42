# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response snapshot and result models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ..errors import ErrorCategory
from .values import ABSENT, DynamicValue

RESULT_BODY_LIMIT = 1024
TRUNCATION_MARKER = "..."


def truncate_text(text: str, limit: int) -> str:
    """Trim `text` to `limit` characters, appending an ellipsis marker when cut."""
    if len(text) > limit:
        return f"{text[:limit]}{TRUNCATION_MARKER}"
    return text


@dataclass(frozen=True)
class ResponseSnapshot:
    """
    One probe's response as seen by the check evaluator.

    Header names are stored lowercased; repeated headers are joined with ", ".
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str = ""
    response_time_ms: float = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", {str(k).lower(): str(v) for k, v in (self.headers or {}).items()})
        object.__setattr__(self, "body", self.body or "")

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup; None when the header is absent."""
        return self.headers.get(str(name).lower())


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check. `actual_value`/`expected_value` are ABSENT when not applicable."""

    type: str
    description: str
    passed: bool
    error: str | None = None
    actual_value: DynamicValue = ABSENT
    expected_value: DynamicValue = ABSENT

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "description": self.description,
            "passed": self.passed,
        }
        if self.error:
            data["error"] = self.error
        if self.actual_value is not ABSENT:
            data["actualValue"] = self.actual_value
        if self.expected_value is not ABSENT:
            data["expectedValue"] = self.expected_value
        return data


@dataclass(frozen=True)
class ProbeResult:
    """
    Final verdict for one probe.

    On transport failure `status_code`, `headers`, `body` and `check_results` are None and
    `error` carries the transport message.
    """

    url: str
    name: str | None
    success: bool
    response_time_ms: float
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status_code: int | None = None
    headers: Mapping[str, str] | None = None
    body: str | None = None
    error: str | None = None
    error_category: ErrorCategory | None = None
    check_results: tuple[CheckResult, ...] | None = None

    @property
    def label(self) -> str:
        return f"{self.name} ({self.url})" if self.name else self.url

    @property
    def failed_checks(self) -> list[CheckResult]:
        return [result for result in self.check_results or () if not result.passed]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "url": self.url,
            "success": self.success,
            "responseTime": self.response_time_ms,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.name is not None:
            data["name"] = self.name
        if self.status_code is not None:
            data["statusCode"] = self.status_code
        if self.headers is not None:
            data["headers"] = dict(self.headers)
        if self.body is not None:
            data["body"] = self.body
        if self.error is not None:
            data["error"] = self.error
        if self.error_category is not None:
            data["errorCategory"] = self.error_category.value
        if self.check_results is not None:
            data["checkResults"] = [result.to_dict() for result in self.check_results]
        return data


__all__ = [
    "CheckResult",
    "ProbeResult",
    "RESULT_BODY_LIMIT",
    "ResponseSnapshot",
    "TRUNCATION_MARKER",
    "truncate_text",
]
