# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for StatusProbe."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .batch import BatchSpec, ProbeSpec
from .checks import (
    ArrayElement,
    BodyCheck,
    Check,
    HeaderCheck,
    JsonPathCheck,
    Operator,
    ResponseTimeCheck,
    StatusCodeCheck,
    UnknownCheck,
    check_from_mapping,
)
from .probe import CheckResult, ProbeResult, ResponseSnapshot
from .values import ABSENT

__all__ = [
    "ABSENT",
    "ArrayElement",
    "BatchSpec",
    "BodyCheck",
    "Check",
    "CheckResult",
    "HeaderCheck",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "JsonPathCheck",
    "Operator",
    "ProbeResult",
    "ProbeSpec",
    "ResponseSnapshot",
    "ResponseTimeCheck",
    "StatusCodeCheck",
    "UnknownCheck",
    "check_from_mapping",
]
