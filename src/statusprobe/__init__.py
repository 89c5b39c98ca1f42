# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
StatusProbe package entrypoint.

This package probes HTTP(S) endpoints and evaluates each response against declarative
checks (status code, headers, body, JSON path, response time) to produce a pass/fail
verdict with per-check diagnostics. HTTP behavior is abstracted behind an injectable
client interface, and domain objects are modeled with typed dataclasses.
"""

from .config import HttpSettings, load_http_settings
from .errors import CheckDefinitionError, ConfigError, ErrorCategory, StatusProbeError
from .evaluation import compare, evaluate_check, evaluate_checks, extract
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .loader import load_batch_spec, parse_batch_spec
from .log import setup_logging
from .models import (
    ABSENT,
    ArrayElement,
    BatchSpec,
    BodyCheck,
    Check,
    CheckResult,
    HeaderCheck,
    JsonPathCheck,
    Operator,
    ProbeResult,
    ProbeSpec,
    ResponseSnapshot,
    ResponseTimeCheck,
    StatusCodeCheck,
    UnknownCheck,
)
from .probe import BatchRunner, ProbeEngine
from .runtime import StatusProbe, check_url, check_urls
from .version import __version__

__all__ = [
    "ABSENT",
    "ArrayElement",
    "BatchRunner",
    "BatchSpec",
    "BodyCheck",
    "Check",
    "CheckDefinitionError",
    "CheckResult",
    "ConfigError",
    "ErrorCategory",
    "HeaderCheck",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "JsonPathCheck",
    "Operator",
    "ProbeEngine",
    "ProbeResult",
    "ProbeSpec",
    "ResponseSnapshot",
    "ResponseTimeCheck",
    "StatusCodeCheck",
    "StatusProbe",
    "StatusProbeError",
    "StubHttpClient",
    "UnknownCheck",
    "check_url",
    "check_urls",
    "compare",
    "create_default_http_client",
    "evaluate_check",
    "evaluate_checks",
    "extract",
    "load_batch_spec",
    "load_http_settings",
    "parse_batch_spec",
    "setup_logging",
    "__version__",
]
