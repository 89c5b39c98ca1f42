# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe engine: one request, one check evaluation, one verdict."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from datetime import datetime, timezone

from ..config import HttpSettings, load_http_settings
from ..errors import ErrorCategory
from ..evaluation.evaluator import evaluate_checks
from ..evaluation.values import render_string
from ..http.client import HttpClient, create_default_http_client
from ..http.headers import has_header
from ..http.models import HttpRequest
from ..models.batch import BatchSpec, ProbeSpec
from ..models.checks import Check, Operator, StatusCodeCheck
from ..models.probe import RESULT_BODY_LIMIT, CheckResult, ProbeResult, ResponseSnapshot, truncate_text

logger = logging.getLogger(__name__)

BODYLESS_METHODS = frozenset({"GET", "HEAD"})


def _elapsed_ms(started: float) -> int:
    return int(round((time.monotonic() - started) * 1000))


def default_checks(probe: ProbeSpec, batch: BatchSpec | None = None) -> tuple[Check, ...]:
    """Checks to run: the probe's explicit list, else a status code check from its success codes."""
    if probe.checks:
        return probe.checks
    codes = probe.effective_success_codes(batch)
    return (StatusCodeCheck(operator=Operator.EQUALS, value="|".join(str(code) for code in codes)),)


def summarize_failures(results: Sequence[CheckResult]) -> str:
    """Join failed checks as `<description> - Expected: <e>, Actual: <a>` separated by "; "."""
    return "; ".join(
        f"{result.description} - Expected: {render_string(result.expected_value)}, "
        f"Actual: {render_string(result.actual_value)}"
        for result in results
        if not result.passed
    )


def build_request(probe: ProbeSpec, batch: BatchSpec | None = None) -> HttpRequest:
    headers = dict(probe.headers)
    if probe.body and probe.content_type and not has_header(headers, "content-type"):
        headers["content-type"] = probe.content_type
    body = probe.body if probe.body and probe.method not in BODYLESS_METHODS else None
    return HttpRequest(
        url=probe.url,
        method=probe.method,
        headers=headers,
        body=body,
        timeout=probe.effective_timeout_ms(batch) / 1000,
    )


class ProbeEngine:
    """Runs a single probe against an injectable HttpClient."""

    def __init__(self, http_client: HttpClient | None = None, settings: HttpSettings | None = None):
        self.settings = settings or load_http_settings()
        # close() only releases a client built here.
        self._owns_client = http_client is None
        self.http_client = http_client or create_default_http_client(self.settings)

    def close(self) -> None:
        if self._owns_client and hasattr(self.http_client, "close"):
            self.http_client.close()

    def __enter__(self) -> ProbeEngine:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()

    def run(self, probe: ProbeSpec, batch: BatchSpec | None = None) -> ProbeResult:
        logger.debug("Checking URL: %s (%s)", probe.url, probe.name or "")
        started = time.monotonic()
        response = self.http_client.request(build_request(probe, batch))
        elapsed = _elapsed_ms(started)

        if not response.ok or response.status_code is None:
            return ProbeResult(
                url=probe.url,
                name=probe.name,
                success=False,
                response_time_ms=elapsed,
                timestamp=datetime.now(timezone.utc),
                error=response.error_message or "Request failed",
                error_category=response.error_category or ErrorCategory.UNKNOWN_ERROR,
            )

        snapshot = ResponseSnapshot(
            status_code=response.status_code,
            headers=response.headers,
            body=response.text,
            response_time_ms=elapsed,
        )
        results = tuple(evaluate_checks(default_checks(probe, batch), snapshot))
        success = all(result.passed for result in results)

        return ProbeResult(
            url=probe.url,
            name=probe.name,
            success=success,
            response_time_ms=elapsed,
            timestamp=datetime.now(timezone.utc),
            status_code=snapshot.status_code,
            headers=dict(snapshot.headers),
            body=truncate_text(snapshot.body, RESULT_BODY_LIMIT),
            error=None if success else summarize_failures(results),
            check_results=results,
        )


__all__ = ["BODYLESS_METHODS", "ProbeEngine", "build_request", "default_checks", "summarize_failures"]
