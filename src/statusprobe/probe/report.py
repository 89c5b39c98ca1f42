# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Log reporting for probe results."""

from __future__ import annotations

import logging

from ..errors import error_category_to_reason
from ..evaluation.values import render_string
from ..models.probe import ProbeResult

logger = logging.getLogger(__name__)


def _status(result: ProbeResult) -> str:
    return str(result.status_code) if result.status_code is not None else "-"


def log_probe_result(result: ProbeResult, log: logging.Logger | None = None) -> None:
    """Emit the per-probe verdict line plus check details."""
    log = log or logger
    summary = f"{result.label} - Status: {_status(result)} - Response time: {result.response_time_ms}ms"

    if result.success:
        log.info("PASS %s", summary)
        if result.check_results:
            log.debug("Check details for %s:", result.label)
            for check in result.check_results:
                log.debug("  PASS %s", check.description)
        return

    log.error("FAIL %s", summary)
    if not result.check_results:
        hint = error_category_to_reason(result.error_category)
        if hint:
            log.error("  Error: %s (%s)", result.error, hint)
        elif result.error:
            log.error("  Error: %s", result.error)
        return
    log.error("  Error: %s", result.error)
    log.debug("Check details for %s:", result.label)
    for check in result.check_results:
        if check.passed:
            log.debug("  PASS %s", check.description)
            continue
        log.error("  FAIL %s", check.description)
        if check.error:
            log.error("    Error: %s", check.error)
        log.error(
            "    Expected: %s, Actual: %s",
            render_string(check.expected_value),
            render_string(check.actual_value),
        )


__all__ = ["log_probe_result"]
