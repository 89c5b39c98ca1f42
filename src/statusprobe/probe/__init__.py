# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe orchestration: single-probe engine, batch runner and result reporting."""

from .batch import BatchRunner
from .engine import ProbeEngine, default_checks, summarize_failures
from .report import log_probe_result

__all__ = ["BatchRunner", "ProbeEngine", "default_checks", "log_probe_result", "summarize_failures"]
