# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Batch runner: fan probes out concurrently or run them one after another."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone

from ..errors import ErrorCategory
from ..models.batch import BatchSpec, ProbeSpec
from ..models.probe import ProbeResult
from .engine import ProbeEngine
from .report import log_probe_result

logger = logging.getLogger(__name__)


class BatchRunner:
    """
    Runs every probe of a BatchSpec and returns results in input order.

    Concurrent mode submits all probes before waiting on any of them; the pool has one
    worker per probe unless `max_workers` caps it. Sequential mode starts each probe
    only after the previous one finished. Verdicts do not depend on the mode.
    """

    def __init__(self, engine: ProbeEngine | None = None, *, max_workers: int | None = None):
        self._owns_engine = engine is None
        self.engine = engine or ProbeEngine()
        self.max_workers = max_workers if max_workers is not None else self.engine.settings.max_workers

    def close(self) -> None:
        """Release the engine this runner created; a caller-supplied engine is left open."""
        if self._owns_engine:
            self.engine.close()

    def __enter__(self) -> BatchRunner:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()

    def run(self, batch: BatchSpec, *, concurrent: bool = True, emit_log: bool = True) -> list[ProbeResult]:
        logger.info("Starting to check %d URLs", len(batch.probes))
        if concurrent:
            logger.debug("Running checks in concurrent mode")
            results = self._run_concurrent(batch, emit_log)
        else:
            logger.debug("Running checks in sequential mode")
            results = [self._run_one(probe, batch, emit_log) for probe in batch.probes]
        return results

    def _run_concurrent(self, batch: BatchSpec, emit_log: bool) -> list[ProbeResult]:
        if not batch.probes:
            return []
        workers = min(self.max_workers or len(batch.probes), len(batch.probes))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="statusprobe") as executor:
            futures: list[Future[ProbeResult]] = [
                executor.submit(self._run_one, probe, batch, emit_log) for probe in batch.probes
            ]
            return [future.result() for future in futures]

    def _run_one(self, probe: ProbeSpec, batch: BatchSpec, emit_log: bool) -> ProbeResult:
        try:
            result = self.engine.run(probe, batch)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Probe %s crashed", probe.url)
            result = ProbeResult(
                url=probe.url,
                name=probe.name,
                success=False,
                response_time_ms=0,
                timestamp=datetime.now(timezone.utc),
                error=str(exc) or type(exc).__name__,
                error_category=ErrorCategory.UNKNOWN_ERROR,
            )
        if emit_log:
            log_probe_result(result)
        return result


__all__ = ["BatchRunner"]
