# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level StatusProbe facade and convenience entry points."""

from __future__ import annotations

import os
from collections.abc import Iterable
from contextlib import suppress

from .config import HttpSettings, load_http_settings
from .http.client import HttpClient, create_default_http_client
from .loader import load_batch_spec
from .models.batch import DEFAULT_TIMEOUT_MS, BatchSpec, ProbeSpec
from .models.probe import ProbeResult
from .probe.batch import BatchRunner
from .probe.engine import ProbeEngine


class StatusProbe:
    """
    Convenience wrapper that wires one shared HTTP client into the probe engine and
    batch runner, and closes it on exit.
    """

    def __init__(self, http_client: HttpClient | None = None, settings: HttpSettings | None = None):
        self.http_settings = settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.engine = ProbeEngine(self.http_client, self.http_settings)
        self.runner = BatchRunner(self.engine)

    def run(self, batch: BatchSpec, *, concurrent: bool = True, emit_log: bool = True) -> list[ProbeResult]:
        return self.runner.run(batch, concurrent=concurrent, emit_log=emit_log)

    def run_probe(self, probe: ProbeSpec, batch: BatchSpec | None = None) -> ProbeResult:
        return self.engine.run(probe, batch)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> StatusProbe:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


def check_urls(
    config_path: str | os.PathLike[str],
    *,
    concurrent: bool = True,
    emit_log: bool = True,
    http_client: HttpClient | None = None,
) -> list[ProbeResult]:
    """Load a configuration file and run its batch."""
    batch = load_batch_spec(config_path)
    with StatusProbe(http_client=http_client) as probe:
        return probe.run(batch, concurrent=concurrent, emit_log=emit_log)


def check_url(
    url: str,
    timeout_ms: float = DEFAULT_TIMEOUT_MS,
    success_codes: Iterable[int] = (200,),
    *,
    http_client: HttpClient | None = None,
) -> ProbeResult:
    """Probe one URL with the default status code check and no logging."""
    probe_spec = ProbeSpec(url=url, timeout_ms=timeout_ms)
    batch = BatchSpec(probes=(probe_spec,), global_success_codes=tuple(success_codes))
    with StatusProbe(http_client=http_client) as probe:
        return probe.run(batch, emit_log=False)[0]


__all__ = ["StatusProbe", "check_url", "check_urls"]
