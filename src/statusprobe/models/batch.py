# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe and batch specifications."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..errors import CheckDefinitionError, ConfigError
from ..http.url import is_http_url
from .checks import Check, check_from_mapping

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_SUCCESS_CODES: tuple[int, ...] = (200,)
DEFAULT_METHOD = "GET"
LOG_LEVELS = ("error", "warn", "info", "debug")


def _parse_success_codes(raw: Any, where: str) -> tuple[int, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, (list, tuple)):
        raise ConfigError(f"{where}: success codes must be an array")
    codes: list[int] = []
    for item in raw:
        if isinstance(item, bool):
            raise ConfigError(f"{where}: invalid success code {item!r}")
        try:
            codes.append(int(item))
        except (TypeError, ValueError):
            raise ConfigError(f"{where}: invalid success code {item!r}") from None
    return tuple(codes)


def _parse_timeout(raw: Any, where: str) -> float | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ConfigError(f"{where}: invalid timeout {raw!r}")
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{where}: invalid timeout {raw!r}") from None


@dataclass(frozen=True)
class ProbeSpec:
    """One URL to probe, its request parameters and the checks to run on the response."""

    url: str
    name: str | None = None
    timeout_ms: float | None = None
    success_codes: tuple[int, ...] | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    method: str = DEFAULT_METHOD
    body: str | None = None
    content_type: str | None = None
    checks: tuple[Check, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", (self.method or DEFAULT_METHOD).upper())
        object.__setattr__(self, "headers", dict(self.headers or {}))
        if self.checks is not None:
            object.__setattr__(self, "checks", tuple(self.checks))
        if self.success_codes is not None:
            object.__setattr__(self, "success_codes", tuple(self.success_codes))

    def effective_timeout_ms(self, batch: BatchSpec | None = None) -> float:
        # Zero or missing timeouts fall through to the next level.
        global_timeout = batch.global_timeout_ms if batch is not None else None
        return self.timeout_ms or global_timeout or DEFAULT_TIMEOUT_MS

    def effective_success_codes(self, batch: BatchSpec | None = None) -> tuple[int, ...]:
        if self.success_codes is not None:
            return self.success_codes
        if batch is not None and batch.global_success_codes is not None:
            return batch.global_success_codes
        return DEFAULT_SUCCESS_CODES

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], index: int) -> ProbeSpec:
        """Validate one `urls[index]` entry from a configuration file."""
        where = f"URL at index {index}"
        if not isinstance(data, Mapping):
            raise ConfigError(f"{where} must be an object")
        url = data.get("url")
        if not url:
            raise ConfigError(f'{where} is missing the "url" property')
        if not isinstance(url, str) or not is_http_url(url):
            raise ConfigError(f"{where} is invalid: {url}")

        raw_headers = data.get("headers") or {}
        if not isinstance(raw_headers, Mapping):
            raise ConfigError(f"{where}: headers must be an object")
        headers = {str(key): "" if value is None else str(value) for key, value in raw_headers.items()}

        body = data.get("body")
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)

        checks: tuple[Check, ...] | None = None
        raw_checks = data.get("checks")
        if raw_checks is not None:
            if not isinstance(raw_checks, list):
                raise ConfigError(f"{where}: checks must be an array")
            parsed: list[Check] = []
            for check_index, raw_check in enumerate(raw_checks):
                try:
                    parsed.append(check_from_mapping(raw_check))
                except CheckDefinitionError as exc:
                    raise CheckDefinitionError(f"{where}, check {check_index}: {exc}") from exc
            checks = tuple(parsed)

        return cls(
            url=url,
            name=str(data.get("name") or f"URL {index + 1}"),
            timeout_ms=_parse_timeout(data.get("timeout"), where),
            success_codes=_parse_success_codes(data.get("successCodes"), where),
            headers=headers,
            method=str(data.get("method") or DEFAULT_METHOD),
            body=body,
            content_type=data.get("contentType"),
            checks=checks,
        )


@dataclass(frozen=True)
class BatchSpec:
    """The ordered set of probes executed in one invocation, plus global defaults."""

    probes: tuple[ProbeSpec, ...]
    global_timeout_ms: float = DEFAULT_TIMEOUT_MS
    global_success_codes: tuple[int, ...] = DEFAULT_SUCCESS_CODES
    log_file: str | None = None
    log_level: str = "info"

    def __post_init__(self) -> None:
        object.__setattr__(self, "probes", tuple(self.probes))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> BatchSpec:
        if not isinstance(data, Mapping):
            raise ConfigError("Configuration must be a JSON object")
        raw_probes = data.get("urls", data.get("probes"))
        if not isinstance(raw_probes, list):
            raise ConfigError('Configuration must contain a "urls" array')
        if not raw_probes:
            raise ConfigError("Configuration must contain at least one URL")
        probes = [ProbeSpec.from_mapping(item, index) for index, item in enumerate(raw_probes)]

        log_level = str(data.get("logLevel") or "info").lower()
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"Invalid logLevel {log_level!r}; expected one of {', '.join(LOG_LEVELS)}")

        success_codes = _parse_success_codes(data.get("globalSuccessCodes"), "globalSuccessCodes")
        return cls(
            probes=tuple(probes),
            global_timeout_ms=_parse_timeout(data.get("globalTimeout"), "globalTimeout") or DEFAULT_TIMEOUT_MS,
            global_success_codes=success_codes if success_codes is not None else DEFAULT_SUCCESS_CODES,
            log_file=data.get("logFile") or None,
            log_level=log_level,
        )


__all__ = [
    "BatchSpec",
    "DEFAULT_METHOD",
    "DEFAULT_SUCCESS_CODES",
    "DEFAULT_TIMEOUT_MS",
    "LOG_LEVELS",
    "ProbeSpec",
]
