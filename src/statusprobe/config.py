# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Runtime settings for StatusProbe, read from `STATUSPROBE_*` environment variables."""

import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from .version import __version__

DEFAULT_USER_AGENT = f"StatusProbe/{__version__}"
DEFAULT_MAX_BODY_BYTES = 16 * 1024 * 1024

ENV_PREFIX = "STATUSPROBE_"

T = TypeVar("T")


def _env(name: str, parse: Callable[[str], T], default: T) -> T:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return parse(raw.strip())
    except ValueError:
        return default


def _flag(raw: str) -> bool:
    return raw.lower() in {"1", "true", "yes", "on"}


def _positive(value: T, fallback: T) -> T:
    return value if value is not None and value > 0 else fallback


@dataclass
class HttpSettings:
    """
    Transport and batch defaults.

    timeout          seconds; used only when a request carries no timeout of its own
    user_agent       sent unless the probe sets its own User-Agent header
    verify_ssl       TLS certificate verification
    max_body_bytes   response bodies are read up to this many bytes
    max_workers      cap on concurrent probes; None means one worker per probe
    """

    timeout: float = 5.0
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    max_workers: int | None = None

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Read the environment now; unparsable or non-positive values keep the default."""
        return cls(
            timeout=_positive(_env("HTTP_TIMEOUT", float, cls.timeout), cls.timeout),
            user_agent=_env("USER_AGENT", str, cls.user_agent),
            verify_ssl=_env("HTTP_VERIFY_SSL", _flag, cls.verify_ssl),
            max_body_bytes=_positive(_env("HTTP_MAX_BODY_BYTES", int, cls.max_body_bytes), cls.max_body_bytes),
            max_workers=_positive(_env("MAX_WORKERS", int, cls.max_workers), None),
        )


def load_http_settings() -> HttpSettings:
    return HttpSettings.from_env()


__all__ = ["DEFAULT_MAX_BODY_BYTES", "DEFAULT_USER_AGENT", "HttpSettings", "load_http_settings"]
