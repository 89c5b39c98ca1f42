# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for StatusProbe."""

from __future__ import annotations

import logging
import os
from pathlib import Path

DEFAULT_LOG_LEVEL = os.getenv("STATUSPROBE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Level names used by configuration files ("warn" is accepted alongside "warning").
_LEVEL_ALIASES = {
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def resolve_level(level: str | None) -> int:
    """Map a level name to a logging level, defaulting to INFO for unknown names."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    return _LEVEL_ALIASES.get(effective_level, logging.INFO)


def setup_logging(level: str | None = None, log_file: str | os.PathLike[str] | None = None) -> None:
    """
    Configure standard logging for CLI/library use, optionally mirroring to a file.

    A log file that cannot be created is reported as a warning and logging continues on
    the console only.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    file_error: OSError | None = None
    if log_file:
        path = Path(log_file)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(path, encoding="utf-8"))
        except OSError as exc:
            file_error = exc
    logging.basicConfig(
        level=resolve_level(level),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    if file_error is not None:
        logging.getLogger(__name__).warning(
            "Cannot write log file %s (%s); logging to console only", log_file, file_error
        )


__all__ = ["resolve_level", "setup_logging"]
