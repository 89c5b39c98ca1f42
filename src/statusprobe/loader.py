# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Batch configuration file loading and validation."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .models.batch import BatchSpec

logger = logging.getLogger(__name__)


def parse_batch_spec(data: Mapping[str, Any]) -> BatchSpec:
    """Validate a decoded configuration document."""
    return BatchSpec.from_mapping(data)


def load_batch_spec(path: str | os.PathLike[str]) -> BatchSpec:
    """Read, parse and validate a JSON configuration file; raises ConfigError."""
    resolved = Path(path).resolve()
    logger.debug("Loading configuration from %s", resolved)
    try:
        if not resolved.is_file():
            raise ConfigError(f"Configuration file not found: {resolved}")
        try:
            data = json.loads(resolved.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in configuration file {resolved}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Unable to read configuration file {resolved}: {exc}") from exc
        batch = parse_batch_spec(data)
    except ConfigError as exc:
        logger.error("Failed to load configuration: %s", exc)
        raise

    logger.info("Successfully loaded configuration with %d URLs", len(batch.probes))
    return batch


__all__ = ["load_batch_spec", "parse_batch_spec"]
