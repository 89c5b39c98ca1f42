# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Minimal JSON path extraction.

Supported syntax: an optional leading `$`, dot-separated property names and bracket
indexes (`tags[0]` is the same as `tags.0`). Arrays and strings also expose `length`.
Wildcards, slices and filter expressions are not supported.
"""

from __future__ import annotations

import re
from typing import Any

from ..models.checks import ArrayElement
from ..models.values import ABSENT

_BRACKET_RE = re.compile(r"\[([A-Za-z0-9_]+)\]")
_INDEX_RE = re.compile(r"0|[1-9][0-9]*")


def split_path(path: str) -> list[str]:
    """Normalize a path expression into its segments; an empty list addresses the root."""
    normalized = path[1:] if path.startswith("$") else path
    normalized = _BRACKET_RE.sub(r".\1", normalized)
    if normalized.startswith("."):
        normalized = normalized[1:]
    if not normalized:
        return []
    return normalized.split(".")


def _index(segment: str, size: int) -> int | None:
    if _INDEX_RE.fullmatch(segment):
        position = int(segment)
        if position < size:
            return position
    return None


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, dict):
        return current.get(segment, ABSENT)
    if isinstance(current, (list, str)):
        if segment == "length":
            return len(current)
        position = _index(segment, len(current))
        return ABSENT if position is None else current[position]
    return ABSENT


def extract(document: Any, path: str) -> Any:
    """Return the value at `path` inside `document`, or ABSENT if any segment is missing."""
    current = document
    for segment in split_path(path):
        if current is None or current is ABSENT:
            return ABSENT
        current = _step(current, segment)
    return current


def select_element(values: list[Any], element: ArrayElement | int) -> Any:
    """Pick a single member of an array result; ABSENT when out of range."""
    if isinstance(element, int) and not isinstance(element, bool):
        return values[element] if 0 <= element < len(values) else ABSENT
    if element is ArrayElement.LAST:
        return values[-1] if values else ABSENT
    return values[0] if values else ABSENT


__all__ = ["extract", "select_element", "split_path"]
