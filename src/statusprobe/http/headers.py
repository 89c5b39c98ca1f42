# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Responses are stored with
lowercased names, and a header sent more than once is folded into one value joined
with ", " so checks see a single string per name.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

HEADER_JOINER = ", "


def _header_items(headers: Any) -> Iterable[tuple[object, object]]:
    """
    Iterate (name, value) pairs from the header containers we accept:

    - httpx.Headers (via `multi_items()`, so repeated headers are preserved)
    - plain mappings
    - iterables of pairs (e.g. list[tuple[str, str]])
    """
    if not headers:
        return ()
    multi_items = getattr(headers, "multi_items", None)
    if callable(multi_items):
        return multi_items()
    if isinstance(headers, Mapping):
        return headers.items()
    return headers


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return a lowercase-keyed copy of `headers`, joining repeated names with ", "."""
    out: dict[str, str] = {}
    for key, value in _header_items(headers):
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        text = "" if value is None else str(value)
        if isinstance(value, (list, tuple)):
            text = HEADER_JOINER.join(str(item) for item in value)
        out[name] = f"{out[name]}{HEADER_JOINER}{text}" if name in out else text
    return out


def header_value(headers: Mapping[str, str] | None, name: str) -> str | None:
    """Return a header value using case-insensitive key matching, or None when absent."""
    if not headers or not name:
        return None
    lower = str(name).lower()
    if lower in headers:
        return headers[lower]
    for key, value in headers.items():
        if str(key).lower() == lower:
            return value
    return None


def has_header(headers: Mapping[str, str] | None, name: str) -> bool:
    return header_value(headers, name) is not None


__all__ = ["HEADER_JOINER", "has_header", "header_value", "normalize_headers"]
