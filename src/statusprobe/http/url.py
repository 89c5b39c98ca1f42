# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers shared by configuration and the CLI."""

from __future__ import annotations

from urllib.parse import urlparse

SUPPORTED_SCHEMES = frozenset({"http", "https"})


def is_http_url(url: str) -> bool:
    """Return True for an absolute http(s) URL with a host."""
    try:
        parsed = urlparse(str(url or "").strip())
        # Accessing .port validates the port component.
        parsed.port
    except ValueError:
        return False
    return parsed.scheme.lower() in SUPPORTED_SCHEMES and bool(parsed.hostname)


__all__ = ["SUPPORTED_SCHEMES", "is_http_url"]
