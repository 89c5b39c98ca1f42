# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport-level request and response records."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import ErrorCategory

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """One outgoing probe request. `timeout` is in seconds; None means the client default."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: str | bytes | None = None
    timeout: float | None = None


@dataclass
class HttpResponse:
    """
    What a transport hands back for one request.

    `ok` is False only when no HTTP response was obtained (refused connection, DNS
    failure, timeout, malformed URL); any status code, 5xx included, is `ok=True`.
    Header names are lowercased with repeated names joined by ", ".
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    error_message: str | None = None
    error_category: ErrorCategory | None = None

    @classmethod
    def failure(
        cls,
        message: str,
        *,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
    ) -> HttpResponse:
        return cls(ok=False, error_message=message, error_category=category)


__all__ = ["Headers", "HttpRequest", "HttpResponse"]
