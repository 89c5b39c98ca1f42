# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport interface consumed by the probe engine."""

from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """
    Sends one probe request.

    `request` reports transport failures as `HttpResponse.failure(...)` rather than
    raising, and never follows redirects. Implementations shared by a concurrent batch
    must tolerate calls from several threads.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """Build the httpx-backed transport."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_http_settings())


__all__ = ["HttpClient", "create_default_http_client"]
