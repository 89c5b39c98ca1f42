# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory transport for tests and dry runs."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Union

from ..errors import ErrorCategory
from .client import HttpClient
from .models import HttpRequest, HttpResponse

Responder = Union[HttpResponse, Callable[[HttpRequest], HttpResponse]]

UNREACHABLE_MESSAGE = "No stubbed response configured"


class StubHttpClient(HttpClient):
    """
    Answers requests from a URL → response table.

    A table entry is either a fixed HttpResponse or a callable receiving the request.
    URLs missing from the table behave like an unreachable host. Every request is
    recorded in `requests`, in arrival order.
    """

    def __init__(self, responses: dict[str, Responder] | None = None):
        self._responses: dict[str, Responder] = dict(responses or {})
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []

    def add(self, url: str, response: Responder) -> None:
        self._responses[url] = response

    def requests_for(self, url: str) -> list[HttpRequest]:
        with self._lock:
            return [request for request in self.requests if request.url == url]

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
            responder = self._responses.get(request.url)
        if responder is None:
            return HttpResponse.failure(UNREACHABLE_MESSAGE, category=ErrorCategory.CONNECTION_ERROR)
        if callable(responder):
            return responder(request)
        return responder

    def close(self) -> None:
        return None


__all__ = ["Responder", "StubHttpClient", "UNREACHABLE_MESSAGE"]
