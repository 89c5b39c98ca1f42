# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import has_header, header_value, normalize_headers
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse
from .url import is_http_url

__all__ = [
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "create_default_http_client",
    "has_header",
    "header_value",
    "is_http_url",
    "normalize_headers",
]
