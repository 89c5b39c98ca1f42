# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed probe transport."""

from __future__ import annotations

import logging

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import ErrorCategory, categorize_exception
from .client import HttpClient
from .headers import has_header, normalize_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


def _format_ms(seconds: float) -> str:
    ms = seconds * 1000
    return str(int(ms)) if float(ms).is_integer() else f"{ms:g}"


def _read_capped(resp: httpx.Response, limit: int) -> tuple[bytes, bool]:
    buffer = bytearray()
    for chunk in resp.iter_bytes():
        room = limit - len(buffer)
        if len(chunk) > room:
            buffer.extend(chunk[:room])
            return bytes(buffer), True
        buffer.extend(chunk)
    return bytes(buffer), False


def _decode(content: bytes, encoding: str | None) -> str:
    try:
        return content.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return content.decode("utf-8", errors="replace")


class HttpxClient(HttpClient):
    """
    Probe transport on top of a shared `httpx.Client`.

    The pooled client is safe to share across batch worker threads. Each request gets
    its own timeout, bodies are read up to `settings.max_body_bytes`, and redirects are
    returned as-is.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=False,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def _headers(self, request: HttpRequest) -> dict[str, str]:
        headers = dict(request.headers or {})
        if not has_header(headers, "User-Agent"):
            headers["User-Agent"] = self.settings.user_agent
        return headers

    def request(self, request: HttpRequest) -> HttpResponse:
        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=self._headers(request),
                content=request.body,
                timeout=timeout,
                follow_redirects=False,
            ) as resp:
                content, truncated = _read_capped(resp, self.settings.max_body_bytes)
                text = _decode(content, resp.encoding)
        except Exception as exc:  # noqa: BLE001
            return self._failure(request, exc, timeout)

        if truncated:
            logger.debug("Body of %s cut at %d bytes", request.url, self.settings.max_body_bytes)
        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=normalize_headers(resp.headers),
            text=text,
        )

    def _failure(self, request: HttpRequest, exc: Exception, timeout: float) -> HttpResponse:
        category = categorize_exception(exc)
        if category is ErrorCategory.TIMEOUT:
            message = f"Request timed out after {_format_ms(timeout)}ms"
        else:
            message = str(exc) or type(exc).__name__
        logger.debug("Request to %s failed: %s (%s)", request.url, message, type(exc).__name__)
        return HttpResponse.failure(message, category=category)

    def close(self) -> None:
        self._client.close()


__all__ = ["HttpxClient"]
