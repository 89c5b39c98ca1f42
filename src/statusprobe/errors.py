# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum

import httpx


class StatusProbeError(Exception):
    """Base class for errors raised by StatusProbe."""


class ConfigError(StatusProbeError):
    """Invalid or unreadable configuration; fatal before any probe runs."""


class CheckDefinitionError(ConfigError):
    """A check whose shape or operator is not legal for its type."""


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    INVALID_URL = "INVALID_URL"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return ErrorCategory.INVALID_URL

    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    # httpx wraps socket errors; inspect the cause chain for DNS/TLS failures.
    cause = exc.__cause__ or exc.__context__
    if isinstance(cause, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR
    if isinstance(cause, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


_CATEGORY_HINTS = {
    ErrorCategory.TIMEOUT: "no response within the timeout",
    ErrorCategory.SSL_ERROR: "TLS handshake or certificate verification failed",
    ErrorCategory.CONNECTION_ERROR: "host unreachable or connection refused",
    ErrorCategory.DNS_ERROR: "host name could not be resolved",
    ErrorCategory.INVALID_URL: "URL is malformed or uses an unsupported scheme",
    ErrorCategory.UNKNOWN_ERROR: "request failed",
}


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """Short hint shown next to a transport error; empty when there is nothing to add."""
    if category is None:
        return ""
    return _CATEGORY_HINTS.get(category, "")


__all__ = [
    "CheckDefinitionError",
    "ConfigError",
    "ErrorCategory",
    "StatusProbeError",
    "categorize_exception",
    "error_category_to_reason",
]
