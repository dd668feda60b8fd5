# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum
from typing import Any

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    HTTP_STATUS = "HTTP_STATUS"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException | None) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.HTTPStatusError):
        return ErrorCategory.HTTP_STATUS

    # httpx wraps lower level errors; inspect the cause first so DNS/TLS failures are not
    # reported as generic connection errors.
    cause = getattr(exc, "__cause__", None) or getattr(exc, "__context__", None)
    if cause is not None and cause is not exc and not isinstance(cause, httpx.HTTPError):
        category = categorize_exception(cause)
        if category is not ErrorCategory.UNKNOWN_ERROR:
            return category

    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


class WireformError(Exception):
    """Base class for every error raised by wireform."""


class RequestFailed(WireformError):
    """
    A dispatched request did not succeed.

    `reason` is the value the caller should act on: the server's `errors` payload
    when one was returned, otherwise the raw transport-level error object.
    """

    def __init__(self, reason: Any, message: str | None = None):
        self.reason = reason
        super().__init__(message or str(reason))


class TransportError(RequestFailed):
    """Network, DNS, TLS or timeout failure; no HTTP status was received."""

    def __init__(self, reason: BaseException):
        super().__init__(reason, f"{type(reason).__name__}: {reason}")
        self.category = categorize_exception(reason)


class ServerError(RequestFailed):
    """The server answered with a non-2xx status."""

    def __init__(self, reason: Any, *, status_code: int, body: Any = None):
        super().__init__(reason, f"HTTP {status_code}: {reason}")
        self.status_code = status_code
        self.body = body

    @property
    def has_error_payload(self) -> bool:
        """True when `reason` came from the response body rather than the transport."""
        return not isinstance(self.reason, httpx.HTTPError)


__all__ = [
    "ErrorCategory",
    "RequestFailed",
    "ServerError",
    "TransportError",
    "WireformError",
    "categorize_exception",
]
