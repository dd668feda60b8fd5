# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
wireform package entrypoint.

wireform turns application data into one HTTP request: nested arrays are flattened
into bracket-notation fields, attachments switch the body to multipart, everything
else goes out as JSON (or as a query string for GET). Each call returns a
cancellable handle whose result is the decoded response body.
"""

from .config import AdapterConfig, HttpSettings, load_http_settings
from .encoding import AttachmentDescriptor, Blob, EncodedPayload, as_attachment, encode_payload
from .errors import ErrorCategory, RequestFailed, ServerError, TransportError, WireformError
from .http import (
    BodyFormat,
    HttpRequest,
    HttpResponse,
    HttpTransport,
    HttpxTransport,
    RequestDescriptor,
    RequestHandle,
    StubTransport,
    build_request_options,
    create_default_transport,
    dispatch,
)
from .log import setup_logging
from .runtime import Adapter, RequestOptions, create_adapter
from .version import __version__

__all__ = [
    "Adapter",
    "AdapterConfig",
    "AttachmentDescriptor",
    "Blob",
    "BodyFormat",
    "EncodedPayload",
    "ErrorCategory",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpTransport",
    "HttpxTransport",
    "RequestDescriptor",
    "RequestFailed",
    "RequestHandle",
    "RequestOptions",
    "ServerError",
    "StubTransport",
    "TransportError",
    "WireformError",
    "as_attachment",
    "build_request_options",
    "create_adapter",
    "create_default_transport",
    "dispatch",
    "encode_payload",
    "load_http_settings",
    "setup_logging",
    "__version__",
]
