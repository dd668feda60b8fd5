# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP layer exports."""

from .adapters import StubTransport
from .client import HttpTransport, create_default_transport
from .dispatch import RequestHandle, decode_body, dispatch, normalize_response
from .headers import has_header, set_default_header, without_header
from .httpx_client import HttpxTransport
from .models import BodyFormat, Headers, HttpRequest, HttpResponse, RequestDescriptor
from .options import build_request_options, progress_percent
from .url import append_query, join_path

__all__ = [
    "BodyFormat",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "HttpTransport",
    "HttpxTransport",
    "RequestDescriptor",
    "RequestHandle",
    "StubTransport",
    "append_query",
    "build_request_options",
    "create_default_transport",
    "decode_body",
    "dispatch",
    "has_header",
    "join_path",
    "normalize_response",
    "progress_percent",
    "set_default_header",
    "without_header",
]
