# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Map a method plus request data onto a wire-level RequestDescriptor."""

from __future__ import annotations

import math
from collections.abc import Mapping

from ..encoding.payload import RequestData, encode_payload
from ..encoding.query import build_query_string, query_fields
from ..encoding.values import json_dumps
from .headers import set_default_header, without_header
from .models import BodyFormat, ProgressCallback, RequestDescriptor, UploadProgressHook

BODY_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
DEFAULT_ACCEPT = "application/json, text/plain, */*"
JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def progress_percent(loaded: int, total: int | None) -> int:
    """Whole-number upload percentage; 100 when the total size is unknown."""
    if not total:
        return 100
    return min(100, math.ceil(loaded / total * 100))


def _progress_hook(on_progress: ProgressCallback) -> UploadProgressHook:
    def hook(loaded: int, total: int | None) -> None:
        on_progress(progress_percent(loaded, total))

    return hook


def build_request_options(
    method: str,
    data: RequestData | None = None,
    *,
    headers: Mapping[str, str] | None = None,
    with_credentials: bool = False,
    on_progress: ProgressCallback | None = None,
) -> RequestDescriptor:
    """
    Decide how `data` travels for `method`.

    - GET (and any other non-body method): bracket-notation query string, no body.
    - Body methods without attachments: compact JSON.
    - Body methods with `data=None`: empty body with a form-urlencoded Content-Type.
    - Body methods with any attachment: multipart fields; the transport sets the
      Content-Type boundary and reports upload progress.
    """
    method = method.upper()
    request_headers = set_default_header(dict(headers or {}), "Accept", DEFAULT_ACCEPT)

    if method not in BODY_METHODS:
        return RequestDescriptor(
            method=method,
            headers=request_headers,
            with_credentials=with_credentials,
            body_format=BodyFormat.NONE,
            query=build_query_string(query_fields(data)),
        )

    encoded = encode_payload(data)
    if encoded is None:
        return RequestDescriptor(
            method=method,
            headers=set_default_header(request_headers, "Content-Type", FORM_CONTENT_TYPE),
            with_credentials=with_credentials,
            body_format=BodyFormat.FORM_DEFAULT,
        )

    if not encoded.has_attachment:
        return RequestDescriptor(
            method=method,
            headers=set_default_header(request_headers, "Content-Type", JSON_CONTENT_TYPE),
            with_credentials=with_credentials,
            body_format=BodyFormat.JSON,
            content=json_dumps(dict(data)).encode("utf-8"),
        )

    return RequestDescriptor(
        method=method,
        headers=without_header(request_headers, "Content-Type"),
        with_credentials=with_credentials,
        body_format=BodyFormat.MULTIPART,
        multipart=encoded.fields,
        on_upload_progress=_progress_hook(on_progress) if on_progress is not None else None,
    )


__all__ = [
    "BODY_METHODS",
    "DEFAULT_ACCEPT",
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "build_request_options",
    "progress_percent",
]
