# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across wireform."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..encoding.payload import Field
from .url import append_query

Headers = dict[str, str]
ProgressCallback = Callable[[int], None]
UploadProgressHook = Callable[[int, int | None], None]


class BodyFormat(str, Enum):
    """How a request carries its data."""

    NONE = "none"
    JSON = "json"
    FORM_DEFAULT = "form-default"
    MULTIPART = "multipart"


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpTransport implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    multipart: tuple[Field, ...] | None = None
    with_credentials: bool = False
    timeout: float | None = None
    on_upload_progress: UploadProgressHook | None = None


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Wire-level shape of one call, independent of the target URL.

    Exactly one of `content`, `multipart` or `query` carries the data, selected by
    `body_format`. GET descriptors never carry a body.
    """

    method: str
    headers: Headers
    with_credentials: bool = False
    body_format: BodyFormat = BodyFormat.NONE
    content: bytes | None = None
    multipart: tuple[Field, ...] | None = None
    query: str = ""
    on_upload_progress: UploadProgressHook | None = None

    def to_request(self, url: str, *, timeout: float | None = None) -> HttpRequest:
        return HttpRequest(
            url=append_query(url, self.query),
            method=self.method,
            headers=dict(self.headers),
            body=self.content,
            multipart=self.multipart,
            with_credentials=self.with_credentials,
            timeout=timeout,
            on_upload_progress=self.on_upload_progress,
        )


@dataclass
class HttpResponse:
    """Normalized HTTP response; `ok` is False only when no HTTP response was received."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error: BaseException | None = None

    @property
    def is_success(self) -> bool:
        return self.ok and self.status_code is not None and 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON; raises ValueError when it is not JSON."""
        return json.loads(self.text or self.content.decode("utf-8"))

    @classmethod
    def from_error(cls, exc: BaseException, *, url: str | None = None) -> HttpResponse:
        return cls(ok=False, url=url, error_message=str(exc), error_type=type(exc).__name__, error=exc)


__all__ = [
    "BodyFormat",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "ProgressCallback",
    "RequestDescriptor",
    "UploadProgressHook",
]
