# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpTransport implementation."""

from __future__ import annotations

from collections.abc import AsyncIterator
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any

import httpx

from ..config import HttpSettings, load_http_settings
from ..encoding.attachments import is_attachment, to_file_tuple
from ..encoding.payload import Field
from ..encoding.values import stringify
from .client import HttpTransport
from .models import HttpRequest, HttpResponse, UploadProgressHook


def multipart_files(fields: tuple[Field, ...]) -> list[tuple[str, Any]]:
    """
    Render encoded fields as an httpx `files` list.

    Plain values become filename-less parts so they stay interleaved with the
    attachments in their original order.
    """
    files: list[tuple[str, Any]] = []
    for key, value in fields:
        if is_attachment(value):
            files.append((key, to_file_tuple(value)))
        else:
            files.append((key, (None, stringify(value))))
    return files


async def _count_upload(stream: Any, total: int | None, hook: UploadProgressHook) -> AsyncIterator[bytes]:
    loaded = 0
    async for chunk in stream:
        loaded += len(chunk)
        hook(loaded, total)
        yield chunk


class HttpxTransport(HttpTransport):
    """Asynchronous httpx client wrapper."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )
        # Only `self.cookies` carries credentials; the client jar never stores anything.
        self._client.cookies = CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))
        self.cookies = httpx.Cookies()

    def build_request(self, request: HttpRequest) -> httpx.Request:
        headers = httpx.Headers(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        extensions = {"timeout": httpx.Timeout(timeout).as_dict()}

        if request.multipart is not None:
            built = httpx.Request(
                request.method,
                request.url,
                headers=headers,
                files=multipart_files(request.multipart),
                extensions=extensions,
            )
            if request.on_upload_progress is not None:
                length = built.headers.get("Content-Length")
                total = int(length) if length else None
                built = httpx.Request(
                    request.method,
                    request.url,
                    headers=built.headers,
                    content=_count_upload(built.stream, total, request.on_upload_progress),
                    extensions=extensions,
                )
        else:
            built = httpx.Request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                extensions=extensions,
            )

        if request.with_credentials:
            self.cookies.set_cookie_header(built)
        return built

    async def _send_following_redirects(self, built: httpx.Request, with_credentials: bool) -> httpx.Response:
        resp = await self._client.send(built, follow_redirects=False)
        hops = 0
        while True:
            if with_credentials:
                self.cookies.extract_cookies(resp)
            next_request = resp.next_request
            if next_request is None or not self.settings.allow_redirects:
                return resp
            hops += 1
            if hops > self._client.max_redirects:
                raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=next_request)
            next_request.headers.pop("Cookie", None)
            if with_credentials:
                self.cookies.set_cookie_header(next_request)
            resp = await self._client.send(next_request, follow_redirects=False)

    async def send(self, request: HttpRequest) -> HttpResponse:
        try:
            built = self.build_request(request)
            resp = await self._send_following_redirects(built, request.with_credentials)
            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers=dict(resp.headers),
                text=resp.text,
                content=resp.content,
                url=str(resp.url),
            )
        except Exception as exc:  # noqa: BLE001
            return HttpResponse.from_error(exc, url=request.url)

    async def aclose(self) -> None:
        await self._client.aclose()
