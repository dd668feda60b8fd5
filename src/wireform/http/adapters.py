# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process transports."""

from __future__ import annotations

import asyncio

from .client import HttpTransport
from .models import HttpRequest, HttpResponse


class StubTransport(HttpTransport):
    """
    Deterministic, programmable HttpTransport for tests.

    Responses are looked up by `"METHOD url"` first, then by `url`. When `hold()` is
    active every send waits until `release()` is called, which lets callers observe
    in-flight requests.
    """

    def __init__(self, responses: dict[str, HttpResponse] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []
        self.closed = False
        self._gate: asyncio.Event | None = None

    def add(self, url: str, response: HttpResponse, *, method: str | None = None) -> None:
        key = f"{method.upper()} {url}" if method else url
        self._responses[key] = response

    def hold(self) -> None:
        self._gate = asyncio.Event()

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()

    async def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if self._gate is not None:
            await self._gate.wait()
        response = self._responses.get(f"{request.method.upper()} {request.url}")
        if response is None:
            response = self._responses.get(request.url)
        if response is not None:
            return response
        return HttpResponse(ok=False, status_code=None, url=request.url, error_message="No stubbed response configured")

    async def aclose(self) -> None:
        self.closed = True
