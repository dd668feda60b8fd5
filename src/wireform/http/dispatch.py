# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Issue one request and expose it as a cancellable handle.

Cancellation policy: `RequestHandle.cancel()` settles `result` with `None` right away
(unless it already settled) and cancels the in-flight send. A response that arrives
afterwards is discarded, so a cancelled request never produces data and never
raises `asyncio.CancelledError` through `result`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Generator, Mapping
from typing import Any

import httpx

from ..errors import RequestFailed, ServerError, TransportError
from .client import HttpTransport
from .headers import without_header
from .models import HttpRequest, HttpResponse, RequestDescriptor

logger = logging.getLogger(__name__)


def decode_body(response: HttpResponse) -> Any:
    """JSON when the body parses as JSON, the text otherwise, None when empty."""
    if not response.content and not response.text:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _status_error(request: HttpRequest, response: HttpResponse) -> httpx.HTTPStatusError:
    raw_request = httpx.Request(request.method, request.url)
    # content is already decoded
    headers = without_header(without_header(response.headers, "Content-Encoding"), "Content-Length")
    raw_response = httpx.Response(
        response.status_code or 0,
        headers=headers,
        content=response.content,
        request=raw_request,
    )
    return httpx.HTTPStatusError(
        f"Request failed with status code {response.status_code}",
        request=raw_request,
        response=raw_response,
    )


def normalize_response(request: HttpRequest, response: HttpResponse) -> Any:
    """Return the decoded body of a 2xx response, raise RequestFailed for anything else."""
    if response.status_code is None:
        reason = response.error or httpx.TransportError(response.error_message or "Transport failure")
        raise TransportError(reason) from reason

    body = decode_body(response)
    if response.is_success:
        return body

    if isinstance(body, Mapping) and "errors" in body:
        raise ServerError(body["errors"], status_code=response.status_code, body=body)
    reason = _status_error(request, response)
    raise ServerError(reason, status_code=response.status_code, body=body) from reason


class RequestHandle:
    """
    A dispatched request: `cancel()` plus a `result` future.

    Awaiting the handle is the same as awaiting `result`.
    """

    def __init__(self, request: HttpRequest, task: asyncio.Task[HttpResponse], result: asyncio.Future[Any]):
        self.request = request
        self.result = result
        self._task = task
        self._cancel_requested = False
        task.add_done_callback(self._settle)
        result.add_done_callback(self._on_result_done)

    @property
    def cancelled(self) -> bool:
        return self._cancel_requested

    def done(self) -> bool:
        return self.result.done()

    def cancel(self) -> None:
        """Abandon the request; a no-op once settled or already cancelled."""
        if self._cancel_requested or self.result.done():
            return
        self._cancel_requested = True
        logger.debug("Cancelled %s %s", self.request.method, self.request.url)
        self.result.set_result(None)
        self._task.cancel()

    def _on_result_done(self, result: asyncio.Future[Any]) -> None:
        # The awaiting task was cancelled, which cancels `result`; stop the send too.
        if result.cancelled() and not self._task.done():
            self._task.cancel()

    def _settle(self, task: asyncio.Task[HttpResponse]) -> None:
        if self.result.done():
            if not task.cancelled():
                task.exception()
            return
        if task.cancelled():
            self._cancel_requested = True
            self.result.set_result(None)
            return

        exc = task.exception()
        if exc is not None:
            failure = TransportError(exc)
            failure.__cause__ = exc
            self.result.set_exception(failure)
            return

        try:
            value = normalize_response(self.request, task.result())
        except RequestFailed as failure:
            logger.debug("%s %s failed: %s", self.request.method, self.request.url, failure)
            self.result.set_exception(failure)
        else:
            self.result.set_result(value)

    def __await__(self) -> Generator[Any, None, Any]:
        return self.result.__await__()


def dispatch(
    transport: HttpTransport,
    url: str,
    descriptor: RequestDescriptor,
    *,
    timeout: float | None = None,
) -> RequestHandle:
    """Start sending `descriptor` to `url`; must be called with a running event loop."""
    loop = asyncio.get_running_loop()
    request = descriptor.to_request(url, timeout=timeout)
    logger.debug("Dispatching %s %s (%s body)", request.method, request.url, descriptor.body_format.value)
    result: asyncio.Future[Any] = loop.create_future()
    task = loop.create_task(transport.send(request))
    return RequestHandle(request, task, result)


__all__ = ["RequestHandle", "decode_body", "dispatch", "normalize_response"]
