# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import contextlib

import httpx
import pytest

from wireform.errors import ErrorCategory, RequestFailed, ServerError, TransportError
from wireform.http.adapters import StubTransport
from wireform.http.dispatch import RequestHandle, decode_body, dispatch, normalize_response
from wireform.http.models import HttpRequest, HttpResponse
from wireform.http.options import build_request_options

URL = "http://example/api/users"


def json_response(status_code: int, text: str) -> HttpResponse:
    return HttpResponse(ok=True, status_code=status_code, text=text, content=text.encode(), url=URL)


def test_decode_body_variants():
    assert decode_body(json_response(200, '{"id": 1}')) == {"id": 1}
    assert decode_body(json_response(200, "plain")) == "plain"
    assert decode_body(HttpResponse(ok=True, status_code=204)) is None


def test_normalize_response_success():
    assert normalize_response(HttpRequest(url=URL), json_response(201, "[1, 2]")) == [1, 2]


def test_normalize_response_errors_field_is_reason():
    with pytest.raises(ServerError) as exc_info:
        normalize_response(HttpRequest(url=URL), json_response(500, '{"errors": ["foo"]}'))
    assert exc_info.value.reason == ["foo"]
    assert exc_info.value.status_code == 500
    assert exc_info.value.body == {"errors": ["foo"]}
    assert exc_info.value.has_error_payload is True


def test_normalize_response_unparseable_body_uses_status_error():
    with pytest.raises(ServerError) as exc_info:
        normalize_response(HttpRequest(url=URL, method="GET"), json_response(500, "ERROR"))
    reason = exc_info.value.reason
    assert isinstance(reason, httpx.HTTPStatusError)
    assert str(reason) == "Request failed with status code 500"
    assert reason.response.status_code == 500
    assert exc_info.value.body == "ERROR"
    assert exc_info.value.has_error_payload is False


def test_normalize_response_json_without_errors_uses_status_error():
    with pytest.raises(ServerError) as exc_info:
        normalize_response(HttpRequest(url=URL), json_response(422, '{"message": "nope"}'))
    assert isinstance(exc_info.value.reason, httpx.HTTPStatusError)


def test_normalize_response_transport_failure_surfaces_raw_error():
    raw = httpx.ConnectError("connection refused")
    with pytest.raises(TransportError) as exc_info:
        normalize_response(HttpRequest(url=URL), HttpResponse.from_error(raw, url=URL))
    assert exc_info.value.reason is raw
    assert exc_info.value.__cause__ is raw
    assert exc_info.value.category is ErrorCategory.CONNECTION_ERROR


def test_normalize_response_transport_failure_without_exception():
    with pytest.raises(TransportError) as exc_info:
        normalize_response(HttpRequest(url=URL), HttpResponse(ok=False, error_message="No stubbed response configured"))
    assert isinstance(exc_info.value.reason, httpx.TransportError)


def test_dispatch_requires_running_loop():
    with pytest.raises(RuntimeError):
        dispatch(StubTransport(), URL, build_request_options("GET"))


def test_dispatch_returns_handle_before_settlement():
    async def scenario():
        stub = StubTransport({URL: json_response(200, '{"id": 1}')})
        stub.hold()
        handle = dispatch(stub, URL, build_request_options("GET"))
        assert isinstance(handle, RequestHandle)
        assert handle.done() is False
        await asyncio.sleep(0)
        assert len(stub.requests) == 1
        stub.release()
        return await handle

    assert asyncio.run(scenario()) == {"id": 1}


def test_handle_result_future_and_handle_await_agree():
    async def scenario():
        stub = StubTransport({URL: json_response(200, '"ok"')})
        handle = dispatch(stub, URL, build_request_options("POST", {"a": 1}))
        return await handle.result, await handle

    assert asyncio.run(scenario()) == ("ok", "ok")


def test_server_error_rejects_result():
    async def scenario():
        stub = StubTransport({URL: json_response(500, '{"errors": ["foo"]}')})
        handle = dispatch(stub, URL, build_request_options("PUT", {"name": "paco"}))
        with pytest.raises(RequestFailed) as exc_info:
            await handle
        return exc_info.value

    failure = asyncio.run(scenario())
    assert isinstance(failure, ServerError)
    assert failure.reason == ["foo"]


def test_transport_exception_raised_by_send_is_wrapped():
    class ExplodingTransport(StubTransport):
        async def send(self, request):
            raise OSError("socket closed")

    async def scenario():
        handle = dispatch(ExplodingTransport(), URL, build_request_options("GET"))
        with pytest.raises(TransportError) as exc_info:
            await handle
        return exc_info.value

    failure = asyncio.run(scenario())
    assert isinstance(failure.reason, OSError)
    assert failure.__cause__ is failure.reason


def test_cancel_before_settlement_resolves_with_none_and_discards_late_data():
    async def scenario():
        stub = StubTransport({URL: json_response(200, '{"id": 1}')})
        stub.hold()
        handle = dispatch(stub, URL, build_request_options("GET"))
        await asyncio.sleep(0)
        handle.cancel()
        stub.release()
        value = await handle
        for _ in range(3):
            await asyncio.sleep(0)
        return handle, value

    handle, value = asyncio.run(scenario())
    assert value is None
    assert handle.cancelled is True
    assert handle.result.result() is None


def test_cancel_is_idempotent():
    async def scenario():
        stub = StubTransport({URL: json_response(200, "{}")})
        stub.hold()
        handle = dispatch(stub, URL, build_request_options("GET"))
        handle.cancel()
        handle.cancel()
        handle.cancel()
        return handle, await handle

    handle, value = asyncio.run(scenario())
    assert value is None
    assert handle.cancelled is True


def test_cancel_before_send_starts_never_reaches_transport():
    async def scenario():
        stub = StubTransport({URL: json_response(200, "{}")})
        handle = dispatch(stub, URL, build_request_options("GET"))
        handle.cancel()
        await handle
        await asyncio.sleep(0)
        return stub

    assert asyncio.run(scenario()).requests == []


def test_cancel_after_settlement_is_noop():
    async def scenario():
        stub = StubTransport({URL: json_response(200, '{"id": 1}')})
        handle = dispatch(stub, URL, build_request_options("GET"))
        value = await handle
        handle.cancel()
        return handle, value

    handle, value = asyncio.run(scenario())
    assert value == {"id": 1}
    assert handle.cancelled is False
    assert handle.result.result() == {"id": 1}


def test_cancel_after_failure_keeps_the_failure():
    async def scenario():
        stub = StubTransport({URL: json_response(500, '{"errors": {"name": ["taken"]}}')})
        handle = dispatch(stub, URL, build_request_options("POST", {"name": "paco"}))
        with contextlib.suppress(ServerError):
            await handle
        handle.cancel()
        return handle

    handle = asyncio.run(scenario())
    assert handle.cancelled is False
    assert handle.result.exception().reason == {"name": ["taken"]}


def test_cancelling_the_awaiting_task_stops_the_send():
    async def scenario():
        stub = StubTransport({URL: json_response(200, "{}")})
        stub.hold()
        handle = dispatch(stub, URL, build_request_options("GET"))
        waiter = asyncio.ensure_future(handle)
        await asyncio.sleep(0)
        waiter.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await waiter
        for _ in range(5):
            await asyncio.sleep(0)
        return handle

    handle = asyncio.run(scenario())
    assert handle.result.cancelled() is True
    assert handle._task.cancelled() is True
