# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level adapter: one method per HTTP verb over a shared transport."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypedDict

from .config import AdapterConfig, HttpSettings, load_http_settings
from .encoding.payload import RequestData
from .http.client import HttpTransport, create_default_transport
from .http.dispatch import RequestHandle, dispatch
from .http.models import ProgressCallback
from .http.options import build_request_options
from .http.url import join_path


class RequestOptions(TypedDict, total=False):
    headers: Mapping[str, str]
    with_credentials: bool
    on_progress: ProgressCallback
    timeout: float


def merge_options(defaults: Mapping[str, Any], overrides: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Shallow merge: each key of `overrides` replaces the default for that key.

    A per-call `headers` mapping therefore replaces the default headers as a whole.
    """
    merged = dict(defaults)
    merged.update(overrides or {})
    return merged


class Adapter:
    """
    Convenience wrapper that wires one configuration and transport across calls.

    Every verb method returns a RequestHandle immediately; `await` it for the decoded
    body, or call `cancel()` to abandon the request.
    """

    def __init__(self, config: AdapterConfig | None = None, transport: HttpTransport | None = None):
        self.config = config or AdapterConfig()
        self._owns_transport = transport is None
        self.transport = transport or create_default_transport(self.config.settings)

    def url_for(self, path: str) -> str:
        return join_path(self.config.base_path, path)

    def request(
        self,
        method: str,
        path: str,
        data: RequestData | None = None,
        options: RequestOptions | None = None,
    ) -> RequestHandle:
        merged = merge_options(self.config.default_options(), options)
        descriptor = build_request_options(
            method,
            data,
            headers=merged.get("headers"),
            with_credentials=bool(merged.get("with_credentials")),
            on_progress=merged.get("on_progress"),
        )
        return dispatch(self.transport, self.url_for(path), descriptor, timeout=merged.get("timeout"))

    def get(self, path: str, data: RequestData | None = None, options: RequestOptions | None = None) -> RequestHandle:
        return self.request("GET", path, data, options)

    def post(self, path: str, data: RequestData | None = None, options: RequestOptions | None = None) -> RequestHandle:
        return self.request("POST", path, data, options)

    def put(self, path: str, data: RequestData | None = None, options: RequestOptions | None = None) -> RequestHandle:
        return self.request("PUT", path, data, options)

    def patch(self, path: str, data: RequestData | None = None, options: RequestOptions | None = None) -> RequestHandle:
        return self.request("PATCH", path, data, options)

    def delete(self, path: str, data: RequestData | None = None, options: RequestOptions | None = None) -> RequestHandle:
        return self.request("DELETE", path, data, options)

    def with_options(self, **changes: Any) -> Adapter:
        """Derive an adapter with a modified config that shares this adapter's transport."""
        return Adapter(self.config.with_changes(**changes), transport=self.transport)

    async def aclose(self) -> None:
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> Adapter:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


def create_adapter(
    base_path: str = "",
    headers: Mapping[str, str] | None = None,
    with_credentials: bool = False,
    *,
    settings: HttpSettings | None = None,
    transport: HttpTransport | None = None,
) -> Adapter:
    """Build an Adapter from keyword configuration."""
    config = AdapterConfig(
        base_path=base_path,
        headers=headers or {},
        with_credentials=with_credentials,
        settings=settings or load_http_settings(),
    )
    return Adapter(config, transport=transport)


__all__ = ["Adapter", "RequestOptions", "create_adapter", "merge_options"]
