# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for wireform."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from .version import __version__

DEFAULT_USER_AGENT = f"wireform/{__version__}"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class HttpSettings:
    """Transport defaults."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> HttpSettings:
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_float_env("WIREFORM_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("WIREFORM_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("WIREFORM_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("WIREFORM_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def _freeze_headers(headers: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(headers or {}))


@dataclass(frozen=True)
class AdapterConfig:
    """
    Immutable configuration shared by every call made through one Adapter.

    `headers` and `with_credentials` are the defaults that per-call options are
    merged over; `base_path` is prefixed verbatim to each relative path.
    """

    base_path: str = ""
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    with_credentials: bool = False
    settings: HttpSettings = field(default_factory=load_http_settings)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _freeze_headers(self.headers))

    def with_changes(self, **changes: Any) -> AdapterConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def default_options(self) -> dict[str, Any]:
        """Process-wide call options in the same shape as per-call overrides."""
        return {"headers": dict(self.headers), "with_credentials": self.with_credentials}

    @classmethod
    def from_env(cls, headers: Mapping[str, str] | None = None) -> AdapterConfig:
        """Build a config from `WIREFORM_*` environment variables."""
        return cls(
            base_path=os.getenv("WIREFORM_BASE_PATH", ""),
            headers=headers or {},
            with_credentials=_bool_env("WIREFORM_WITH_CREDENTIALS", False),
            settings=load_http_settings(),
        )


__all__ = ["DEFAULT_USER_AGENT", "AdapterConfig", "HttpSettings", "load_http_settings"]
