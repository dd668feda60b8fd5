# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket
import ssl

import httpx
import pytest

from wireform import config
from wireform.config import DEFAULT_USER_AGENT, AdapterConfig, HttpSettings
from wireform.errors import ErrorCategory, ServerError, TransportError, categorize_exception
from wireform.log import setup_logging


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("WIREFORM_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("WIREFORM_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("WIREFORM_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("WIREFORM_HTTP_VERIFY_SSL", "0")

    settings = config.load_http_settings()

    assert settings.timeout == 5.5
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.verify_ssl is False


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("WIREFORM_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.delenv("WIREFORM_USER_AGENT", raising=False)

    settings = config.load_http_settings()

    assert settings.timeout == HttpSettings.timeout
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_http_settings_redirects_truthy_variants(monkeypatch):
    for value in ("1", "on", "YES", "true"):
        monkeypatch.setenv("WIREFORM_HTTP_REDIRECTS", value)
        assert config.load_http_settings().allow_redirects is True


def test_load_http_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("WIREFORM_HTTP_TIMEOUT", "7.7")
    assert config.load_http_settings().timeout == 7.7
    monkeypatch.setenv("WIREFORM_HTTP_TIMEOUT", "8.8")
    assert config.load_http_settings().timeout == 8.8


def test_adapter_config_is_immutable():
    source = {"SomeHeader": "test"}
    cfg = AdapterConfig(base_path="/api", headers=source, with_credentials=True)
    source["SomeHeader"] = "changed"

    assert cfg.headers["SomeHeader"] == "test"
    with pytest.raises(TypeError):
        cfg.headers["Other"] = "x"
    with pytest.raises(AttributeError):
        cfg.base_path = "/v2"


def test_adapter_config_with_changes_and_defaults():
    cfg = AdapterConfig(base_path="/api", headers={"A": "1"})
    other = cfg.with_changes(base_path="/v2", with_credentials=True)

    assert cfg.base_path == "/api"
    assert other.base_path == "/v2"
    assert dict(other.headers) == {"A": "1"}
    assert other.default_options() == {"headers": {"A": "1"}, "with_credentials": True}


def test_adapter_config_from_env(monkeypatch):
    monkeypatch.setenv("WIREFORM_BASE_PATH", "https://host/api")
    monkeypatch.setenv("WIREFORM_WITH_CREDENTIALS", "yes")
    monkeypatch.setenv("WIREFORM_HTTP_TIMEOUT", "2")

    cfg = AdapterConfig.from_env(headers={"X-App": "demo"})

    assert cfg.base_path == "https://host/api"
    assert cfg.with_credentials is True
    assert cfg.settings.timeout == 2.0
    assert dict(cfg.headers) == {"X-App": "demo"}


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (httpx.ConnectTimeout("slow"), ErrorCategory.TIMEOUT),
        (httpx.ReadTimeout("slow"), ErrorCategory.TIMEOUT),
        (httpx.ConnectError("refused"), ErrorCategory.CONNECTION_ERROR),
        (ConnectionResetError(), ErrorCategory.CONNECTION_ERROR),
        (socket.gaierror(-2, "Name or service not known"), ErrorCategory.DNS_ERROR),
        (ssl.SSLError("bad cert"), ErrorCategory.SSL_ERROR),
        (ValueError("other"), ErrorCategory.UNKNOWN_ERROR),
        (None, ErrorCategory.UNKNOWN_ERROR),
    ],
)
def test_categorize_exception(exc, expected):
    assert categorize_exception(exc) is expected


def test_categorize_exception_inspects_cause():
    exc = httpx.ConnectError("dns")
    exc.__cause__ = socket.gaierror(-2, "Name or service not known")
    assert categorize_exception(exc) is ErrorCategory.DNS_ERROR


def test_transport_error_keeps_raw_reason():
    raw = httpx.ReadTimeout("slow")
    failure = TransportError(raw)
    assert failure.reason is raw
    assert failure.category is ErrorCategory.TIMEOUT
    assert "ReadTimeout" in str(failure)


def test_server_error_message():
    failure = ServerError(["foo"], status_code=500, body={"errors": ["foo"]})
    assert str(failure) == "HTTP 500: ['foo']"
    assert failure.reason == ["foo"]


def test_setup_logging_honors_env(monkeypatch):
    captured = {}
    monkeypatch.setenv("WIREFORM_LOG_LEVEL", "debug")
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    setup_logging()
    assert captured["level"] == logging.DEBUG

    setup_logging("nonsense")
    assert captured["level"] == logging.WARNING
