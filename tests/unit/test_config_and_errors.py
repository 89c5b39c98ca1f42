# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket
import ssl

import httpx
import pytest

from statusprobe.config import DEFAULT_USER_AGENT, HttpSettings, load_http_settings
from statusprobe.errors import (
    CheckDefinitionError,
    ConfigError,
    ErrorCategory,
    StatusProbeError,
    categorize_exception,
    error_category_to_reason,
)
from statusprobe.log import resolve_level, setup_logging

ENV_VARS = (
    "STATUSPROBE_HTTP_TIMEOUT",
    "STATUSPROBE_USER_AGENT",
    "STATUSPROBE_HTTP_VERIFY_SSL",
    "STATUSPROBE_HTTP_MAX_BODY_BYTES",
    "STATUSPROBE_MAX_WORKERS",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_settings_defaults(clean_env):
    settings = load_http_settings()
    assert settings == HttpSettings()
    assert settings.timeout == 5.0
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.verify_ssl is True
    assert settings.max_workers is None


def test_settings_env_overrides(clean_env):
    clean_env.setenv("STATUSPROBE_HTTP_TIMEOUT", "2.5")
    clean_env.setenv("STATUSPROBE_USER_AGENT", "probe/9")
    clean_env.setenv("STATUSPROBE_HTTP_VERIFY_SSL", "false")
    clean_env.setenv("STATUSPROBE_HTTP_MAX_BODY_BYTES", "1024")
    clean_env.setenv("STATUSPROBE_MAX_WORKERS", "4")
    settings = HttpSettings.from_env()
    assert settings.timeout == 2.5
    assert settings.user_agent == "probe/9"
    assert settings.verify_ssl is False
    assert settings.max_body_bytes == 1024
    assert settings.max_workers == 4


def test_settings_ignore_invalid_values(clean_env):
    clean_env.setenv("STATUSPROBE_HTTP_TIMEOUT", "soon")
    clean_env.setenv("STATUSPROBE_HTTP_MAX_BODY_BYTES", "-5")
    clean_env.setenv("STATUSPROBE_MAX_WORKERS", "0")
    settings = HttpSettings.from_env()
    assert settings.timeout == 5.0
    assert settings.max_body_bytes == HttpSettings.max_body_bytes
    assert settings.max_workers is None


def test_error_hierarchy():
    assert issubclass(CheckDefinitionError, ConfigError)
    assert issubclass(ConfigError, StatusProbeError)


def test_categorize_exception():
    assert categorize_exception(httpx.ReadTimeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectTimeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.UnsupportedProtocol("gopher")) is ErrorCategory.INVALID_URL
    assert categorize_exception(httpx.ConnectError("refused")) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ssl.SSLError("bad cert")) is ErrorCategory.SSL_ERROR
    assert categorize_exception(ValueError("other")) is ErrorCategory.UNKNOWN_ERROR


def test_categorize_exception_follows_cause_chain():
    try:
        try:
            raise socket.gaierror(-2, "Name or service not known")
        except socket.gaierror as exc:
            raise httpx.ConnectError("lookup failed") from exc
    except httpx.ConnectError as wrapped:
        assert categorize_exception(wrapped) is ErrorCategory.DNS_ERROR


def test_error_category_reasons():
    assert error_category_to_reason(ErrorCategory.TIMEOUT) == "no response within the timeout"
    assert error_category_to_reason(ErrorCategory.UNKNOWN_ERROR) == "request failed"
    assert error_category_to_reason(None) == ""


def test_resolve_level():
    assert resolve_level("warn") == logging.WARNING
    assert resolve_level("error") == logging.ERROR
    assert resolve_level("DEBUG") == logging.DEBUG
    assert resolve_level("chatty") == logging.INFO


def test_setup_logging_mirrors_to_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "probe.log"
    setup_logging("debug", log_file)
    logging.getLogger("statusprobe.test").debug("hello file")
    for handler in restore_root_logger.handlers:
        handler.flush()
    assert restore_root_logger.level == logging.DEBUG
    text = log_file.read_text(encoding="utf-8")
    assert "[DEBUG] statusprobe.test: hello file" in text


def test_setup_logging_falls_back_to_console_when_log_file_is_unwritable(tmp_path, capsys, restore_root_logger):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    setup_logging("info", blocker / "sub" / "out.log")

    assert len(restore_root_logger.handlers) == 1
    assert not isinstance(restore_root_logger.handlers[0], logging.FileHandler)
    assert "Cannot write log file" in capsys.readouterr().err
