"""Unit tests for settings and base URL validation."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from mangadex_client import HttpClient
from mangadex_client.config import (
    API_DEV_URL,
    API_URL,
    AppSettings,
    ConfigurationError,
    parse_base_url,
)

ENV_VARS = (
    "MANGADEX_BASE_URL",
    "MANGADEX_USE_DEV",
    "MANGADEX_TIMEOUT_SECONDS",
    "MANGADEX_CONCURRENCY_MODE",
    "MANGADEX_LOG_LEVEL",
    "MANGADEX_ENV_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # .env loading writes to os.environ; keep those writes inside the test.
    monkeypatch.setattr(os, "environ", dict(os.environ))
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults_point_at_production() -> None:
    settings = AppSettings.from_env()

    assert settings.base_url == API_URL
    assert settings.timeout_seconds is None
    assert settings.concurrency_mode == "exclusive"


def test_use_dev_selects_dev_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MANGADEX_USE_DEV", "true")

    assert AppSettings.from_env().base_url == API_DEV_URL


def test_explicit_base_url_wins_over_dev_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MANGADEX_USE_DEV", "1")
    monkeypatch.setenv("MANGADEX_BASE_URL", "http://127.0.0.1:8000")

    assert AppSettings.from_env().base_url == "http://127.0.0.1:8000"


def test_env_values_are_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MANGADEX_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("MANGADEX_CONCURRENCY_MODE", "Shared")
    monkeypatch.setenv("MANGADEX_LOG_LEVEL", "debug")

    settings = AppSettings.from_env()

    assert settings.timeout_seconds == 12.5
    assert settings.concurrency_mode == "shared"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("MANGADEX_BASE_URL", "not a url"),
        ("MANGADEX_BASE_URL", "ftp://api.mangadex.org"),
        ("MANGADEX_TIMEOUT_SECONDS", "soon"),
        ("MANGADEX_TIMEOUT_SECONDS", "0"),
        ("MANGADEX_CONCURRENCY_MODE", "threads"),
        ("MANGADEX_LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_settings_fail_fast(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        AppSettings.from_env()


def test_env_file_does_not_override_existing_variables(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text(
        "# local overrides\n"
        "MANGADEX_CONCURRENCY_MODE=shared\n"
        'MANGADEX_LOG_LEVEL="INFO"\n'
        "UNRELATED=1\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("MANGADEX_ENV_FILE", str(env_file))
    monkeypatch.setenv("MANGADEX_LOG_LEVEL", "ERROR")
    monkeypatch.delenv("UNRELATED", raising=False)

    settings = AppSettings.from_env()

    assert settings.concurrency_mode == "shared"
    assert settings.log_level == "ERROR"
    assert "UNRELATED" not in os.environ


def test_parse_base_url_strips_trailing_slash() -> None:
    assert parse_base_url("https://api.mangadex.org/") == "https://api.mangadex.org"


def test_http_client_rejects_malformed_base_url_at_construction() -> None:
    with pytest.raises(ConfigurationError):
        HttpClient(base_url="api.mangadex.org")


def test_dev_client_uses_dev_url() -> None:
    assert HttpClient.api_dev_client().base_url == API_DEV_URL
