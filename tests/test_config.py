from __future__ import annotations

import logging

import pytest

from ai_dashboard.config import (
    DEFAULT_DATA_SOURCE,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_TIMEZONE,
    configure_logging,
    load_settings,
)

SETTING_VARS = ["DATA_SOURCE", "DASHBOARD_TIMEZONE", "DATA_FETCH_TIMEOUT", "LOG_LEVEL"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in SETTING_VARS:
        monkeypatch.delenv(name, raising=False)


def test_load_settings_defaults():
    settings = load_settings()

    assert settings.data_source == DEFAULT_DATA_SOURCE
    assert settings.timezone == DEFAULT_TIMEZONE
    assert settings.fetch_timeout == DEFAULT_FETCH_TIMEOUT
    assert settings.log_level == "INFO"


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("DATA_SOURCE", "https://dashboard.example/data.json")
    monkeypatch.setenv("DASHBOARD_TIMEZONE", "Asia/Makassar")
    monkeypatch.setenv("DATA_FETCH_TIMEOUT", "7.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.data_source == "https://dashboard.example/data.json"
    assert settings.timezone == "Asia/Makassar"
    assert settings.fetch_timeout == 7.5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_load_settings_ignores_invalid_timeout(monkeypatch, caplog, raw):
    monkeypatch.setenv("DATA_FETCH_TIMEOUT", raw)

    with caplog.at_level(logging.WARNING, logger="ai_dashboard.config"):
        settings = load_settings()

    assert settings.fetch_timeout == DEFAULT_FETCH_TIMEOUT
    assert "DATA_FETCH_TIMEOUT" in caplog.text


def test_load_settings_ignores_unknown_timezone(monkeypatch):
    monkeypatch.setenv("DASHBOARD_TIMEZONE", "Mars/Olympus_Mons")

    assert load_settings().timezone == DEFAULT_TIMEZONE


def test_configure_logging_falls_back_on_unknown_level():
    configure_logging("LOUD")

    assert logging.getLogger("ai_dashboard").level == logging.INFO
