"""Tests for settings and logging configuration."""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest
from pydantic import ValidationError

from watchpost.common.config import WatchpostSettings, configure_logging


def test_settings_defaults():
    settings = WatchpostSettings()
    assert settings.environment == "dev"
    assert settings.log_level == "INFO"
    assert settings.default_evaluation_periods == 3
    assert settings.default_period == timedelta(minutes=1)
    assert settings.default_timeout_percent == 80.0


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("WATCHPOST_DEFAULT_EVALUATION_PERIODS", "5")
    monkeypatch.setenv("watchpost_log_level", "DEBUG")
    settings = WatchpostSettings()
    assert settings.default_evaluation_periods == 5
    assert settings.log_level == "DEBUG"


def test_settings_reject_zero_evaluation_periods():
    with pytest.raises(ValidationError):
        WatchpostSettings(default_evaluation_periods=0)


def test_configure_logging_uses_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    configure_logging(WatchpostSettings(log_level="WARNING"))
    assert calls[0]["level"] == logging.WARNING
    assert "%(name)s" in calls[0]["format"]
