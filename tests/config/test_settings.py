"""Tests for environment-driven settings."""
from __future__ import annotations

import pytest

from argcheck import ConfigurationError, apply_checks, checker, get_settings, reload_settings
from argcheck.config import DEFAULT_NAME_FORMAT, validate_name_format

is_character = checker("isinstance(x, str)", "'%s' must be a character.")


def test_defaults(monkeypatch):
    for var in ("ARGCHECK_NAME_FORMAT", "ARGCHECK_INFER_NAMES", "ARGCHECK_TELEMETRY"):
        monkeypatch.delenv(var, raising=False)

    settings = reload_settings()

    assert settings.name_format == DEFAULT_NAME_FORMAT == "check_%s"
    assert settings.infer_names is True
    assert settings.telemetry is True


@pytest.mark.parametrize("raw", ["0", "false", "No", " off ", ""])
def test_falsy_flags(monkeypatch, raw):
    monkeypatch.setenv("ARGCHECK_TELEMETRY", raw)

    assert reload_settings().telemetry is False


def test_settings_are_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("ARGCHECK_INFER_NAMES", "0")

    assert get_settings() is first
    assert reload_settings().infer_names is False


def test_name_format_from_environment(monkeypatch):
    monkeypatch.setenv("ARGCHECK_NAME_FORMAT", "is_%s")
    reload_settings()

    assert apply_checks("Carl", ["character"]) == "Carl"


def test_invalid_name_format_in_environment(monkeypatch):
    monkeypatch.setenv("ARGCHECK_NAME_FORMAT", "checks")

    with pytest.raises(ConfigurationError):
        reload_settings()


@pytest.mark.parametrize("fmt", ["check_", "%s_%s", "check-%s", "%d"])
def test_validate_name_format_rejects(fmt):
    with pytest.raises(ConfigurationError):
        validate_name_format(fmt)


def test_validate_name_format_accepts():
    assert validate_name_format("assert_%s_ok") == "assert_%s_ok"
