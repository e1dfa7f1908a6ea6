"""Tests for service_readiness.settings.Settings behavior."""

from typing import Any

import pytest
from pydantic import ValidationError

from service_readiness.settings import Settings, get_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch):
    """Defaults should be stable even if external env or .env sets values.

    We explicitly delete both upper & lower case variants and bypass .env loading
    by passing `_env_file=None`.
    """
    for var in [
        "SERVICE_READINESS_HOST",
        "SERVICE_READINESS_INTERVAL",
        "SERVICE_READINESS_LOG_LEVEL",
        "SERVICE_READINESS_MAX_ATTEMPTS",
        "SERVICE_READINESS_TIMEOUT",
        "service_readiness_host",
        "service_readiness_interval",
    ]:
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)  # ignore project .env file if present
    assert s.host == "127.0.0.1"
    assert s.interval == 1.0
    assert s.log_level == "INFO"
    assert s.max_attempts is None
    assert s.timeout == 120.0
    assert s.attempt_timeout == 5.0
    assert s.plugin_pattern == "*.hpi"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SERVICE_READINESS_HOST", "10.0.0.5")
    monkeypatch.setenv("SERVICE_READINESS_INTERVAL", "0.5")
    monkeypatch.setenv("SERVICE_READINESS_MAX_ATTEMPTS", "30")
    monkeypatch.setenv("SERVICE_READINESS_LOG_LEVEL", "debug")
    s = Settings(_env_file=None)
    assert s.host == "10.0.0.5"
    assert s.interval == 0.5
    assert s.max_attempts == 30
    assert s.log_level == "DEBUG"


def test_case_insensitive_env_name(monkeypatch: pytest.MonkeyPatch):
    # lower-case variable name should still be picked up due to case_sensitive=False
    monkeypatch.setenv("service_readiness_host", "10.10.10.10")  # type: ignore[arg-type]
    s = Settings(_env_file=None)
    assert s.host == "10.10.10.10"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="LOUD")


@pytest.mark.parametrize("override", [{"interval": 0}, {"max_attempts": 0}, {"attempt_timeout": -1}])
def test_invalid_bounds_rejected(override: dict[str, Any]):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **override)


def test_get_settings_singleton():
    a = get_settings()
    b = get_settings()
    assert a is b


def test_get_settings_cache_not_affected_by_new_env(monkeypatch: pytest.MonkeyPatch):
    # Ensure cache stability: first call caches values
    first = get_settings()
    original_host = first.host
    monkeypatch.setenv("SERVICE_READINESS_HOST", "203.0.113.5")
    second = get_settings()
    assert second is first
    assert second.host == original_host  # cache not invalidated


@pytest.mark.parametrize(
    "override,expected",
    [
        ({"host": "1.1.1.1"}, "1.1.1.1"),
        ({"interval": 2.5}, 2.5),
        ({"plugin_pattern": "*.jpi"}, "*.jpi"),
    ],
)
def test_direct_instantiation_with_overrides(override: dict[str, Any], expected: Any):
    s = Settings(_env_file=None, **override)
    key = next(iter(override.keys()))
    assert getattr(s, key) == expected
