"""Tests for RegistrySettings read from REGISTRY_* environment variables."""

import pytest

from anagrafica.application import DeliveryMode
from anagrafica.infrastructure import RegistrySettings

_KEYS = (
    "REGISTRY_REMINDER_HORIZON_DAYS",
    "REGISTRY_PHONE_REGION",
    "REGISTRY_DELIVERY_MODE",
    "REGISTRY_MAX_PENDING_SNAPSHOTS",
    "REGISTRY_SEED_DEMO",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_when_environment_empty() -> None:
    settings = RegistrySettings()
    assert settings.reminder_horizon_days == 60
    assert settings.phone_region == "IT"
    assert settings.delivery_mode is DeliveryMode.SYNC
    assert settings.max_pending_snapshots is None
    assert settings.seed_demo is False


def test_values_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("REGISTRY_REMINDER_HORIZON_DAYS", "30")
    monkeypatch.setenv("REGISTRY_PHONE_REGION", "us")
    monkeypatch.setenv("REGISTRY_DELIVERY_MODE", "Buffered")
    monkeypatch.setenv("REGISTRY_MAX_PENDING_SNAPSHOTS", "10")
    monkeypatch.setenv("REGISTRY_SEED_DEMO", "yes")
    settings = RegistrySettings()
    assert settings.reminder_horizon_days == 30
    assert settings.phone_region == "US"
    assert settings.delivery_mode is DeliveryMode.BUFFERED
    assert settings.max_pending_snapshots == 10
    assert settings.seed_demo is True


def test_empty_region_means_no_default_region(monkeypatch) -> None:
    monkeypatch.setenv("REGISTRY_PHONE_REGION", " ")
    assert RegistrySettings().phone_region is None


def test_blank_max_pending_is_unbounded(monkeypatch) -> None:
    monkeypatch.setenv("REGISTRY_MAX_PENDING_SNAPSHOTS", "")
    assert RegistrySettings().max_pending_snapshots is None


@pytest.mark.parametrize(
    "key, value",
    [
        ("REGISTRY_REMINDER_HORIZON_DAYS", "soon"),
        ("REGISTRY_REMINDER_HORIZON_DAYS", "-1"),
        ("REGISTRY_DELIVERY_MODE", "carrier-pigeon"),
        ("REGISTRY_MAX_PENDING_SNAPSHOTS", "0"),
    ],
)
def test_bad_values_raise(monkeypatch, key, value) -> None:
    monkeypatch.setenv(key, value)
    with pytest.raises(ValueError):
        RegistrySettings()


def test_settings_are_frozen() -> None:
    settings = RegistrySettings()
    with pytest.raises(ValueError):
        settings.seed_demo = True
