"""Configuration tests."""

from __future__ import annotations

import pytest

from payoffplanner.config import BaseConfig, TestingConfig


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("PAYOFF_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("PAYOFF_MAX_MONTHS", raising=False)
    monkeypatch.delenv("PAYOFF_DATABASE_URL", raising=False)

    config = BaseConfig()
    assert config.MAX_MONTHS == 600
    assert config.SNAPSHOT_KEY == "payoff-planner-state-v2"
    assert config.SCHEDULE_PREVIEW == 24
    assert config.DATABASE_URL == f"sqlite:///{tmp_path / 'payoffplanner.db'}"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PAYOFF_MAX_MONTHS", "1200")
    monkeypatch.setenv("PAYOFF_SNAPSHOT_KEY", "custom")
    config = BaseConfig()
    assert config.MAX_MONTHS == 1200
    assert config.SNAPSHOT_KEY == "custom"


@pytest.mark.parametrize("value", ["soon", "0", "-5"])
def test_invalid_max_months(monkeypatch, value):
    monkeypatch.setenv("PAYOFF_MAX_MONTHS", value)
    with pytest.raises(ValueError):
        BaseConfig()


def test_secret_required_outside_dev(monkeypatch):
    monkeypatch.setenv("PAYOFF_DEV_MODE", "false")
    monkeypatch.delenv("PAYOFF_SECRET_KEY", raising=False)
    with pytest.raises(ValueError):
        BaseConfig()


def test_test_config_uses_memory_database():
    assert TestingConfig().DATABASE_URL == "sqlite://"
