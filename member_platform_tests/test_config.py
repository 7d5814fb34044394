"""Tests for settings."""
import logging
from datetime import timedelta

import pytest
from pydantic import ValidationError as SettingsValidationError

from member_platform.member_service.auth import build_token_guard
from member_platform.member_service.config import DEFAULT_SECRET_KEY, MIN_PASSWORD_HASH_ROUNDS, Settings
from member_platform.member_service.main import warn_if_default_secret


def test_defaults():
    config = Settings(_env_file=None)
    assert config.TOKEN_EXPIRE_HOURS == 24
    assert config.TOKEN_LEEWAY_SECONDS == 0
    assert config.MEMBERSHIP_ID_PREFIX == "LBK"
    assert config.DEFAULT_MEMBER_LEVEL == "Gold"
    assert config.PASSWORD_HASH_ROUNDS == MIN_PASSWORD_HASH_ROUNDS


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("TOKEN_EXPIRE_HOURS", "12")
    monkeypatch.setenv("SECRET_KEY", "env-secret-0123456789abcdef-0123456789")
    config = Settings(_env_file=None)
    assert config.TOKEN_EXPIRE_HOURS == 12

    guard = build_token_guard(config)
    assert guard.lifetime == timedelta(hours=12)
    assert guard.leeway == timedelta(0)


def test_secret_is_masked():
    config = Settings(_env_file=None, SECRET_KEY="do-not-print-0123456789abcdef-0123")
    assert "do-not-print" not in repr(config)
    assert "do-not-print" not in str(config.SECRET_KEY)


def test_weak_hash_rounds_rejected():
    with pytest.raises(SettingsValidationError):
        Settings(_env_file=None, PASSWORD_HASH_ROUNDS=1000)



def test_default_secret_is_flagged(caplog):
    with caplog.at_level(logging.WARNING):
        assert warn_if_default_secret(Settings(_env_file=None)) is True
    assert any("SECRET_KEY is not set" in rec.getMessage() for rec in caplog.records)
    # The secret value itself never reaches the log
    assert all(DEFAULT_SECRET_KEY not in rec.getMessage() for rec in caplog.records)


def test_configured_secret_is_not_flagged(caplog):
    config = Settings(_env_file=None, SECRET_KEY="operator-secret-0123456789abcdef-0123")
    assert config.uses_default_secret is False
    with caplog.at_level(logging.WARNING):
        assert warn_if_default_secret(config) is False
    assert not any("SECRET_KEY is not set" in rec.getMessage() for rec in caplog.records)
