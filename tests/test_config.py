from datetime import timedelta

import pytest

from app.core.config import EnvironmentMode, Settings
from app.services.auth import AuthConfig


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_defaults():
    settings = make_settings()

    assert settings.master_code is None
    assert settings.master_code_enabled is False


def test_env_mode_accepts_any_case():
    assert make_settings(env_mode="PRODUCTION").env_mode is EnvironmentMode.PRODUCTION


def test_invalid_env_mode_is_rejected():
    with pytest.raises(ValueError):
        make_settings(env_mode="qa")


def test_app_base_url_has_no_trailing_slash():
    assert make_settings(app_base_url="https://menu.example.com/").app_base_url == (
        "https://menu.example.com"
    )


def test_secure_cookie_follows_environment():
    assert make_settings(env_mode="development").session_cookie_secure is False
    assert make_settings(env_mode="production").session_cookie_secure is True
    assert make_settings(env_mode="production", cookie_secure=False).session_cookie_secure is False


def test_production_requires_sendgrid_key():
    assert make_settings(env_mode="development").validate_production_config() == []
    assert make_settings(env_mode="production").validate_production_config() == [
        "SENDGRID_API_KEY"
    ]
    assert make_settings(
        env_mode="staging", sendgrid_api_key="SG.key"
    ).validate_production_config() == []


def test_auth_config_from_settings():
    config = AuthConfig.from_settings(make_settings(master_code="LETMEIN"))

    assert config.master_code == "LETMEIN"
    assert config.master_code_enabled is True
    assert config.code_ttl == timedelta(minutes=10)
    assert config.session_ttl == timedelta(days=30)


def test_empty_master_code_disables_it():
    config = AuthConfig.from_settings(make_settings(master_code=""))

    assert config.master_code is None
    assert config.master_code_enabled is False
