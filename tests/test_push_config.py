"""Tests for building the push channel configuration from settings."""

from __future__ import annotations

import json

import pytest

from pushgate.config import Settings, get_settings, reset_settings_cache
from pushgate.infrastructure.push.config import PushChannelConfig


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_defaults_disable_every_channel() -> None:
    config = PushChannelConfig.from_settings(_settings())

    assert config.structured_enabled is False
    assert config.legacy_enabled is False
    assert config.max_workers == 8
    assert config.credential_refresh_margin == 60


def test_service_account_enables_structured_channel(service_account_json) -> None:
    config = PushChannelConfig.from_settings(
        _settings(firebase_project_id="configured-project", firebase_service_account=service_account_json)
    )

    assert config.structured_enabled is True
    assert config.project_id == "configured-project"
    assert config.structured_identity.client_email == "pusher@demo-project.iam.gserviceaccount.com"


def test_project_id_falls_back_to_service_account(service_account_json) -> None:
    config = PushChannelConfig.from_settings(_settings(firebase_service_account=service_account_json))

    assert config.project_id == "demo-project"
    assert config.structured_enabled is True


def test_service_account_without_project_keeps_structured_disabled(rsa_key_pair) -> None:
    private_pem, _ = rsa_key_pair
    raw = json.dumps({"client_email": "svc@example.com", "private_key": private_pem})

    config = PushChannelConfig.from_settings(_settings(firebase_service_account=raw))

    assert config.structured_identity is not None
    assert config.structured_enabled is False


def test_malformed_service_account_only_disables_structured(caplog) -> None:
    with caplog.at_level("ERROR"):
        config = PushChannelConfig.from_settings(
            _settings(firebase_service_account="{broken", fcm_server_key="legacy-key")
        )

    assert config.structured_enabled is False
    assert config.legacy_enabled is True
    assert "Structured push channel disabled" in caplog.text


def test_blank_secrets_are_treated_as_missing() -> None:
    settings = _settings(firebase_project_id="  ", firebase_service_account="", fcm_server_key=" ")

    assert settings.firebase_project_id is None
    assert settings.firebase_service_account is None
    assert settings.fcm_server_key is None
    assert PushChannelConfig.from_settings(settings).legacy_enabled is False


def test_tuning_values_are_carried_over() -> None:
    config = PushChannelConfig.from_settings(
        _settings(
            fcm_base_url="https://fcm.test/",
            push_dispatch_max_workers=2,
            push_request_timeout_seconds=3.5,
            push_credential_cache_enabled=False,
        )
    )

    assert config.structured_base_url == "https://fcm.test"
    assert config.max_workers == 2
    assert config.request_timeout == 3.5
    assert config.cache_credentials is False


def test_settings_are_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FCM_SERVER_KEY", "from-env")
    monkeypatch.setenv("PUSH_DISPATCH_MAX_WORKERS", "3")
    reset_settings_cache()
    try:
        settings = get_settings()
        assert settings.fcm_server_key == "from-env"
        assert settings.push_dispatch_max_workers == 3
    finally:
        reset_settings_cache()
