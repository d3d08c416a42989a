"""Tests for centralized configuration (settings)."""

from claim_registry.config import settings


def test_registry_defaults(monkeypatch):
    for key in (
        "CLAIM_REGISTRY_ADMIN",
        "CLAIM_REGISTRY_VERIFICATION_THRESHOLD",
        "CLAIM_REGISTRY_MAX_DISPUTE_REASON",
    ):
        monkeypatch.delenv(key, raising=False)
    config = settings.get_registry_config()
    assert config["admin"] == settings.DEFAULT_ADMIN == "ST1ADMIN"
    assert config["verification_threshold"] == settings.DEFAULT_VERIFICATION_THRESHOLD == 2
    assert config["max_dispute_reason_length"] == settings.DEFAULT_MAX_DISPUTE_REASON_LENGTH


def test_get_registry_config_returns_dict():
    config = settings.get_registry_config()
    assert set(config) == {
        "admin",
        "verification_threshold",
        "max_dispute_reason_length",
        "audit_enabled",
    }


def test_get_registry_config_respects_env(monkeypatch):
    monkeypatch.setenv("CLAIM_REGISTRY_ADMIN", "ST2ADMIN")
    monkeypatch.setenv("CLAIM_REGISTRY_VERIFICATION_THRESHOLD", "7")
    monkeypatch.setenv("CLAIM_REGISTRY_MAX_DISPUTE_REASON", "64")
    config = settings.get_registry_config()
    assert config["admin"] == "ST2ADMIN"
    assert config["verification_threshold"] == 7
    assert config["max_dispute_reason_length"] == 64
    assert settings.get_max_dispute_reason_length() == 64


def test_invalid_int_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("CLAIM_REGISTRY_VERIFICATION_THRESHOLD", "many")
    assert settings.get_registry_config()["verification_threshold"] == 2


def test_get_audit_enabled_respects_env(monkeypatch):
    monkeypatch.delenv("CLAIM_REGISTRY_AUDIT_ENABLED", raising=False)
    assert settings.get_audit_enabled() is False
    monkeypatch.setenv("CLAIM_REGISTRY_AUDIT_ENABLED", "true")
    assert settings.get_audit_enabled() is True
    monkeypatch.setenv("CLAIM_REGISTRY_AUDIT_ENABLED", "0")
    assert settings.get_audit_enabled() is False


def test_get_metrics_window(monkeypatch):
    monkeypatch.delenv("CLAIM_REGISTRY_METRICS_WINDOW", raising=False)
    assert settings.get_metrics_window() == settings.DEFAULT_METRICS_WINDOW
    monkeypatch.setenv("CLAIM_REGISTRY_METRICS_WINDOW", "50")
    assert settings.get_metrics_window() == 50
