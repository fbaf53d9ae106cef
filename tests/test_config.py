import pytest

from a11y_audit.config import DEFAULT_AXE_TAGS, Settings


def test_defaults(monkeypatch):
    for name in ("A11Y_AUDIT_TIMEOUT", "A11Y_AUDIT_AXE_TAGS", "A11Y_AUDIT_STORE_CAPACITY",
                 "A11Y_AUDIT_SUGGESTION_TTL", "A11Y_AUDIT_PROVIDER", "A11Y_AUDIT_AXE_SOURCE"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.timeout == 30.0
    assert settings.axe_tags == DEFAULT_AXE_TAGS
    assert settings.store_capacity == 50
    assert settings.suggestion_ttl == 3600
    assert settings.provider == "google"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("A11Y_AUDIT_TIMEOUT", "10")
    monkeypatch.setenv("A11Y_AUDIT_AXE_TAGS", "wcag2a, wcag22aa")
    monkeypatch.setenv("A11Y_AUDIT_STORE_CAPACITY", "5")
    monkeypatch.setenv("A11Y_AUDIT_PROVIDER", "OpenAI")
    monkeypatch.setenv("A11Y_AUDIT_AXE_SOURCE", "/opt/axe.min.js")

    settings = Settings.from_env()
    assert settings.timeout == 10.0
    assert settings.axe_tags == ("wcag2a", "wcag22aa")
    assert settings.store_capacity == 5
    assert settings.provider == "openai"
    assert settings.axe_source == "/opt/axe.min.js"


def test_bad_number_is_reported(monkeypatch):
    monkeypatch.setenv("A11Y_AUDIT_STORE_CAPACITY", "lots")
    with pytest.raises(ValueError, match="A11Y_AUDIT_STORE_CAPACITY"):
        Settings.from_env()
