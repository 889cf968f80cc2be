import pytest
from pydantic import ValidationError
from listing_catalog.utils.config import AppSettings


def test_defaults(monkeypatch):
    for name in ("API_BASE_URL", "API_TOKEN", "SEARCH_DEBOUNCE_MS", "MEDIA_BASE_URL"):
        monkeypatch.delenv(name, raising=False)

    settings = AppSettings(_env_file=None)

    assert settings.SEARCH_DEBOUNCE_MS == 600
    assert settings.debounce_seconds == 0.6
    assert settings.API_TOKEN is None
    assert settings.MEDIA_BASE_URL.endswith("/uploads/imoveis")


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv("SEARCH_DEBOUNCE_MS", "250")
    monkeypatch.setenv("API_TOKEN", "tok")

    settings = AppSettings(_env_file=None)

    assert settings.API_BASE_URL == "https://api.example.com"
    assert settings.debounce_seconds == 0.25
    assert settings.API_TOKEN == "tok"


def test_negative_debounce_is_rejected(monkeypatch):
    monkeypatch.setenv("SEARCH_DEBOUNCE_MS", "-1")

    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)
