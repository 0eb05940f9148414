"""Tests for settings loading and validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from blogpush.config import DEFAULT_VAPID_PUBLIC_KEY, Settings, get_settings, reset_settings_cache
from blogpush.utils import url_base64_to_bytes


@pytest.fixture()
def clean_settings_cache():
    reset_settings_cache()
    yield
    reset_settings_cache()


def test_settings_are_read_from_environment(monkeypatch, clean_settings_cache) -> None:
    monkeypatch.setenv("API_BASE_URL", "https://api.example/api/")
    monkeypatch.setenv("REGISTRY_TOKEN", "secret")

    settings = get_settings()

    assert settings.api_base_url == "https://api.example/api"
    assert settings.registry_token == "secret"
    assert get_settings() is settings


def test_relative_site_origin_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, site_origin="blog.example")


def test_unknown_platform_backend_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, platform_backend="firebase")


def test_default_application_server_key_is_an_uncompressed_point() -> None:
    key = url_base64_to_bytes(DEFAULT_VAPID_PUBLIC_KEY)

    assert len(key) == 65
    assert key[0] == 0x04
