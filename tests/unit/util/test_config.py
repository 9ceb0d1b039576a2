"""Unit tests for Settings."""

import pytest

from authlink.config import PLACEHOLDER, Settings
from authlink.util.error import ConfigurationError


class TestSettings:
    def test_callback_urls_follow_host(self):
        settings = Settings(environment="production", host="auth.example.com")

        assert settings.api.base_url == "https://auth.example.com"
        assert (
            settings.auth.github_callback_url
            == "https://auth.example.com/auth/github/callback"
        )
        assert (
            settings.auth.google_callback_url
            == "https://auth.example.com/auth/google/callback"
        )

    def test_local_development_urls(self):
        settings = Settings(environment="development", host="localhost", port=8000)

        assert settings.api.base_url == "http://localhost:8000"
        assert settings.api.frontend_url == "http://localhost:3000"


class TestRequire:
    def test_empty_value_rejected(self):
        settings = Settings(environment="development")

        with pytest.raises(ConfigurationError, match="AUTH__GITHUB__CLIENT_ID"):
            settings.require("AUTH__GITHUB__CLIENT_ID", "")

    def test_placeholder_allowed_outside_production(self):
        settings = Settings(environment="development")

        assert settings.require("AUTH__JWT_SECRET", PLACEHOLDER) == PLACEHOLDER

    def test_placeholder_rejected_in_production(self):
        settings = Settings(environment="production")

        with pytest.raises(ConfigurationError) as exc_info:
            settings.require("AUTH__JWT_SECRET", PLACEHOLDER)

        assert exc_info.value.setting == "AUTH__JWT_SECRET"
