"""
Tests for settings parsing and validation.
"""

import pytest
from pydantic import ValidationError

from timebill.config import DEFAULT_CORS_ORIGINS, DEFAULT_JWT_SECRET, Settings


def make_settings(**kwargs):
    return Settings(_env_file=None, **kwargs)


class TestSettings:
    def test_defaults(self):
        settings = make_settings()

        assert settings.api_prefix == "/api/v1"
        assert settings.storage_backend == "memory"
        assert settings.modification_window_hours == 24
        assert settings.activity_date_max_age_days == 30
        assert settings.invoice_number_prefix == "INV"

    def test_cors_origins_from_comma_string(self):
        settings = make_settings(cors_origins="https://a.test, https://b.test")
        assert settings.cors_origins == ["https://a.test", "https://b.test"]

    def test_blank_cors_origins_fall_back(self):
        assert make_settings(cors_origins=" ").cors_origins == DEFAULT_CORS_ORIGINS

    def test_storage_backend_normalised(self):
        assert make_settings(storage_backend="DATABASE").storage_backend == "database"

    def test_unknown_storage_backend_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(storage_backend="redis")

    def test_environment_flags(self):
        settings = make_settings(environment="Production")
        assert settings.is_production
        assert not settings.is_development
        assert make_settings(environment="testing").is_testing

    def test_smtp_configured(self):
        assert not make_settings().smtp_configured
        assert make_settings(smtp_host="mail.example.com").smtp_configured

    def test_production_requires_real_secret(self):
        settings = make_settings(environment="production", jwt_secret_key=DEFAULT_JWT_SECRET)

        with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
            settings.validate_environment()

    def test_production_with_secret_passes(self):
        make_settings(environment="production", jwt_secret_key="s3cret").validate_environment()

    def test_env_variables_are_read(self, monkeypatch):
        monkeypatch.setenv("INVOICE_NUMBER_PREFIX", "BILL")
        monkeypatch.setenv("MODIFICATION_WINDOW_HOURS", "48")

        settings = make_settings()

        assert settings.invoice_number_prefix == "BILL"
        assert settings.modification_window_hours == 48
