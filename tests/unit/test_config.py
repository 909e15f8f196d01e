"""
Unit tests for pydantic-settings configuration.
"""

import pytest
from pydantic import ValidationError

from dashform.config import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("DASHFORM_API_KEY", "DASHFORM_APP_KEY", "DASHFORM_API_URL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.api_url == "https://api.datadoghq.com"
        assert settings.lenient_numeric_parsing is False
        assert settings.has_credentials is False

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("DASHFORM_API_KEY", "key")
        monkeypatch.setenv("DASHFORM_APP_KEY", "app")
        monkeypatch.setenv("DASHFORM_LENIENT_NUMERIC_PARSING", "true")

        settings = Settings(_env_file=None)

        assert settings.has_credentials is True
        assert settings.lenient_numeric_parsing is True

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DASHFORM_TIMEOUT", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("DASHFORM_TIMEOUT=5\n", encoding="utf-8")

        assert Settings(_env_file=env_file).timeout == 5.0

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, timeout=0)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
