"""Tests for configuration module."""

from pydantic import SecretStr

from ai_test_recorder._version import __version__
from ai_test_recorder.config import AI_REQUEST_TIMEOUT_SECONDS, AiSettings, Settings, get_settings


class TestSettings:
    """Tests for Settings class."""

    def test_defaults(self, clean_env):
        """Defaults apply without environment variables."""
        settings = Settings()

        assert settings.ai_endpoint == ""
        assert settings.ai_api_key is None
        assert settings.request_timeout_seconds == AI_REQUEST_TIMEOUT_SECONDS == 25.0
        assert settings.max_candidates == 12
        assert settings.log_level == "INFO"
        assert settings.extension_version == __version__

    def test_loads_from_env(self, clean_env, monkeypatch):
        """AI_RECORDER_* variables are read."""
        monkeypatch.setenv("AI_RECORDER_AI_ENDPOINT", "https://ai.example.test")
        monkeypatch.setenv("AI_RECORDER_AI_API_KEY", "env-key")
        monkeypatch.setenv("AI_RECORDER_MAX_CANDIDATES", "5")

        settings = get_settings()

        assert settings.ai_endpoint == "https://ai.example.test"
        assert settings.ai_api_key.get_secret_value() == "env-key"
        assert settings.max_candidates == 5

    def test_ai_settings(self, clean_env):
        settings = Settings(ai_endpoint=" https://x.test ", ai_model="m")

        ai = settings.ai_settings()

        assert ai.endpoint == "https://x.test"
        assert ai.model == "m"
        assert ai.api_key_value == ""


class TestAiSettings:
    """Tests for AiSettings."""

    def test_from_storage(self):
        settings = AiSettings.from_storage({"endpoint": " https://x.test ", "apiKey": " k ", "model": 3})

        assert settings.endpoint == "https://x.test"
        assert settings.api_key_value == "k"
        assert settings.model == ""

    def test_blank_key_is_none(self):
        assert AiSettings(api_key="   ").api_key is None
        assert AiSettings(api_key=SecretStr("s")).api_key_value == "s"

    def test_from_storage_non_dict(self):
        assert AiSettings.from_storage(None) == AiSettings()
