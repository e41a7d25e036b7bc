"""Configuration management for the AI test recorder."""

from typing import Any, Optional

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._version import __version__

# Outbound AI calls are abandoned after this many seconds
AI_REQUEST_TIMEOUT_SECONDS = 25.0


class AiSettings(BaseModel):
    """User-supplied AI endpoint settings.

    Mirrors what the extension keeps in local storage. Values come from an
    untrusted store, so non-string entries collapse to empty strings.
    """

    endpoint: str = ""
    api_key: Optional[SecretStr] = None
    model: str = ""

    @field_validator("endpoint", "model", mode="before")
    @classmethod
    def _trim(cls, value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""

    @field_validator("api_key", mode="before")
    @classmethod
    def _trim_key(cls, value: Any) -> Optional[str]:
        if isinstance(value, SecretStr):
            value = value.get_secret_value()
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()

    @classmethod
    def from_storage(cls, stored: Any) -> "AiSettings":
        """Build from the stored ``{endpoint, apiKey, model}`` dictionary."""
        stored = stored if isinstance(stored, dict) else {}
        return cls(
            endpoint=stored.get("endpoint"),
            api_key=stored.get("apiKey"),
            model=stored.get("model"),
        )

    @property
    def api_key_value(self) -> str:
        return self.api_key.get_secret_value() if self.api_key else ""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AI_RECORDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # AI endpoint
    ai_endpoint: str = Field("", description="Selector suggestion / code review endpoint")
    ai_api_key: Optional[SecretStr] = Field(None, description="API key sent as Bearer and x-api-key")
    ai_model: str = Field("", description="Default model name passed to the endpoint")
    request_timeout_seconds: float = Field(
        AI_REQUEST_TIMEOUT_SECONDS,
        description="Timeout for a single outbound AI request",
    )

    # Candidate pipeline
    max_candidates: int = Field(12, description="Candidates kept after normalization")

    # Request metadata
    extension_name: str = Field("ai_test_recorder", description="Client identity sent with requests")
    extension_version: str = Field(__version__, description="Client version sent with requests")

    # Logging
    log_level: str = Field("INFO", description="Log level")
    log_json: bool = Field(False, description="Render logs as JSON")

    def ai_settings(self) -> AiSettings:
        """AI endpoint settings in the stored-settings shape."""
        return AiSettings(
            endpoint=self.ai_endpoint,
            api_key=self.ai_api_key,
            model=self.ai_model,
        )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
