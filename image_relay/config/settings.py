"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Gemini API credential (GEMINI_API_KEY). Every /api/* route degrades to 500 without it.
    gemini_api_key: str | None = None

    # Service Configuration
    host: str = "0.0.0.0"
    port: int = 3001

    # Model candidates for image generation, tried in order
    image_model_candidates: list[str] = [
        "gemini-2.5-flash-image-preview",
        "gemini-2.0-flash-exp",
        "gemini-2.5-flash-image",
        "gemini-1.5-flash",
        "gemini-1.5-pro",
        "gemini-pro",
    ]

    # Models probed by /api/test-key, tried in order
    key_test_models: list[str] = [
        "gemini-2.5-flash-image-preview",
        "gemini",
        "gemini-pro",
        "gemini-1.0-pro",
        "gemini-1.5-pro",
        "gemini-1.5-flash",
        "gemini-2.0-flash-exp",
    ]

    # Models reported by /api/models
    listed_models: list[str] = [
        "gemini-2.0-flash-exp",
        "gemini-1.5-flash",
        "gemini-1.5-pro",
        "gemini-pro",
        "gemini-1.0-pro",
        "gemini-1.5-flash-latest",
        "gemini-1.5-pro-latest",
    ]

    # Generation Configuration
    generation_temperature: float = 1.0

    # Retry Configuration
    max_quota_retries: int = 2  # Extra attempts on the same model after a quota error
    quota_retry_delay_seconds: float = 5.0  # Fixed wait between quota retries
    default_retry_after_seconds: int = 16  # Reported when the provider gives no RetryInfo

    # Response Configuration
    response_preview_chars: int = 500  # Text returned when a model answers without an image

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def key_loaded(self) -> bool:
        """Whether a Gemini API key is configured."""
        return bool(self.gemini_api_key)

    @property
    def key_preview(self) -> str:
        """First characters of the API key, safe to show in diagnostics."""
        return f"{(self.gemini_api_key or '')[:10]}..."


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
