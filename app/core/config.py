"""Application-wide settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings model."""

    PLACES_API_KEY: str | None = None
    OPENAI_API_KEY: str | None = None
    LLM_MODEL_NAME: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.55
    REQUEST_TIMEOUT_SECONDS: int = 30
    LLM_TIMEOUT_SECONDS: int = 20
    EXTERNAL_API_TIMEOUT_SECONDS: int = 15
    PLACES_TIMEOUT_SECONDS: int = 10
    WEATHER_TIMEOUT_SECONDS: int = 10
    PLACES_SEARCH_RADIUS_METERS: int = 5000
    PLACES_MAX_RESULTS: int = 60
    APP_ENV: str = "development"
    DOCS_MODE: str = "disabled"
    EXPOSE_INTERNAL_ERRORS: bool = False
    CORS_ALLOW_ORIGINS: str = ""
    CORS_ALLOW_METHODS: str = "GET,POST,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type"
    CORS_ALLOW_CREDENTIALS: bool = False
    SECURITY_HEADERS_ENABLED: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("PLACES_SEARCH_RADIUS_METERS", mode="before")
    @classmethod
    def _clamp_places_search_radius(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 5000
        except (TypeError, ValueError):
            numeric = 5000
        return min(50000, max(1, numeric))

    @field_validator("PLACES_MAX_RESULTS", mode="before")
    @classmethod
    def _clamp_places_max_results(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 60
        except (TypeError, ValueError):
            numeric = 60
        return min(60, max(1, numeric))


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings instance, created on first call."""
    return Settings()
