from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"

KNOWN_GEMINI_MODELS: tuple[str, ...] = (
    "gemini-1.5-flash",
    "gemini-1.5-flash-8b",
    "gemini-1.5-pro",
    "gemini-2.0-flash",
    "gemini-2.0-flash-lite",
    "gemini-2.5-flash",
    "gemini-2.5-pro",
)


def _split_csv(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = Field(default="Gemini Chat Relay", alias="APP_NAME")
    environment: Literal["local", "dev", "staging", "prod"] = Field(
        default="local", alias="ENVIRONMENT"
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=10000, alias="PORT")
    reload: bool = Field(default=False, alias="RELOAD")

    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    )
    gemini_model: str = Field(default=DEFAULT_GEMINI_MODEL, alias="GEMINI_MODEL")
    gemini_allowed_models_raw: str | None = Field(
        default=None, alias="GEMINI_ALLOWED_MODELS"
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com", alias="GEMINI_BASE_URL"
    )
    gemini_timeout_seconds: float | None = Field(
        default=None, alias="GEMINI_TIMEOUT_SECONDS"
    )

    # Unset means every origin is allowed.
    cors_origin: str | None = Field(default=None, alias="CORS_ORIGIN")

    static_dir: str = Field(default="public", alias="STATIC_DIR")

    @property
    def gemini_allowed_models(self) -> frozenset[str]:
        models = _split_csv(self.gemini_allowed_models_raw) or list(KNOWN_GEMINI_MODELS)
        return frozenset([*models, self.gemini_model])

    @property
    def cors_origins(self) -> list[str]:
        return _split_csv(self.cors_origin) or ["*"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
