from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    debug: bool = Field(False, alias="MASAR_DEBUG")

    display_locale: Literal["en", "ar"] = Field("en", alias="MASAR_DISPLAY_LOCALE")
    average_speed_kmh: float = Field(50.0, gt=0, alias="MASAR_AVERAGE_SPEED_KMH")

    geocoder_provider: Literal["google", "nominatim"] = (
        Field("nominatim", alias="MASAR_GEOCODER_PROVIDER")
    )
    geocoder_user_agent: str = Field(
        "masar-geocoder", alias="MASAR_GEOCODER_USER_AGENT"
    )
    geocoder_domain: str | None = Field(None, alias="MASAR_GEOCODER_DOMAIN")
    geocoder_api_key: str | None = Field(None, alias="MASAR_GEOCODER_API_KEY")
    geocoder_timeout: float = Field(10.0, alias="MASAR_GEOCODER_TIMEOUT")
    geocoder_cache_ttl: int = Field(60 * 60 * 24, alias="MASAR_GEOCODER_CACHE_TTL")
    reverse_geocode_origin: bool = Field(True, alias="MASAR_REVERSE_GEOCODE_ORIGIN")

    short_link_timeout: float = Field(5.0, alias="MASAR_SHORT_LINK_TIMEOUT")

    session_ttl_seconds: int = Field(60 * 60 * 6, alias="MASAR_SESSION_TTL_SECONDS")
    max_sessions: int = Field(1024, alias="MASAR_MAX_SESSIONS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @field_validator("geocoder_provider", "display_locale", mode="before")
    def _normalize_choice(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip().lower()
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]
