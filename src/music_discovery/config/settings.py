"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.constants import (
    CacheDefaults,
    LastFmDefaults,
    PipelineLimits,
    RateLimitDefaults,
)
from ..domain.shared.messages import ErrorMessages


class DatabaseSettings(BaseModel):
    """Database configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(
        default="sqlite:///data/music_discovery.db",
        validation_alias=AliasChoices("url", "database_url", "db_url"),
    )
    busy_timeout_ms: int = Field(
        default=5000,
        ge=1000,
        le=30000,
        validation_alias=AliasChoices("busy_timeout_ms", "busy_timeout"),
    )
    connection_timeout_s: int = Field(
        default=10,
        ge=1,
        le=60,
        validation_alias=AliasChoices("connection_timeout_s", "connection_timeout"),
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate database URL format."""
        if not v.startswith("sqlite://"):
            raise ValueError(ErrorMessages.INVALID_DATABASE_URL)
        return v


class LastFmSettings(BaseModel):
    """Last.fm client, response cache, and outbound throttle configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    api_key: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("api_key", "lastfm_api_key", "key"),
    )
    base_url: str = LastFmDefaults.BASE_URL
    itunes_search_url: str = LastFmDefaults.ITUNES_SEARCH_URL
    timeout_seconds: float = Field(default=LastFmDefaults.TIMEOUT_SECONDS, gt=0.0, le=120.0)
    cache_ttl_minutes: int = Field(
        default=CacheDefaults.TTL_MINUTES,
        ge=1,
        le=24 * 60,
        validation_alias=AliasChoices("cache_ttl_minutes", "cache_duration_minutes", "cache_ttl"),
    )
    cache_high_water_mark: int = Field(default=CacheDefaults.HIGH_WATER_MARK, ge=1)
    rate_limit_capacity: int = Field(default=RateLimitDefaults.CAPACITY, ge=1, le=50)
    rate_limit_refill_ms: int = Field(default=RateLimitDefaults.REFILL_MS, ge=0, le=10_000)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key.get_secret_value().strip())

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_ttl_minutes * 60.0


class DiscoverySettings(BaseModel):
    """Recommendation pipeline configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    max_recommendations: int = Field(
        default=PipelineLimits.DEFAULT_RESULT_LIMIT,
        validation_alias=AliasChoices("max_recommendations", "limit"),
    )
    enable_for_artists: bool = True
    enable_for_albums: bool = True
    enable_for_tracks: bool = True

    artist_overfetch_factor: int = Field(default=PipelineLimits.ARTIST_OVERFETCH_FACTOR, ge=1)
    artist_overfetch_cap: int = Field(default=PipelineLimits.ARTIST_OVERFETCH_CAP, ge=1)
    track_overfetch_factor: int = Field(default=PipelineLimits.TRACK_OVERFETCH_FACTOR, ge=1)
    track_overfetch_cap: int = Field(default=PipelineLimits.TRACK_OVERFETCH_CAP, ge=1)
    album_artist_factor: int = Field(default=PipelineLimits.ALBUM_ARTIST_FACTOR, ge=1)
    album_artist_cap: int = Field(default=PipelineLimits.ALBUM_ARTIST_CAP, ge=1)
    albums_per_artist: int = Field(default=PipelineLimits.ALBUMS_PER_ARTIST, ge=1, le=10)
    album_enrichment_count: int = Field(default=PipelineLimits.ALBUM_ENRICHMENT_COUNT, ge=0)

    @field_validator("max_recommendations")
    @classmethod
    def validate_max_recommendations(cls, v: int) -> int:
        if v not in PipelineLimits.ALLOWED_RESULT_LIMITS:
            raise ValueError(
                ErrorMessages.INVALID_RESULT_LIMIT.format(
                    allowed=PipelineLimits.ALLOWED_RESULT_LIMITS
                )
            )
        return v


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - LASTFM__API_KEY, LASTFM__CACHE_TTL_MINUTES, etc. (nested with prefix)
    - DISCOVERY__MAX_RECOMMENDATIONS, DISCOVERY__ENABLE_FOR_ALBUMS, etc.
    - DATABASE__URL
    - CATALOG_PATH (optional JSON catalog used by the CLI)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    log_level: str = "INFO"
    catalog_path: str | None = None

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    lastfm: LastFmSettings = Field(default_factory=LastFmSettings)
    discovery: DiscoverySettings = Field(default_factory=DiscoverySettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels)
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
