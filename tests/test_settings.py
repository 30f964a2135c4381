"""
Unit Tests for Application Settings Configuration

Tests for:
- Default values for every section
- Loading nested settings from environment variables
- Aliases for the Last.fm key and cache TTL
- Custom validators (database URL, log level, result limit)
- Settings caching and clearing
"""

import pytest
from pydantic import SecretStr, ValidationError

from music_discovery.config.settings import (
    DatabaseSettings,
    DiscoverySettings,
    LastFmSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

# =============================================================================
# DatabaseSettings Tests
# =============================================================================


class TestDatabaseSettings:
    def test_create_with_defaults(self):
        db = DatabaseSettings()

        assert db.url == "sqlite:///data/music_discovery.db"
        assert db.busy_timeout_ms == 5000
        assert db.connection_timeout_s == 10

    def test_invalid_url_scheme_raises_error(self):
        """Should raise ValidationError for non-sqlite URLs."""
        with pytest.raises(ValidationError, match="Database URL must start with"):
            DatabaseSettings(url="postgresql://localhost/db")

    def test_busy_timeout_bounds(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(busy_timeout_ms=10)


# =============================================================================
# LastFmSettings Tests
# =============================================================================


class TestLastFmSettings:
    def test_defaults(self):
        lastfm = LastFmSettings()

        assert lastfm.api_key.get_secret_value() == ""
        assert lastfm.is_configured is False
        assert lastfm.cache_ttl_minutes == 30
        assert lastfm.cache_ttl_seconds == 1800
        assert lastfm.cache_high_water_mark == 500
        assert lastfm.rate_limit_capacity == 5
        assert lastfm.rate_limit_refill_ms == 200

    def test_key_aliases(self):
        assert LastFmSettings(lastfm_api_key="abc").is_configured is True
        assert LastFmSettings(key="abc").api_key == SecretStr("abc")

    def test_whitespace_key_not_configured(self):
        assert LastFmSettings(api_key="   ").is_configured is False

    def test_cache_duration_alias(self):
        assert LastFmSettings(cache_duration_minutes=5).cache_ttl_minutes == 5

    def test_key_hidden_in_repr(self):
        assert "secret-value" not in repr(LastFmSettings(api_key="secret-value"))

    def test_frozen(self):
        lastfm = LastFmSettings()

        with pytest.raises(ValidationError):
            lastfm.rate_limit_capacity = 10


# =============================================================================
# DiscoverySettings Tests
# =============================================================================


class TestDiscoverySettings:
    def test_defaults(self):
        discovery = DiscoverySettings()

        assert discovery.max_recommendations == 12
        assert discovery.enable_for_artists is True
        assert discovery.enable_for_albums is True
        assert discovery.enable_for_tracks is True
        assert discovery.artist_overfetch_factor == 3
        assert discovery.artist_overfetch_cap == 50
        assert discovery.album_artist_factor == 2
        assert discovery.album_artist_cap == 30
        assert discovery.albums_per_artist == 2
        assert discovery.album_enrichment_count == 5

    @pytest.mark.parametrize("value", [5, 8, 10, 12])
    def test_allowed_max_recommendations(self, value):
        assert DiscoverySettings(max_recommendations=value).max_recommendations == value

    def test_other_max_recommendations_rejected(self):
        with pytest.raises(ValidationError, match="Result limit must be one of"):
            DiscoverySettings(max_recommendations=20)


# =============================================================================
# Settings (environment) Tests
# =============================================================================


class TestSettingsFromEnvironment:
    def test_nested_values_from_env(self, monkeypatch):
        monkeypatch.setenv("LASTFM__API_KEY", "env-key")
        monkeypatch.setenv("LASTFM__CACHE_TTL_MINUTES", "10")
        monkeypatch.setenv("DISCOVERY__MAX_RECOMMENDATIONS", "8")
        monkeypatch.setenv("DISCOVERY__ENABLE_FOR_TRACKS", "false")
        monkeypatch.setenv("DATABASE__URL", "sqlite:///tmp/test.db")

        settings = Settings()

        assert settings.lastfm.api_key.get_secret_value() == "env-key"
        assert settings.lastfm.cache_ttl_minutes == 10
        assert settings.discovery.max_recommendations == 8
        assert settings.discovery.enable_for_tracks is False
        assert settings.database.url == "sqlite:///tmp/test.db"

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert Settings().log_level == "DEBUG"

    def test_verbosity_comes_from_log_level_only(self, monkeypatch):
        """Should ignore a stray DEBUG variable; LOG_LEVEL controls verbosity."""
        monkeypatch.setenv("DEBUG", "true")

        settings = Settings()

        assert "debug" not in Settings.model_fields
        assert settings.log_level == "INFO"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError, match="Invalid log level"):
            Settings()

    def test_get_settings_is_cached(self, monkeypatch):
        first = get_settings()
        assert get_settings() is first

        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert get_settings().log_level == first.log_level

        clear_settings_cache()
        assert get_settings().log_level == "ERROR"
