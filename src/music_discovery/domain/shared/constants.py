"""Centralized constants for remote endpoints, tuning knobs, and the database schema.

This module provides reusable constants that reduce magic strings and improve maintainability.
"""

from __future__ import annotations

from typing import Final

from .enums import ImageSize


class LastFmMethods:
    """Last.fm web service method names."""

    ARTIST_GET_SIMILAR = "artist.getSimilar"
    TRACK_GET_SIMILAR = "track.getSimilar"
    ALBUM_GET_INFO = "album.getInfo"
    ARTIST_GET_INFO = "artist.getInfo"
    ARTIST_GET_TOP_ALBUMS = "artist.getTopAlbums"
    ITUNES_ARTIST_IMAGE = "itunes.artistImage"


class LastFmDefaults:
    """Defaults for talking to Last.fm and iTunes."""

    BASE_URL = "https://ws.audioscrobbler.com/2.0/"
    ITUNES_SEARCH_URL = "https://itunes.apple.com/search"
    TIMEOUT_SECONDS = 10.0
    USER_AGENT = "music-discovery/0.1"


class CacheDefaults:
    """Response cache tuning."""

    TTL_MINUTES = 30
    HIGH_WATER_MARK = 500


class RateLimitDefaults:
    """Outbound request throttling."""

    CAPACITY = 5
    REFILL_MS = 200


class PipelineLimits:
    """Over-fetch and enrichment constants for the recommendation pipeline.

    Owned items are filtered out after fetching, so more candidates are
    requested than the caller asked for.
    """

    ALLOWED_RESULT_LIMITS: Final[tuple[int, ...]] = (5, 8, 10, 12)
    DEFAULT_RESULT_LIMIT = 12

    ARTIST_OVERFETCH_FACTOR = 3
    ARTIST_OVERFETCH_CAP = 50
    TRACK_OVERFETCH_FACTOR = 3
    TRACK_OVERFETCH_CAP = 50
    ALBUM_ARTIST_FACTOR = 2
    ALBUM_ARTIST_CAP = 30
    ALBUMS_PER_ARTIST = 2

    ALBUM_ENRICHMENT_COUNT = 5
    MAX_TAGS = 3
    FALLBACK_TOP_ALBUMS = 1


class ImageConstants:
    """Image selection rules."""

    PREFERRED_SIZES: Final[tuple[ImageSize, ...]] = (
        ImageSize.EXTRALARGE,
        ImageSize.LARGE,
        ImageSize.MEDIUM,
        ImageSize.MEGA,
    )
    # Last.fm's deprecated default star image; same hash for every size.
    PLACEHOLDER_MARKER = "2a96cbd8b46e442fc41c2b86b821562f"
    ITUNES_ARTWORK_SOURCE_SIZE = "100x100bb"
    ITUNES_ARTWORK_TARGET_SIZE = "600x600bb"


class SavedItemLimits:
    """Bounds on the saved-items surface."""

    MAX_CHECK_KEYS = 100


class OwnershipKeys:
    """Composite ownership key layout shared by catalog and pipeline."""

    SEPARATOR = "\x00"


class DatabaseTables:
    """Database table names."""

    SAVED_COLLECTIONS = "saved_collections"


class SQLPragmas:
    """SQLite PRAGMA statements."""

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"
