"""Centralized message constants for error messages, validation, and log output."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Configuration Errors
    LASTFM_API_KEY_NOT_SET = "Last.fm API key not configured"
    INVALID_DATABASE_URL = "Database URL must start with sqlite://"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    INVALID_RESULT_LIMIT = "Result limit must be one of {allowed}"

    # Recommendation Validation Errors
    EMPTY_SOURCE_NAME = "Source name is required"

    # Saved Item Validation Errors
    EMPTY_USER_ID = "User id cannot be empty"
    TOO_MANY_CHECK_KEYS = "Cannot check more than {max_keys} items at once"

    # Time/Date Validation Errors
    TIMEZONE_REQUIRED_UTC_DATETIME = "UtcDateTime requires a timezone-aware datetime"

    # Catalog Errors
    CATALOG_FILE_INVALID = "Catalog file {path} could not be read as a catalog document"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Database Lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"

    # Cache Operations
    CACHE_HIT = "Cache hit for '%s'"
    CACHE_MISS = "Cache miss for '%s'"
    CACHE_SWEPT = "Swept %d expired cache entries (%d remaining)"
    CACHE_CLEARED = "Cleared %d cache entries"

    # Last.fm Client
    LASTFM_CLIENT_INITIALIZED = "Last.fm client initialized (timeout=%ss)"
    LASTFM_CLIENT_CLOSED = "Last.fm client closed"
    LASTFM_HTTP_STATUS = "Last.fm API returned %s for method %s"
    LASTFM_API_ERROR = "Last.fm API error %s: %s"
    LASTFM_TRANSPORT_ERROR = "Error calling Last.fm method %s: %r"
    LASTFM_MALFORMED_PAYLOAD = "Malformed Last.fm payload for method %s: %s"
    ITUNES_LOOKUP_FAILED = "iTunes artwork lookup failed for '%s': %r"

    # Rate Limiting
    RATE_LIMIT_WAITING = "Rate limiter saturated, waiting for a token"

    # Recommendation Pipeline
    RECOMMENDATIONS_REQUESTED = "Fetching %s recommendations for '%s' (limit=%d)"
    RECOMMENDATIONS_FILTERED = "Filtered %d owned %s candidates, %d remain"
    RECOMMENDATIONS_BUILT = "Built %d %s recommendations for '%s'"
    RECOMMENDATIONS_KIND_DISABLED = "Recommendations disabled for kind %s"
    RECOMMENDATIONS_ITEM_NOT_FOUND = "Catalog item %s not found"
    ENRICHMENT_FAILED = "Enrichment failed for '%s': %r"

    # Saved Items
    SAVED_ITEM_ADDED = "Saved %s '%s' by '%s' for user %s"
    SAVED_ITEM_DUPLICATE = "User %s already saved %s '%s' by '%s'"
    SAVED_ITEM_DELETED = "Deleted %s '%s' by '%s' for user %s"
    SAVED_ITEM_NOT_FOUND = "No saved %s '%s' by '%s' for user %s"
    SAVED_COLLECTION_CORRUPT = "Discarding unreadable saved collection for user %s: %s"

    # Catalog
    CATALOG_LOADED = "Loaded catalog with %d items from %s"

    # Application Lifecycle
    CONTAINER_SHUTDOWN_FAILED = "Failed closing %s: %r"
    LOGGING_CONFIG_FALLBACK = "Could not load %s, falling back to basic config"
    COMMAND_FAILED = "Command failed: %s"
