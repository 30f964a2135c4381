"""Last.fm adapter: HTTP client, response cache and outbound throttle."""

from music_discovery.infrastructure.lastfm.cache import CacheEntry, ResponseCache, make_cache_key
from music_discovery.infrastructure.lastfm.client import LastFmClient
from music_discovery.infrastructure.lastfm.rate_limiter import TokenBucket

__all__ = [
    "CacheEntry",
    "LastFmClient",
    "ResponseCache",
    "TokenBucket",
    "make_cache_key",
]
