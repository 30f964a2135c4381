"""
Unit Tests for the Response Cache

Tests for:
- Cache key normalization
- Hit/miss accounting and expiry on read
- High-water-mark sweep of expired entries only
- Clear and stats
"""

import pytest

from music_discovery.infrastructure.lastfm.cache import CacheEntry, ResponseCache, make_cache_key


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


class TestMakeCacheKey:
    def test_params_sorted_and_lowercased(self):
        key = make_cache_key("artist.getSimilar", {"limit": 36, "artist": "  Radiohead "})

        assert key == 'artist.getSimilar:[["artist","radiohead"],["limit",36]]'

    def test_separators_inside_values_do_not_collide(self):
        """Should keep names containing & and = distinct from other parameter sets."""
        a = make_cache_key("album.getInfo", {"artist": "baz", "album": "foo&artist=bar"})
        b = make_cache_key("album.getInfo", {"artist": "bar&artist=baz", "album": "foo"})

        assert a != b

    def test_non_ascii_kept(self):
        key = make_cache_key("artist.getInfo", {"artist": "Björk"})

        assert "björk" in key

    def test_case_variants_share_a_key(self):
        """Should map 'Radiohead' and 'RADIOHEAD' to the same entry."""
        a = make_cache_key("artist.getInfo", {"artist": "Radiohead"})
        b = make_cache_key("artist.getInfo", {"artist": "RADIOHEAD"})

        assert a == b

    def test_operations_do_not_collide(self):
        a = make_cache_key("artist.getInfo", {"artist": "Radiohead"})
        b = make_cache_key("artist.getTopAlbums", {"artist": "Radiohead"})

        assert a != b


class TestCacheEntry:
    def test_expired_at_boundary(self):
        entry = CacheEntry(payload="x", expires_at=10.0)

        assert entry.is_expired(9.99) is False
        assert entry.is_expired(10.0) is True


class TestResponseCache:
    def test_hit_within_ttl(self, clock):
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        cache.set("k", ("a", "b"))

        clock.advance(59)
        entry = cache.get_entry("k")

        assert entry is not None
        assert entry.payload == ("a", "b")

    def test_expired_entry_is_dropped_on_read(self, clock):
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        cache.set("k", "v")

        clock.advance(60)

        assert cache.get_entry("k") is None
        assert len(cache) == 0

    def test_none_payload_is_a_hit(self, clock):
        """Should distinguish a cached None from a miss."""
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        cache.set("k", None)

        entry = cache.get_entry("k")

        assert entry is not None
        assert entry.payload is None

    def test_overwrite_replaces_entry(self, clock):
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        cache.set("k", "old")
        cache.set("k", "new")

        assert cache.get_entry("k").payload == "new"
        assert len(cache) == 1

    def test_per_entry_ttl_override(self, clock):
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        cache.set("short", 1, ttl_seconds=5)

        clock.advance(6)

        assert cache.get_entry("short") is None

    def test_sweep_runs_past_high_water_mark(self, clock):
        """Should sweep expired entries once the count exceeds the mark."""
        cache = ResponseCache(ttl_seconds=10, high_water_mark=3, clock=clock)
        for i in range(3):
            cache.set(f"old-{i}", i)
        clock.advance(11)

        cache.set("fresh", "f")

        assert len(cache) == 1
        assert cache.get_entry("fresh").payload == "f"

    def test_sweep_keeps_live_entries(self, clock):
        """Should not evict unexpired entries even above the mark."""
        cache = ResponseCache(ttl_seconds=10, high_water_mark=2, clock=clock)
        for i in range(5):
            cache.set(f"k-{i}", i)

        assert len(cache) == 5

    def test_manual_sweep_returns_removed_count(self, clock):
        cache = ResponseCache(ttl_seconds=10, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2, ttl_seconds=100)
        clock.advance(20)

        assert cache.sweep() == 1
        assert len(cache) == 1

    def test_stats_and_clear(self, clock):
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        cache.set("a", 1)
        cache.get_entry("a")
        cache.get_entry("missing")

        stats = cache.get_stats()
        assert stats == {"size": 1, "hits": 1, "misses": 1, "hit_rate": 50}

        assert cache.clear() == 1
        assert cache.get_stats() == {"size": 0, "hits": 0, "misses": 0, "hit_rate": 0}
