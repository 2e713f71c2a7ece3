"""Tests for the process-wide response cache."""
from reel_recommender.cache import DEFAULT_TTL_SECONDS, MISS, ResponseCache


class TestResponseCache:

    def test_miss_then_hit(self, cache):
        assert cache.get("movie_detail_603") is MISS
        cache.set("movie_detail_603", {"id": 603})
        assert cache.get("movie_detail_603") == {"id": 603}
        assert "movie_detail_603" in cache

    def test_default_ttl_is_twelve_hours(self):
        assert DEFAULT_TTL_SECONDS == 43200
        assert ResponseCache().ttl_seconds == 43200

    def test_entry_expires_after_ttl(self, cache, clock):
        cache.set("k", "v")
        clock.advance(DEFAULT_TTL_SECONDS - 1)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k") is MISS
        assert "k" not in cache

    def test_per_entry_ttl(self, cache, clock):
        cache.set("short", 1, ttl=60)
        cache.set("long", 2)
        clock.advance(61)
        assert cache.get("short") is MISS
        assert cache.get("long") == 2

    def test_zero_ttl_is_not_stored(self, cache):
        cache.set("k", "v", ttl=0)
        assert cache.get("k") is MISS

    def test_falsy_values_are_hits(self, cache):
        cache.set("none", None)
        cache.set("empty", [])
        assert cache.get("none") is None
        assert cache.get("empty") == []

    def test_custom_default(self, cache):
        assert cache.get("missing", default="fallback") == "fallback"

    def test_len_ignores_expired_entries(self, cache, clock):
        cache.set("a", 1, ttl=10)
        cache.set("b", 2)
        assert len(cache) == 2
        clock.advance(11)
        assert len(cache) == 1

    def test_last_writer_wins(self, cache):
        cache.set("k", "first")
        cache.set("k", "second")
        assert cache.get("k") == "second"

    def test_clear(self, cache):
        cache.set("k", "v")
        cache.clear()
        assert len(cache) == 0

    def test_miss_sentinel_is_falsy(self):
        assert not MISS
        assert repr(MISS) == "MISS"

    def test_expire_drops_stale_entries(self, cache, clock):
        cache.set("stale", 1, ttl=10)
        cache.set("fresh", 2)
        clock.advance(11)
        assert cache.expire() == ["stale"]
        assert cache.expire() == []
        assert cache.get("fresh") == 2
