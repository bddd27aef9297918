# tests/services/test_response_cache.py
"""
Tests for the provider response cache.
"""

import pytest

from konvata.services.rates.cache import ResponseCache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> ResponseCache:
    return ResponseCache(ttl_seconds=30, max_entries=3, clock=clock)


KEY_LIVE = ResponseCache.make_key("/live", {"symbols": "BTC"})


class TestResponseCacheInit:
    """Tests for cache configuration."""

    def test_negative_ttl_rejected(self):
        with pytest.raises(ValueError, match="ttl_seconds cannot be negative"):
            ResponseCache(ttl_seconds=-1)

    def test_zero_max_entries_rejected(self):
        with pytest.raises(ValueError, match="max_entries must be at least 1"):
            ResponseCache(max_entries=0)

    def test_zero_ttl_disables_cache(self):
        cache = ResponseCache(ttl_seconds=0)
        cache.set(KEY_LIVE, {"success": True})

        assert not cache.enabled
        assert cache.get(KEY_LIVE) is None
        assert len(cache) == 0


class TestResponseCacheKeys:
    """Tests for make_key()."""

    def test_param_order_does_not_matter(self):
        a = ResponseCache.make_key("/live", {"target": "EUR", "symbols": "BTC"})
        b = ResponseCache.make_key("/live", {"symbols": "BTC", "target": "EUR"})
        assert a == b

    def test_path_and_params_distinguish_entries(self):
        assert ResponseCache.make_key("/live", {}) != ResponseCache.make_key("/list", {})
        assert (
            ResponseCache.make_key("/live", {"symbols": "BTC"})
            != ResponseCache.make_key("/live", {"symbols": "ETH"})
        )


class TestResponseCacheBehavior:
    """Tests for get/set, expiry and eviction."""

    def test_hit_within_ttl(self, cache, clock):
        cache.set(KEY_LIVE, {"rates": {"BTC": 1.0}})
        clock.advance(29)

        assert cache.get(KEY_LIVE) == {"rates": {"BTC": 1.0}}

    def test_expires_after_ttl(self, cache, clock):
        cache.set(KEY_LIVE, {"rates": {"BTC": 1.0}})
        clock.advance(30)

        assert cache.get(KEY_LIVE) is None
        assert len(cache) == 0

    def test_returned_value_is_a_copy(self, cache):
        cache.set(KEY_LIVE, {"rates": {"BTC": 1.0}})

        first = cache.get(KEY_LIVE)
        first["rates"]["BTC"] = 999.0

        assert cache.get(KEY_LIVE)["rates"]["BTC"] == 1.0

    def test_evicts_least_recently_used(self, cache):
        keys = [ResponseCache.make_key("/live", {"symbols": s}) for s in ("A", "B", "C", "D")]
        for key in keys[:3]:
            cache.set(key, {"k": key[1]})

        # Touch A so that B becomes the oldest
        cache.get(keys[0])
        cache.set(keys[3], {"k": "D"})

        assert len(cache) == 3
        assert cache.get(keys[1]) is None
        assert cache.get(keys[0]) is not None
        assert cache.get(keys[3]) is not None

    def test_stats(self, cache):
        cache.get(KEY_LIVE)
        cache.set(KEY_LIVE, {})
        cache.get(KEY_LIVE)

        stats = cache.stats
        assert stats.hits == 1
        assert stats.misses == 1
        assert stats.entries == 1

    def test_clear(self, cache):
        cache.set(KEY_LIVE, {})
        cache.clear()
        assert len(cache) == 0
