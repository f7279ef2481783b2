"""Tests for the TTL result cache."""

from __future__ import annotations

from unittest.mock import patch

from polyglossia.cache import TTLCache


class TestTTLCache:
    """Tests for TTLCache."""

    def test_get_set(self):
        cache = TTLCache()
        cache.set("k", "v")
        assert cache.get("k") == (True, "v")
        assert "k" in cache

    def test_miss(self):
        assert TTLCache().get("nope") == (False, None)

    def test_falsy_values_are_hits(self):
        cache = TTLCache()
        cache.set("empty", "")
        assert cache.get("empty") == (True, "")

    def test_expiry(self):
        cache = TTLCache(ttl=10)
        with patch("polyglossia.cache.time.monotonic", return_value=100.0):
            cache.set("k", "v")
        with patch("polyglossia.cache.time.monotonic", return_value=105.0):
            assert cache.get("k") == (True, "v")
        with patch("polyglossia.cache.time.monotonic", return_value=111.0):
            assert cache.get("k") == (False, None)
        assert len(cache) == 0

    def test_eviction_is_lru(self):
        cache = TTLCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_overwrite_does_not_evict(self):
        cache = TTLCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("b", 3)
        assert cache.get("a") == (True, 1)
        assert cache.get("b") == (True, 3)

    def test_clear(self):
        cache = TTLCache()
        cache.set("a", 1)
        cache.clear()
        assert len(cache) == 0

    def test_cleanup_expired(self):
        cache = TTLCache(ttl=10)
        with patch("polyglossia.cache.time.monotonic", return_value=0.0):
            cache.set("old", 1)
        with patch("polyglossia.cache.time.monotonic", return_value=8.0):
            cache.set("new", 2)
        with patch("polyglossia.cache.time.monotonic", return_value=12.0):
            assert cache.cleanup_expired() == 1
            assert "new" in cache
