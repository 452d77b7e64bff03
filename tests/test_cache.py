"""
Tests for cache backends and the namespaced redirect cache.
"""
import asyncio
from datetime import date

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from shortlink_app.cache.factory import CacheFactory, CacheBackend
from shortlink_app.cache.redirect_cache import RedirectCache, redirect_key, slug_marker_key
from shortlink_app.cache.strategies import (
    CacheStrategy,
    InMemoryCache,
    NullCache,
    RedisCache,
)
from shortlink_app.exceptions import CacheUnavailable
from shortlink_app.schemas.link import CachedLink


class RecordingRedis:
    """Minimal stand-in for redis.asyncio.Redis"""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self.data[key] = value
        self.ttls[key] = ex
        return True

    async def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0

    async def exists(self, key):
        return 1 if key in self.data else 0

    async def flushdb(self):
        self.data.clear()


class DownRedis:
    """redis.asyncio client whose server is unreachable"""

    async def _fail(self, *args, **kwargs):
        raise RedisConnectionError("Connection refused")

    get = set = delete = exists = flushdb = _fail


class BrokenCache(CacheStrategy):
    """Backend failing every call the way RedisCache does"""

    async def get(self, key):
        raise CacheUnavailable("down")

    async def set(self, key, value, ttl=3600):
        raise CacheUnavailable("down")

    async def delete(self, key):
        raise CacheUnavailable("down")

    async def exists(self, key):
        raise CacheUnavailable("down")

    async def clear(self):
        raise CacheUnavailable("down")


class TestInMemoryCache:
    """Test in-memory backend with TTL"""

    def test_set_and_get(self, memory_cache):
        """Stored values are returned"""
        asyncio.run(memory_cache.set("k", "v", ttl=10))
        assert asyncio.run(memory_cache.get("k")) == "v"
        assert asyncio.run(memory_cache.exists("k")) is True

    def test_missing_key(self, memory_cache):
        """Unknown keys miss"""
        assert asyncio.run(memory_cache.get("missing")) is None
        assert asyncio.run(memory_cache.exists("missing")) is False

    def test_entry_expires_after_ttl(self, memory_cache, clock):
        """Entries vanish once their TTL has elapsed"""
        asyncio.run(memory_cache.set("k", "v", ttl=10))

        clock.advance(9)
        assert asyncio.run(memory_cache.get("k")) == "v"

        clock.advance(1)
        assert asyncio.run(memory_cache.get("k")) is None
        assert asyncio.run(memory_cache.exists("k")) is False

    def test_set_refreshes_ttl(self, memory_cache, clock):
        """Re-setting a key restarts its lifetime"""
        asyncio.run(memory_cache.set("k", "v1", ttl=10))
        clock.advance(8)
        asyncio.run(memory_cache.set("k", "v2", ttl=10))
        clock.advance(8)

        assert asyncio.run(memory_cache.get("k")) == "v2"

    def test_delete_and_clear(self, memory_cache):
        """Delete removes one key, clear removes all"""
        asyncio.run(memory_cache.set("a", "1"))
        asyncio.run(memory_cache.set("b", "2"))

        assert asyncio.run(memory_cache.delete("a")) is True
        assert asyncio.run(memory_cache.delete("a")) is False

        asyncio.run(memory_cache.clear())
        assert asyncio.run(memory_cache.get("b")) is None


class TestNullCache:
    """Test the do-nothing backend"""

    def test_always_misses(self):
        """Nothing is ever stored"""
        cache = NullCache()
        assert asyncio.run(cache.set("k", "v")) is True
        assert asyncio.run(cache.get("k")) is None
        assert asyncio.run(cache.exists("k")) is False


class TestRedisCache:
    """Test Redis backend against stand-in clients"""

    def test_set_passes_ttl(self):
        """TTL is forwarded as the EX argument"""
        client = RecordingRedis()
        cache = RedisCache(client)

        asyncio.run(cache.set("redirect:abc", "{}", ttl=86400))

        assert client.ttls["redirect:abc"] == 86400
        assert asyncio.run(cache.get("redirect:abc")) == "{}"
        assert asyncio.run(cache.exists("redirect:abc")) is True

    def test_connection_errors_become_cache_unavailable(self):
        """Every operation reports a down server as CacheUnavailable"""
        cache = RedisCache(DownRedis())

        with pytest.raises(CacheUnavailable):
            asyncio.run(cache.get("k"))
        with pytest.raises(CacheUnavailable):
            asyncio.run(cache.set("k", "v"))
        with pytest.raises(CacheUnavailable):
            asyncio.run(cache.exists("k"))
        with pytest.raises(CacheUnavailable):
            asyncio.run(cache.delete("k"))
        with pytest.raises(CacheUnavailable):
            asyncio.run(cache.clear())


class TestCacheFactory:
    """Test backend selection"""

    def setup_method(self):
        CacheFactory.clear_instance()

    def teardown_method(self):
        CacheFactory.clear_instance()

    def test_creates_memory_cache(self):
        assert isinstance(CacheFactory.create(CacheBackend.MEMORY), InMemoryCache)

    def test_creates_null_cache(self):
        assert isinstance(CacheFactory.create(CacheBackend.NULL), NullCache)

    def test_creates_redis_cache_without_connecting(self):
        """The redis client is lazy, so no server is needed to build it"""
        assert isinstance(CacheFactory.create(CacheBackend.REDIS), RedisCache)

    def test_returns_singleton(self):
        first = CacheFactory.create(CacheBackend.MEMORY)
        assert CacheFactory.create(CacheBackend.NULL) is first


class TestRedirectCache:
    """Test namespacing and failure absorption"""

    def test_keys_are_namespaced(self):
        assert slug_marker_key("AbC12XyZ") == "slug:AbC12XyZ"
        assert redirect_key("AbC12XyZ") == "redirect:AbC12XyZ"

    def test_link_round_trip(self, memory_cache):
        """Redirect data is stored as JSON and read back, including the date"""
        cache = RedirectCache(memory_cache)
        link = CachedLink(original_url="https://example.com/a", expiration=date(2026, 10, 19))

        asyncio.run(cache.put_link("AbC12XyZ", link))

        assert asyncio.run(cache.get_link("AbC12XyZ")) == link
        assert asyncio.run(memory_cache.exists("redirect:AbC12XyZ")) is True

    def test_marker_and_link_are_independent(self, memory_cache, clock):
        """A marker and redirect data expire on their own TTLs"""
        cache = RedirectCache(memory_cache, redirect_ttl=100, marker_ttl=10)

        asyncio.run(cache.mark_taken("AbC12XyZ"))
        assert asyncio.run(cache.get_link("AbC12XyZ")) is None
        assert asyncio.run(cache.is_taken("AbC12XyZ")) is True

        clock.advance(10)
        assert asyncio.run(cache.is_taken("AbC12XyZ")) is False

    def test_redirect_entry_counts_as_taken(self, memory_cache):
        """A cached redirect marks the slug taken even without a marker"""
        cache = RedirectCache(memory_cache)
        asyncio.run(cache.put_link("AbC12XyZ", CachedLink(original_url="https://example.com/a")))

        assert asyncio.run(cache.is_taken("AbC12XyZ")) is True

    def test_link_expires_after_ttl(self, memory_cache, clock):
        cache = RedirectCache(memory_cache, redirect_ttl=60)
        asyncio.run(cache.put_link("AbC12XyZ", CachedLink(original_url="https://example.com/a")))

        clock.advance(60)

        assert asyncio.run(cache.get_link("AbC12XyZ")) is None

    def test_unreadable_entry_is_a_miss(self, memory_cache):
        """Garbage under a redirect key is ignored"""
        asyncio.run(memory_cache.set("redirect:AbC12XyZ", "not json"))
        cache = RedirectCache(memory_cache)

        assert asyncio.run(cache.get_link("AbC12XyZ")) is None

    def test_backend_failures_are_misses(self):
        """A failing backend never raises through the redirect cache"""
        cache = RedirectCache(BrokenCache())

        assert asyncio.run(cache.is_taken("AbC12XyZ")) is False
        assert asyncio.run(cache.get_link("AbC12XyZ")) is None
        asyncio.run(cache.mark_taken("AbC12XyZ"))
        asyncio.run(cache.put_link("AbC12XyZ", CachedLink(original_url="https://example.com/a")))

    def test_down_redis_is_a_miss(self):
        """Same through the real Redis backend"""
        cache = RedirectCache(RedisCache(DownRedis()))

        assert asyncio.run(cache.is_taken("AbC12XyZ")) is False
        assert asyncio.run(cache.get_link("AbC12XyZ")) is None
