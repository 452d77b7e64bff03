"""
Cache strategies using Strategy Pattern.
Allows switching between different cache backends (Redis, In-Memory, Null).
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple
import time

from redis.exceptions import RedisError

from shortlink_app.exceptions import CacheUnavailable


class CacheStrategy(ABC):
    """
    Abstract base class for cache strategies.
    
    This is the Strategy Pattern interface - allows multiple cache implementations
    without changing the service layer code.
    
    All methods are async because cache operations involve I/O (network for Redis).
    Backends signal failures with CacheUnavailable.
    """
    
    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get value from cache.
        
        Args:
            key: Cache key
            
        Returns:
            Cached value or None if not found
        """
        pass
    
    @abstractmethod
    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        """
        Set value in cache with TTL (Time To Live).
        
        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds (default: 1 hour)
            
        Returns:
            True if successful, False otherwise
        """
        pass
    
    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete key from cache.
        
        Args:
            key: Cache key
            
        Returns:
            True if deleted, False if key didn't exist
        """
        pass
    
    @abstractmethod
    async def exists(self, key: str) -> bool:
        """
        Check if key exists in cache.
        
        Args:
            key: Cache key
            
        Returns:
            True if exists, False otherwise
        """
        pass
    
    @abstractmethod
    async def clear(self) -> bool:
        """
        Clear all cache entries.
        
        Returns:
            True if successful
        """
        pass


class RedisCache(CacheStrategy):
    """
    Redis cache implementation backed by a redis.asyncio client.
    
    Shared by every server instance, so existence markers written by one
    instance short-circuit uniqueness checks on the others.
    Any RedisError is re-raised as CacheUnavailable.
    """
    
    def __init__(self, redis_client):
        """
        Initialize Redis cache.
        
        Args:
            redis_client: redis.asyncio.Redis client created with decode_responses=True
        """
        self.redis = redis_client
    
    async def get(self, key: str) -> Optional[str]:
        try:
            return await self.redis.get(key)
        except RedisError as e:
            raise CacheUnavailable(f"Redis get failed for {key}: {e}") from e
    
    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        try:
            return bool(await self.redis.set(key, value, ex=ttl))
        except RedisError as e:
            raise CacheUnavailable(f"Redis set failed for {key}: {e}") from e
    
    async def delete(self, key: str) -> bool:
        try:
            return bool(await self.redis.delete(key))
        except RedisError as e:
            raise CacheUnavailable(f"Redis delete failed for {key}: {e}") from e
    
    async def exists(self, key: str) -> bool:
        try:
            return bool(await self.redis.exists(key))
        except RedisError as e:
            raise CacheUnavailable(f"Redis exists failed for {key}: {e}") from e
    
    async def clear(self) -> bool:
        """Clear all Redis keys (use with caution!)"""
        try:
            await self.redis.flushdb()
            return True
        except RedisError as e:
            raise CacheUnavailable(f"Redis flushdb failed: {e}") from e


class InMemoryCache(CacheStrategy):
    """
    In-memory cache implementation using Python dict.
    
    Entries expire after their TTL; expired entries are dropped lazily
    on access. Not shared between processes, so only suitable for
    development, single-process deployments and tests.
    """
    
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            clock: Source of the current time in seconds
        """
        self._cache: Dict[str, Tuple[str, float]] = {}
        self._clock = clock
    
    def _live_value(self, key: str) -> Optional[str]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._cache[key]
            return None
        return value
    
    async def get(self, key: str) -> Optional[str]:
        return self._live_value(key)
    
    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        self._cache[key] = (value, self._clock() + ttl)
        return True
    
    async def delete(self, key: str) -> bool:
        return self._cache.pop(key, None) is not None
    
    async def exists(self, key: str) -> bool:
        return self._live_value(key) is not None
    
    async def clear(self) -> bool:
        self._cache.clear()
        return True


class NullCache(CacheStrategy):
    """
    Null Object Pattern - cache that does nothing.
    
    Every lookup misses, so every request goes to the record store.
    """
    
    async def get(self, key: str) -> Optional[str]:
        """Always returns None (cache miss)"""
        return None
    
    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        """Pretends to set but does nothing"""
        return True
    
    async def delete(self, key: str) -> bool:
        """Pretends to delete but does nothing"""
        return True
    
    async def exists(self, key: str) -> bool:
        """Always returns False"""
        return False
    
    async def clear(self) -> bool:
        """Pretends to clear but does nothing"""
        return True
