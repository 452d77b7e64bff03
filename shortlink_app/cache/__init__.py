"""
Cache module for the short link service.
Implements Strategy Pattern for flexible cache backends.
"""

from .strategies import CacheStrategy, RedisCache, InMemoryCache, NullCache
from .factory import CacheFactory, CacheBackend
from .redirect_cache import RedirectCache

__all__ = [
    "CacheStrategy",
    "RedisCache", 
    "InMemoryCache",
    "NullCache",
    "CacheFactory",
    "CacheBackend",
    "RedirectCache",
]
