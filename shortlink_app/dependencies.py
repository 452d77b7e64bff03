"""
FastAPI dependencies for dependency injection.

The cache backend is a process-wide singleton; the record store wraps the
request's database session.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from shortlink_app.cache.factory import CacheFactory, CacheBackend
from shortlink_app.cache.redirect_cache import RedirectCache
from shortlink_app.cache.strategies import CacheStrategy
from shortlink_app.database.connection import get_db
from shortlink_app.services.url_service import URLShortenerService
from shortlink_app.storage.strategies import RecordStore, SQLAlchemyRecordStore
from shortlink_app.config import settings


@lru_cache()
def get_cache() -> CacheStrategy:
    """
    Get cache instance (singleton).
    
    Factory gets config from settings internally.
    @lru_cache ensures this is called only once.
    """
    backend = CacheBackend(settings.cache_backend)
    return CacheFactory.create(backend)


def get_redirect_cache(cache: CacheStrategy = Depends(get_cache)) -> RedirectCache:
    return RedirectCache(cache)


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    return SQLAlchemyRecordStore(db)


def get_url_service(
    store: RecordStore = Depends(get_record_store),
    cache: RedirectCache = Depends(get_redirect_cache),
) -> URLShortenerService:
    """Get URLShortenerService with store and cache injected"""
    return URLShortenerService(store=store, cache=cache)
