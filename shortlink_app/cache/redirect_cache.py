"""
Namespaced cache in front of the record store.

Two independent key spaces live in the same backend:
- slug:<slug>      existence marker, value "1"
- redirect:<slug>  CachedLink serialized as JSON

The cache is advisory. Backend failures and unreadable entries are logged
and reported as misses, and failed writes are dropped.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from shortlink_app.cache.strategies import CacheStrategy
from shortlink_app.config import settings
from shortlink_app.exceptions import CacheUnavailable
from shortlink_app.schemas.link import CachedLink

logger = logging.getLogger(__name__)

SLUG_MARKER_PREFIX = "slug"
REDIRECT_PREFIX = "redirect"


def slug_marker_key(slug: str) -> str:
    return f"{SLUG_MARKER_PREFIX}:{slug}"


def redirect_key(slug: str) -> str:
    return f"{REDIRECT_PREFIX}:{slug}"


class RedirectCache:
    """Existence markers and redirect data on top of a CacheStrategy"""

    def __init__(
        self,
        backend: CacheStrategy,
        redirect_ttl: Optional[int] = None,
        marker_ttl: Optional[int] = None,
    ):
        self.backend = backend
        self.redirect_ttl = redirect_ttl or settings.redirect_cache_ttl
        self.marker_ttl = marker_ttl or settings.slug_marker_ttl

    async def is_taken(self, slug: str) -> bool:
        """True if either a marker or redirect data is cached for slug"""
        try:
            if await self.backend.exists(slug_marker_key(slug)):
                return True
            return await self.backend.exists(redirect_key(slug))
        except CacheUnavailable as e:
            logger.warning("Cache exists-check failed, treating as miss: %s", e)
            return False

    async def mark_taken(self, slug: str) -> None:
        try:
            await self.backend.set(slug_marker_key(slug), "1", ttl=self.marker_ttl)
        except CacheUnavailable as e:
            logger.warning("Could not cache slug marker: %s", e)

    async def get_link(self, slug: str) -> Optional[CachedLink]:
        try:
            raw = await self.backend.get(redirect_key(slug))
        except CacheUnavailable as e:
            logger.warning("Cache get failed, treating as miss: %s", e)
            return None

        if raw is None:
            return None

        try:
            return CachedLink.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable cache entry for slug %s", slug)
            return None

    async def put_link(self, slug: str, link: CachedLink) -> None:
        try:
            await self.backend.set(redirect_key(slug), link.model_dump_json(), ttl=self.redirect_ttl)
        except CacheUnavailable as e:
            logger.warning("Could not cache redirect data: %s", e)
