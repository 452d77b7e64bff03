import logging

from shortlink_app.cache.redirect_cache import RedirectCache
from shortlink_app.storage.strategies import RecordStore

logger = logging.getLogger(__name__)


class UniquenessChecker:
    """
    Decides whether a candidate slug is already taken.
    
    Flow:
    1. Cache marker or redirect entry present -> taken (store not touched)
    2. Store has the slug -> cache a marker, taken
    3. Otherwise -> free
    
    "Free" is never cached: a concurrent insert of the same slug may not be
    visible yet, and the store's unique constraint settles that race anyway.
    """

    def __init__(self, cache: RedirectCache, store: RecordStore):
        self.cache = cache
        self.store = store

    async def is_taken(self, slug: str) -> bool:
        if await self.cache.is_taken(slug):
            logger.debug("Slug %s taken (cache)", slug)
            return True

        if await self.store.find_by_slug(slug) is not None:
            logger.debug("Slug %s taken (store)", slug)
            await self.cache.mark_taken(slug)
            return True

        return False
