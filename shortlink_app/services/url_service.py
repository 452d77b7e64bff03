import logging
from datetime import date
from typing import Callable, Optional, Union

from pydantic import HttpUrl

from shortlink_app.cache.redirect_cache import RedirectCache
from shortlink_app.config import settings
from shortlink_app.exceptions import SlugAlreadyExists, SlugSpaceExhausted
from shortlink_app.models.short_link import ShortLink
from shortlink_app.schemas.link import CachedLink, Resolution, ShortLinkResponse
from shortlink_app.services.slug_generator import RandomSlugGenerator, SlugGenerator
from shortlink_app.services.uniqueness import UniquenessChecker
from shortlink_app.storage.strategies import RecordStore

logger = logging.getLogger(__name__)


class URLShortenerService:
    """
    Creates short links and resolves slugs back to their target URL.
    
    Store, cache and slug generator are injected, so the same service runs
    against SQLAlchemy + Redis in production and in-memory fakes in tests.
    The store is authoritative; the cache is only ever written after the
    store has answered.
    """
    
    def __init__(
        self,
        store: RecordStore,
        cache: RedirectCache,
        slug_generator: Optional[SlugGenerator] = None,
        uniqueness: Optional[UniquenessChecker] = None,
        base_url: Optional[str] = None,
        max_attempts: Optional[int] = None,
        today: Callable[[], date] = date.today,
    ):
        """
        Args:
            store: Durable record store
            cache: Redirect cache in front of the store
            slug_generator: Candidate slug source (random 8 characters by default)
            uniqueness: Checker for candidate slugs (built from cache and store by default)
            base_url: Prefix for composed short URLs (settings.base_url by default)
            max_attempts: Give up after this many candidates; None retries forever
            today: Returns the current calendar date, used for expiry checks
        """
        self.store = store
        self.cache = cache
        self.slug_generator = slug_generator or RandomSlugGenerator(length=settings.slug_length)
        self.uniqueness = uniqueness or UniquenessChecker(cache, store)
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.max_attempts = max_attempts if max_attempts is not None else settings.max_slug_attempts
        self.today = today

    def short_url_for(self, slug: str) -> str:
        return f"{self.base_url}/{slug}"

    async def shorten(
        self,
        original_url: Union[str, HttpUrl],
        expiration: Optional[date] = None,
    ) -> ShortLinkResponse:
        """Create a short link
        
        Process:
        1. Generate a candidate slug until one is not taken
        2. Insert the record; a unique-constraint race sends us back to step 1
        3. Cache the redirect data (24h TTL)
        4. Return the composed short URL
        
        Raises:
            StorageUnavailable: the record store cannot be reached
            SlugSpaceExhausted: max_attempts is set and every candidate was taken
        """
        original_url = str(original_url)
        attempts = 0

        while True:
            if self.max_attempts is not None and attempts >= self.max_attempts:
                logger.error("Gave up allocating a slug after %d attempts", attempts)
                raise SlugSpaceExhausted(attempts)
            attempts += 1

            slug = self.slug_generator.generate()
            if await self.uniqueness.is_taken(slug):
                continue

            record = ShortLink(slug=slug, original_url=original_url, expiration=expiration)
            try:
                await self.store.insert(record)
            except SlugAlreadyExists:
                logger.info("Slug %s claimed concurrently, retrying with a new slug", slug)
                await self.cache.mark_taken(slug)
                continue
            break

        await self.cache.put_link(slug, CachedLink(original_url=original_url, expiration=expiration))

        short_url = self.short_url_for(slug)
        logger.info("Created short URL %s -> %s", short_url, original_url)
        return ShortLinkResponse(
            slug=slug,
            short_url=short_url,
            original_url=original_url,
            expiration=expiration,
        )

    async def resolve(self, slug: str) -> Resolution:
        """
        Resolve a slug for redirection using the Cache-Aside pattern.
        
        Flow:
        1. Check cache for redirect data
        2. On miss, query the store; unknown slug -> NOT_FOUND
        3. Populate cache with the store's data
        4. Compare expiration with today's date -> EXPIRED or FOUND
        
        Expiry is checked after the cache lookup so a cached link that has
        since expired is still reported as EXPIRED.
        
        Raises:
            StorageUnavailable: cache missed and the record store cannot be reached
        """
        link = await self.cache.get_link(slug)

        if link is not None:
            logger.debug("Cache hit for %s", slug)
        else:
            logger.debug("Cache miss for %s", slug)
            record = await self.store.find_by_slug(slug)
            if record is None:
                return Resolution.not_found()

            link = CachedLink(original_url=record.original_url, expiration=record.expiration)
            await self.cache.put_link(slug, link)

        if link.is_expired(self.today()):
            logger.info("Short URL %s expired on %s", slug, link.expiration)
            return Resolution.expired()

        return Resolution.found(link.original_url)
