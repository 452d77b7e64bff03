"""
Exceptions raised by the short link core.

Only StorageUnavailable and SlugSpaceExhausted ever reach callers of
URLShortenerService. SlugAlreadyExists is turned into a new slug attempt
and CacheUnavailable is treated as a cache miss.
"""


class ShortenerError(Exception):
    """Base class for short link errors."""


class StorageUnavailable(ShortenerError):
    """The record store could not be reached."""


class SlugAlreadyExists(ShortenerError):
    """Insert rejected by the store's uniqueness constraint on slug."""

    def __init__(self, slug: str):
        super().__init__(f"Slug '{slug}' already exists")
        self.slug = slug


class CacheUnavailable(ShortenerError):
    """The cache backend failed to answer."""


class SlugSpaceExhausted(ShortenerError):
    """No free slug was found within the configured number of attempts."""

    def __init__(self, attempts: int):
        super().__init__(f"Could not generate a unique slug after {attempts} attempts")
        self.attempts = attempts
