from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class ShortLinkCreate(BaseModel):
    original_url: HttpUrl = Field(..., description="The original URL to be shortened")
    expiration: Optional[date] = Field(
        None, description="Last day the link redirects; omit for a link that never expires"
    )


class ShortLinkResponse(BaseModel):
    """Returned after a link is created"""
    slug: str
    short_url: str
    original_url: str
    expiration: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)


class CachedLink(BaseModel):
    """
    Redirect data as stored in the cache under redirect:<slug>.
    
    The raw expiration date is cached, not a verdict, so expiry is
    re-evaluated against the current date on every read.
    """
    original_url: str
    expiration: Optional[date] = None

    def is_expired(self, today: date) -> bool:
        # A link expiring today still redirects
        return self.expiration is not None and self.expiration < today


class ResolutionStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"


class Resolution(BaseModel):
    """Outcome of resolving a slug"""
    status: ResolutionStatus
    target_url: Optional[str] = None

    @classmethod
    def found(cls, target_url: str) -> "Resolution":
        return cls(status=ResolutionStatus.FOUND, target_url=target_url)

    @classmethod
    def not_found(cls) -> "Resolution":
        return cls(status=ResolutionStatus.NOT_FOUND)

    @classmethod
    def expired(cls) -> "Resolution":
        return cls(status=ResolutionStatus.EXPIRED)
