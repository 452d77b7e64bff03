from .link import (
    CachedLink,
    Resolution,
    ResolutionStatus,
    ShortLinkCreate,
    ShortLinkResponse,
)

__all__ = [
    "CachedLink",
    "Resolution",
    "ResolutionStatus",
    "ShortLinkCreate",
    "ShortLinkResponse",
]
