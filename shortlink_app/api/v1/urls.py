from fastapi import APIRouter, Depends, status
from shortlink_app.schemas.link import ShortLinkCreate, ShortLinkResponse
from shortlink_app.services.url_service import URLShortenerService
from shortlink_app.dependencies import get_url_service

router = APIRouter(prefix="/urls", tags=["urls"])


@router.post("/", response_model=ShortLinkResponse, status_code=status.HTTP_201_CREATED)
async def create_short_url(
    link_data: ShortLinkCreate,
    url_service: URLShortenerService = Depends(get_url_service)
):
    """Create a new short URL, optionally expiring after a given date"""
    return await url_service.shorten(link_data.original_url, link_data.expiration)
