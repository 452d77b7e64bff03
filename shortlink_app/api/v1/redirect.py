from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from shortlink_app.schemas.link import ResolutionStatus
from shortlink_app.services.url_service import URLShortenerService
from shortlink_app.dependencies import get_url_service

router = APIRouter(tags=["redirect"])


@router.get("/{slug}")
async def redirect_to_original_url(
    slug: str,
    url_service: URLShortenerService = Depends(get_url_service)
):
    """
    Redirect to the original URL.
    
    Unknown and expired slugs both answer 404, with different messages.
    """
    resolution = await url_service.resolve(slug)
    
    if resolution.status == ResolutionStatus.EXPIRED:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL has expired"
        )
    if resolution.status == ResolutionStatus.NOT_FOUND:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    
    return RedirectResponse(url=resolution.target_url, status_code=status.HTTP_302_FOUND)
