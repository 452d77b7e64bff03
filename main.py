import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from shortlink_app.config import settings
from shortlink_app.database.connection import engine, Base
from shortlink_app.exceptions import StorageUnavailable, SlugSpaceExhausted
from shortlink_app.logging_config import setup_logging
from shortlink_app.api.v1 import urls, redirect

# Import models to ensure they're registered with Base
from shortlink_app.models import ShortLink

setup_logging(settings.log_level, json_format=settings.log_json)
logger = logging.getLogger("shortlink_app.main")

# Create database tables
Base.metadata.create_all(bind=engine)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener service built with FastAPI",
    debug=settings.debug
)


@app.exception_handler(StorageUnavailable)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailable):
    logger.error("Storage unavailable while handling %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )


@app.exception_handler(SlugSpaceExhausted)
async def slug_space_exhausted_handler(request: Request, exc: SlugSpaceExhausted):
    logger.error("Slug allocation failed: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}




######## Include routers
app.include_router(urls.router, prefix="/api/v1")
app.include_router(redirect.router)
