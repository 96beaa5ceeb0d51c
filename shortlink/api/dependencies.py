"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access repository and service instances.
"""

from fastapi import Depends

from shortlink.core.config import settings
from shortlink.repositories.url_repository import URLRepository
from shortlink.services.shortener import ShortenerService


async def get_url_repository():
    """Get an instance of the URL repository."""
    return URLRepository()


def get_short_url_base():
    """Get the prefix used for generated short URLs."""
    return settings.SHORT_URL_BASE


async def get_shortener_service(
    url_repo: URLRepository = Depends(get_url_repository),
    short_url_base: str = Depends(get_short_url_base),
) -> ShortenerService:
    """Get an instance of the URL shortening service."""
    return ShortenerService(url_repository=url_repo, short_url_base=short_url_base)
