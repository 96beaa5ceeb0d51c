"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from shortlink.api.routes import health, home, redirect, shortener

API_PREFIX = "/api"

# Create root router
api_router = APIRouter()

api_router.include_router(home.router)
api_router.include_router(shortener.router)
api_router.include_router(health.router, prefix=API_PREFIX)

# Redirect routes go last: /{short_id} would otherwise shadow /history
api_router.include_router(redirect.router)

__all__ = ["api_router"]
