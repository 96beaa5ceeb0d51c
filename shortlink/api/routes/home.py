"""Informational landing page."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from shortlink.core.config import settings

router = APIRouter(tags=["home"])


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def home() -> str:
    return (
        f"{settings.APP_NAME} v{settings.APP_VERSION}\n"
        "POST /shorten with {\"url\": \"...\"} to create a short link.\n"
        "GET /history to list links, newest first.\n"
        "GET /<id> to follow a short link.\n"
    )
