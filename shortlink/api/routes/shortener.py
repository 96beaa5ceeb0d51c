from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from shortlink.api import schemas
from shortlink.api.dependencies import get_shortener_service
from shortlink.db.session import get_db
from shortlink.services.shortener import ShortenerService
from shortlink.services.exceptions import InternalError, ValidationError

router = APIRouter(tags=["shortener"])

SERVER_ERROR = "Server error"


@router.post(
    "/shorten",
    response_model=schemas.ShortenResponse,
    summary="Shorten a URL",
    responses={
        400: {"model": schemas.ErrorResponse, "description": "URL is missing"},
        500: {"model": schemas.ErrorResponse, "description": "Server error"},
    }
)
async def create_short_url(
    payload: Optional[schemas.ShortenRequest] = None,
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenerService = Depends(get_shortener_service),
):
    try:
        record = await shortener_service.create_short_url(
            db=db,
            original_url=payload.url if payload else None,
        )
        return schemas.ShortenResponse(
            original_url=record.original_url,
            short_url=record.short_url,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except InternalError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR)


@router.get(
    "/history",
    response_model=List[schemas.HistoryItem],
    summary="Get all shortened URLs, newest first",
    responses={
        500: {"model": schemas.ErrorResponse, "description": "Server error"},
    }
)
async def list_history(
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenerService = Depends(get_shortener_service),
):
    try:
        records = await shortener_service.list_history(db)
    except InternalError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR)

    return [
        schemas.HistoryItem(
            original_url=record.original_url,
            short_url=record.short_url,
            created_at=record.created_at,
        )
        for record in records
    ]
