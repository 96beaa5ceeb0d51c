"""URL redirection endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status
from starlette.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from shortlink.api import schemas
from shortlink.api.dependencies import get_shortener_service
from shortlink.core.url_logger import log_url_access
from shortlink.db.session import get_db
from shortlink.services.shortener import ShortenerService
from shortlink.services.exceptions import InternalError, NotFoundError

router = APIRouter(tags=["redirect"])


@router.get(
    "/{short_id}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    summary="Redirect to original URL",
    responses={
        404: {"model": schemas.ErrorResponse, "description": "URL not found"},
        500: {"model": schemas.ErrorResponse, "description": "Server error"},
    }
)
async def redirect_to_original_url(
    request: Request,
    short_id: str = Path(..., description="Short identifier of the URL"),
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenerService = Depends(get_shortener_service),
):
    """Redirect to the original URL stored for ``short_id``."""
    ip_address = request.client.host if request.client else "unknown"
    user_agent = request.headers.get("user-agent", "")

    try:
        original_url = await shortener_service.resolve_short_url(db, short_id)
    except NotFoundError:
        log_url_access(short_id, ip_address, found=False, user_agent=user_agent)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="URL not found")
    except InternalError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")

    log_url_access(short_id, ip_address, found=True, user_agent=user_agent)
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
