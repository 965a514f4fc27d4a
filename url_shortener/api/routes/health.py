"""Health check API routes."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..dependencies import get_url_service
from ...schemas.url import HealthResponse
from ...services.url_service import UrlService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Store unreachable"}},
    summary="Health check",
)
async def health_check(service: UrlService = Depends(get_url_service)):
    """Report whether the url store answers queries."""
    try:
        service.db.execute("SELECT 1", fetch=True)
    except Exception as exc:
        logger.error(f"Health check failed: {exc}")
        return JSONResponse(status_code=503, content={"status": "unhealthy"})
    return {"status": "healthy"}
