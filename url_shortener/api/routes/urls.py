"""URL shortening API routes.

This module contains all endpoints for URL operations:
- List all URLs (GET /)
- Redirect to original URL (GET /{short_url})
- Create short URL (POST /)
"""

import json
import logging
from typing import Union

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from ..dependencies import get_url_service
from ..responses import server_error_response, service_error_response
from ...schemas.url import ErrorResponse, LongUrlShortUrl
from ...services.url_service import UrlService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["URLs"])


async def read_long_url(request: Request) -> object:
    """Read the long url sent as the raw request body.

    JSON bodies are decoded (a JSON string is expected); any other body is
    taken as plain text.

    Args:
        request: FastAPI request object.

    Returns:
        The decoded body, or None for malformed JSON or non UTF-8 text.
    """
    body = await request.body()
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            return json.loads(body)
        except ValueError:
            return None
    try:
        return body.decode("utf-8").strip()
    except UnicodeDecodeError:
        return None


@router.get(
    "/",
    response_model=list[LongUrlShortUrl],
    responses={
        500: {"model": ErrorResponse, "description": "Unexpected error"},
    },
    summary="List all URLs",
    description="Retrieve every long url and its short url.",
)
async def list_urls(
    service: UrlService = Depends(get_url_service),
) -> Union[list[LongUrlShortUrl], JSONResponse]:
    """List all URLs.

    Args:
        service: URL service instance.

    Returns:
        List of long url / short url pairs.
    """
    logger.info("Request received for retrieving all urls.")
    try:
        return service.list_all()
    except Exception as exc:
        logger.error("Exception occurred on retrieving all urls.", exc_info=exc)
        return server_error_response(exc)


@router.get(
    "/{short_url}",
    response_class=RedirectResponse,
    status_code=302,
    responses={
        302: {"description": "Redirect to original URL"},
        404: {"model": ErrorResponse, "description": "Short URL not found"},
        500: {"model": ErrorResponse, "description": "Unexpected error"},
    },
    summary="Redirect to original URL",
    description="Redirect to the long url associated with the short url.",
)
async def redirect_to_url(
    short_url: str,
    service: UrlService = Depends(get_url_service),
):
    """Redirect to the original URL.

    Args:
        short_url: The short url.
        service: URL service instance.

    Returns:
        Redirect response to the long url.
    """
    logger.info(f"Request received for shortened url {short_url}.")
    try:
        result = service.resolve(short_url)
    except Exception as exc:
        logger.error(
            f"Exception occurred on retrieving url map for {short_url}.", exc_info=exc
        )
        return server_error_response(exc)

    if not result.ok:
        logger.warning(f"Could not resolve {short_url}: {result.error.message}")
        return service_error_response(result.error)

    return RedirectResponse(url=result.value.long_url, status_code=302)


@router.post(
    "/",
    response_model=LongUrlShortUrl,
    responses={
        200: {"description": "Short URL created or already existing"},
        400: {"model": ErrorResponse, "description": "Invalid url"},
        500: {"model": ErrorResponse, "description": "Unexpected error"},
        503: {"model": ErrorResponse, "description": "No free alias, retry later"},
    },
    summary="Create a short URL",
    description="Create a short url for a long url sent as the raw request body.",
)
async def create_short_url(
    request: Request,
    service: UrlService = Depends(get_url_service),
) -> Union[LongUrlShortUrl, JSONResponse]:
    """Create a short URL from a long URL.

    Args:
        request: FastAPI request object.
        service: URL service instance.

    Returns:
        The created (or already existing) long url / short url pair.
    """
    long_url = await read_long_url(request)
    logger.info(f"Request received for creating short url for long url {long_url}.")
    try:
        result = service.create(long_url)
    except Exception as exc:
        logger.error(
            f"Exception occurred on creating short url for {long_url}.", exc_info=exc
        )
        return server_error_response(exc)

    if not result.ok:
        logger.warning(f"Could not create short url for {long_url}: {result.error.message}")
        return service_error_response(result.error)

    return result.value
