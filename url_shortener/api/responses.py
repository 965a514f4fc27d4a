"""Helpers turning failures into ErrorResponse bodies."""

from typing import Optional

from fastapi.responses import JSONResponse

from ..schemas.url import ErrorResponse
from ..services.results import ServiceError


def error_response(
    message: str, http_status: int, headers: Optional[dict] = None
) -> JSONResponse:
    """Build a JSON error response.

    Args:
        message: Message describing the error.
        http_status: HTTP status code, repeated in the body.
        headers: Extra response headers.

    Returns:
        JSON response with an ErrorResponse body.
    """
    body = ErrorResponse(message=message, http_status=http_status)
    return JSONResponse(
        status_code=http_status,
        content=body.model_dump(by_alias=True),
        headers=headers,
    )


def service_error_response(error: ServiceError) -> JSONResponse:
    """Build the response for an expected service failure."""
    http_status = error.http_status or 500
    headers = {"Retry-After": "1"} if http_status == 503 else None
    return error_response(error.message, http_status, headers)


def server_error_response(exc: Exception) -> JSONResponse:
    """Build the 500 response for an unexpected exception."""
    return error_response(f"Internal Server Error! {exc}", 500)
