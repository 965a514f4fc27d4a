"""FastAPI dependencies."""

from fastapi import Request

from ..services.url_service import UrlService


def get_url_service(request: Request) -> UrlService:
    """Get the service built at application startup.

    Args:
        request: FastAPI request object.

    Returns:
        UrlService instance.
    """
    return request.app.state.url_service
