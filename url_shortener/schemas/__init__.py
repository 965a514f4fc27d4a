"""Schemas package for URL Shortener Service."""

from .url import (
    LongUrlShortUrl,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "LongUrlShortUrl",
    "ErrorResponse",
    "HealthResponse",
]
