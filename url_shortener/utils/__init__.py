"""Utils package for URL Shortener Service."""

from .shortener import (
    CodeGenerator,
    create_short_code,
    is_valid_long_url,
)

__all__ = [
    "CodeGenerator",
    "create_short_code",
    "is_valid_long_url",
]
