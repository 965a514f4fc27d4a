"""Models package for URL Shortener Service."""

from .url import UrlMapping

__all__ = ["UrlMapping"]
