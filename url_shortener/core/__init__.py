"""Core package - configuration and database utilities."""

from .config import settings, get_settings, Settings
from .database import Database

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "Database",
]
