"""URL shortening utilities module.

This module handles the generation of short urls and validation of long urls.
"""

import base64
import secrets
import logging
from typing import Optional
from pydantic import AnyUrl, TypeAdapter, ValidationError

from ..core.config import settings
from ..core.database import Database
from ..services.results import ErrorKind, ServiceError, ServiceResult

logger = logging.getLogger(__name__)

_long_url_adapter = TypeAdapter(AnyUrl)


def create_short_code(length: int = 7) -> str:
    """Create a random short url candidate.

    A 128-bit random value is base64 encoded, made url safe and cut down
    to ``length`` characters.

    Args:
        length: Length of the generated code.

    Returns:
        Random short code string.
    """
    encoded = base64.b64encode(secrets.token_bytes(16)).decode("ascii")
    encoded = encoded.replace("/", "_").replace("+", "-")
    return encoded[:length]


def is_valid_long_url(url: str) -> bool:
    """Check that a url is absolute, with both scheme and authority.

    The url is only checked; callers keep the string as submitted.

    Args:
        url: URL to validate.

    Returns:
        True if valid, False otherwise.
    """
    if not isinstance(url, str) or not url or url != url.strip():
        return False
    try:
        parsed = _long_url_adapter.validate_python(url)
    except ValidationError:
        return False
    return bool(parsed.host)


class CodeGenerator:
    """Produce short urls that are not yet stored."""

    def __init__(self, db: Database, length: Optional[int] = None):
        self.db = db
        self.length = settings.short_url_length if length is None else length

    def generate(self, max_attempts: int = 3) -> ServiceResult[str]:
        """Generate a short url not used by any stored mapping.

        Each candidate is checked against the store; the first free one wins.

        Args:
            max_attempts: How many candidates to try before giving up.

        Returns:
            The free short url, or an ATTEMPTS_EXHAUSTED failure listing
            every conflicting candidate.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        conflicts = []
        for _ in range(max_attempts):
            candidate = create_short_code(self.length)
            if self.db.find_one(short_url=candidate) is None:
                return ServiceResult.success(candidate)
            logger.debug(f"Short url candidate {candidate} is taken")
            conflicts.append(f"{candidate} already exists.")

        logger.warning(f"No free short url after {max_attempts} attempts")
        return ServiceResult.failure(
            ServiceError(
                kind=ErrorKind.ATTEMPTS_EXHAUSTED,
                message=f"No free short url after {max_attempts} attempts.",
                details=tuple(conflicts),
            )
        )
