"""Business logic for creating, resolving and listing short urls."""

import logging
from typing import Optional

from ..core.config import settings
from ..core.database import Database
from ..models.url import UrlMapping
from ..schemas.url import LongUrlShortUrl
from ..utils.shortener import CodeGenerator, is_valid_long_url
from .results import ErrorKind, ServiceError, ServiceResult

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "Invalid url entered."
NOT_FOUND_MESSAGE = "Short url not found."
ALIAS_UNAVAILABLE_MESSAGE = "Alias not available. Please try again later."


class UrlService:
    """Single entry point for url shortening operations.

    Owns the store handle it is given. Lookups and inserts are not done in a
    transaction, so two concurrent creates for the same new long url may both
    store a mapping.
    """

    def __init__(
        self,
        db: Database,
        generator: Optional[CodeGenerator] = None,
        max_attempts: Optional[int] = None,
    ):
        self.db = db
        self.generator = CodeGenerator(db) if generator is None else generator
        if max_attempts is None:
            max_attempts = settings.max_generation_attempts
        self.max_attempts = max_attempts

    def list_all(self) -> list[LongUrlShortUrl]:
        """Get every stored mapping.

        Returns:
            All long url / short url pairs.
        """
        return [LongUrlShortUrl.from_mapping(m) for m in self.db.find_all()]

    def resolve(self, short_url: str) -> ServiceResult[LongUrlShortUrl]:
        """Look up the long url for a short url.

        Args:
            short_url: The short url to resolve.

        Returns:
            The pair, or a NOT_FOUND failure.
        """
        mapping = self.db.find_one(short_url=short_url)
        if mapping is None:
            return ServiceResult.failure(
                ServiceError(ErrorKind.NOT_FOUND, NOT_FOUND_MESSAGE, 404)
            )
        return ServiceResult.success(LongUrlShortUrl.from_mapping(mapping))

    def create(self, long_url: str) -> ServiceResult[LongUrlShortUrl]:
        """Create a short url for a long url.

        Submitting a long url that is already stored returns its existing
        short url.

        Args:
            long_url: Absolute url to shorten.

        Returns:
            The stored pair, or an INVALID_URL / ALIAS_UNAVAILABLE failure.
        """
        if not is_valid_long_url(long_url):
            return ServiceResult.failure(
                ServiceError(ErrorKind.INVALID_URL, INVALID_URL_MESSAGE, 400)
            )

        existing = self.db.find_one(long_url=long_url)
        if existing is not None:
            logger.info(f"Long url {long_url} already has short url {existing.short_url}")
            return ServiceResult.success(LongUrlShortUrl.from_mapping(existing))

        generated = self.generator.generate(self.max_attempts)
        if not generated.ok:
            logger.warning(
                f"Could not create short url for {long_url}: {list(generated.error.details)}"
            )
            return ServiceResult.failure(
                ServiceError(
                    ErrorKind.ALIAS_UNAVAILABLE,
                    ALIAS_UNAVAILABLE_MESSAGE,
                    503,
                    details=generated.error.details,
                )
            )

        stored = self.db.insert(UrlMapping(long_url=long_url, short_url=generated.value))
        return ServiceResult.success(LongUrlShortUrl.from_mapping(stored))
