"""Response schemas for URL Shortener Service."""

from pydantic import BaseModel, ConfigDict, Field

from ..models.url import UrlMapping


class LongUrlShortUrl(BaseModel):
    """Response model for a long url and its short url."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    long_url: str = Field(..., alias="longUrl")
    short_url: str = Field(..., alias="shortUrl")

    @classmethod
    def from_mapping(cls, mapping: UrlMapping) -> "LongUrlShortUrl":
        """Project a stored mapping, dropping its identity."""
        return cls(long_url=mapping.long_url, short_url=mapping.short_url)


class ErrorResponse(BaseModel):
    """Response model for every non-2xx answer."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    http_status: int = Field(..., alias="status")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
