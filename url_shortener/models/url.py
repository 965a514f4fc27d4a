"""Persisted models for URL Shortener Service."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class UrlMapping(BaseModel):
    """A stored association between one long url and one short url."""

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = Field(None, description="Store assigned identifier")
    long_url: str = Field(..., description="The original long url")
    short_url: str = Field(..., description="The 7 character alias")
