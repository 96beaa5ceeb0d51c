"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization. JSON field names are camelCase on the wire.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ShortenRequest(BaseModel):
    """Request schema for shortening a URL."""
    url: Optional[str] = Field(None, examples=["https://example.com"])


class ShortenResponse(BaseModel):
    """Response schema for a newly shortened URL."""
    model_config = ConfigDict(populate_by_name=True)

    original_url: str = Field(alias="originalUrl")
    short_url: str = Field(alias="shortUrl")


class HistoryItem(BaseModel):
    """Response schema for one stored URL record."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    original_url: str = Field(alias="originalUrl")
    short_url: str = Field(alias="shortUrl")
    created_at: datetime = Field(alias="createdAt")


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    error: str
