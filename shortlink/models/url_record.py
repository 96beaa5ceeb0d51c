"""URL record data models.

This module defines the UrlRecord model storing the mapping between an
original URL and its short URL.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index
from sqlmodel import Field, SQLModel


class UrlRecordBase(SQLModel):
    """Base model for URL record data."""

    original_url: str = Field(
        min_length=1,
        description="The original (long) URL to redirect to"
    )
    short_url: str = Field(
        unique=True,   # Creates the unique index
        description="Fully qualified short URL embedding the short identifier"
    )


class UrlRecord(UrlRecordBase, table=True):
    """
    URL record stored in the mapping store.

    Records are written once when a URL is shortened and are never
    updated or deleted afterwards.
    """

    __tablename__ = "url_records"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        description="Timestamp when this record was created"
    )

    __table_args__ = (
        # History listing sorts on creation time
        Index("ix_url_records_created_at", "created_at"),
    )


class UrlRecordCreate(UrlRecordBase):
    """Schema for creating a new URL record."""
    pass
