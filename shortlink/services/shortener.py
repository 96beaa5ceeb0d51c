"""URL shortening service for the URL shortener application.

This module contains the ShortenerService class which implements business logic
for URL shortening, redirect resolution, and history listing.
"""

import logging
import secrets
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shortlink.core.config import settings
from shortlink.db.session import db_transaction
from shortlink.models.url_record import UrlRecord
from shortlink.repositories.base import RepositoryError
from shortlink.repositories.url_repository import URLRepository
from shortlink.services.exceptions import (
    InternalError,
    URLCreationError,
    URLNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class ShortenerService:
    """
    Service for URL shortening business logic.

    Generates short identifiers, builds short URLs from the configured base,
    stores them, and resolves identifiers back to their original URLs.
    """

    def __init__(
        self,
        url_repository: URLRepository,
        short_url_base: Optional[str] = None,
        code_length: Optional[int] = None,
        alphabet: Optional[str] = None,
    ):
        """
        Initialize the URL shortening service.

        Args:
            url_repository: Repository for URL data access
            short_url_base: Prefix of generated short URLs, e.g. ``http://localhost:5004``
            code_length: Length of generated identifiers
            alphabet: Characters identifiers are drawn from
        """
        self.url_repository = url_repository
        self.short_url_base = (short_url_base or settings.SHORT_URL_BASE).rstrip("/")
        self.code_length = code_length or settings.SHORT_CODE_LENGTH
        self.alphabet = alphabet or settings.SHORT_CODE_ALPHABET

    async def create_short_url(self, db: AsyncSession, original_url: Optional[str]) -> UrlRecord:
        """
        Shorten a URL and store the mapping.

        The URL is stored as given; only presence is checked. No lookup is
        made for an existing record, so shortening the same URL twice yields
        two records.

        Args:
            db: Database session
            original_url: The URL to shorten

        Returns:
            UrlRecord: The stored record

        Raises:
            ValidationError: If the URL is missing or empty
            URLCreationError: If the record cannot be stored, including a
                short URL collision
        """
        # Rejected before a transaction is opened
        if not original_url:
            raise ValidationError("URL is required")

        return await self._store_short_url(db, original_url)

    @db_transaction(db_param_name="db")
    async def _store_short_url(self, db: AsyncSession, original_url: str) -> UrlRecord:
        short_url = self.build_short_url(self.generate_short_id())

        try:
            return await self.url_repository.create_record(
                db, {"original_url": original_url, "short_url": short_url}
            )
        except RepositoryError as e:
            logger.error(f"Error creating short URL {short_url}: {e}")
            raise URLCreationError(f"Failed to create short URL: {e}") from e

    async def resolve_short_url(self, db: AsyncSession, short_id: str) -> str:
        """
        Resolve a short identifier to the original URL.

        Args:
            db: Database session
            short_id: Identifier taken from the request path

        Returns:
            str: The original URL to redirect to

        Raises:
            URLNotFoundError: If no record has the matching short URL
            InternalError: If the lookup fails
        """
        short_url = self.build_short_url(short_id)
        try:
            record = await self.url_repository.get_by_short_url(db, short_url)
        except RepositoryError as e:
            logger.error(f"Error resolving short URL {short_url}: {e}")
            raise InternalError(f"Failed to resolve short URL: {e}") from e

        if record is None:
            raise URLNotFoundError(f"URL with id '{short_id}' not found")
        return record.original_url

    async def list_history(self, db: AsyncSession) -> List[UrlRecord]:
        """
        Get all stored records, newest first.

        Raises:
            InternalError: If the query fails
        """
        try:
            return await self.url_repository.list_history(db)
        except RepositoryError as e:
            logger.error(f"Error retrieving history: {e}")
            raise InternalError(f"Failed to retrieve history: {e}") from e

    def build_short_url(self, short_id: str) -> str:
        """Join the configured base and an identifier into a short URL."""
        return f"{self.short_url_base}/{short_id}"

    def generate_short_id(self) -> str:
        """
        Generate a random identifier of the configured length.

        Uniqueness is not checked; with the default 64-character alphabet a
        six character identifier has 2**36 possible values.

        Returns:
            str: A random identifier
        """
        return ''.join(secrets.choice(self.alphabet) for _ in range(self.code_length))
