"""URL Repository for the URL shortener application.

This module provides the URLRepository class for database operations on
UrlRecord models. Following the Repository pattern, it abstracts the
mapping store from the shortening service.
"""

from typing import Any, Dict, List, Optional, Union

from sqlalchemy import desc
from sqlalchemy.ext.asyncio import AsyncSession

from shortlink.models.url_record import UrlRecord, UrlRecordCreate
from shortlink.repositories.base import BaseRepository


class URLRepository(BaseRepository[UrlRecord, UrlRecordCreate]):
    """
    Repository for UrlRecord database operations.

    Records are only ever inserted and read: there is no update or delete.
    """

    unique_field = "short_url"

    def __init__(self):
        """Initialize the repository with the UrlRecord model type."""
        super().__init__(UrlRecord)

    async def create_record(
        self,
        db: AsyncSession,
        data: Union[UrlRecordCreate, Dict[str, Any]]
    ) -> UrlRecord:
        """
        Insert a new URL record.

        No existence check is made first; the unique constraint on
        ``short_url`` is the only guard against collisions.

        Raises:
            DuplicateEntityError: If the short URL already exists
            RepositoryError: On other database errors
        """
        return await self.create(db, data)

    async def get_by_short_url(self, db: AsyncSession, short_url: str) -> Optional[UrlRecord]:
        """
        Find a record whose short URL matches exactly.

        Returns:
            The UrlRecord if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        return await self.get_one_by(db, short_url=short_url)

    async def list_history(self, db: AsyncSession) -> List[UrlRecord]:
        """
        Get every record, most recently created first.

        Raises:
            RepositoryError: On database errors
        """
        return await self.get_all(
            db,
            desc(self.model_type.created_at),
            desc(self.model_type.id),
        )
