"""Repository layer for the URL shortener application."""

from shortlink.repositories.base import BaseRepository, RepositoryError, DuplicateEntityError
from shortlink.repositories.url_repository import URLRepository

__all__ = [
    "BaseRepository",
    "RepositoryError",
    "DuplicateEntityError",
    "URLRepository",
]
