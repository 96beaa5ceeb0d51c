"""Service layer for the URL shortener application.

This package contains service classes implementing the business logic of the application.
Services orchestrate interactions between repositories and provide domain-specific operations.
"""

from shortlink.services.shortener import ShortenerService

__all__ = ["ShortenerService"]
