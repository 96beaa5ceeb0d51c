"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class ValidationError(ServiceError):
    """Required input is missing or unusable; the caller's fault."""
    pass


class NotFoundError(ServiceError):
    """No record matches the request."""
    pass


class URLNotFoundError(NotFoundError):
    """No URL record exists for the requested short identifier."""
    pass


class InternalError(ServiceError):
    """Persistence or unexpected failure; details stay server-side."""
    pass


class URLCreationError(InternalError):
    """Error occurred while storing a new URL record."""
    pass
