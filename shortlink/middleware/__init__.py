"""Middleware for the URL shortener application."""

from shortlink.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
