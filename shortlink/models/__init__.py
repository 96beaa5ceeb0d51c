"""
Data models for the URL shortener application.

This module imports and exports all SQLModel models used in the application.
"""

from shortlink.models.url_record import UrlRecord, UrlRecordBase, UrlRecordCreate

__all__ = [
    "UrlRecord",
    "UrlRecordBase",
    "UrlRecordCreate",
]
