"""Database module for the URL shortener application."""
from shortlink.db.base import Database, get_engine_config
from shortlink.db.session import get_db, get_database, db_transaction

__all__ = [
    "Database",
    "get_engine_config",
    "get_db",
    "get_database",
    "db_transaction",
]
