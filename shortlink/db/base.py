"""Database base configuration for SQLAlchemy with SQLModel.

This module provides the mapping store handle used by the application.
It includes:
- Engine configuration per environment
- The ``Database`` object with an explicit open/close lifecycle
- Session creation and schema setup
- Health check functionality
"""

from typing import AsyncGenerator, Dict, Optional
import asyncio
import logging
from contextlib import asynccontextmanager

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from shortlink.core.config import Settings

logger = logging.getLogger(__name__)


def get_engine_config(settings: Settings) -> Dict:
    """Get the engine configuration for the active environment and driver.

    Args:
        settings: Application settings

    Returns:
        Dict: Keyword arguments for ``create_async_engine``.
    """
    url = make_url(settings.DATABASE_URL)

    if url.get_backend_name() == "sqlite":
        config: Dict = {
            "echo": settings.DB_ECHO,
            "connect_args": {"check_same_thread": False},
        }
        # An in-memory database only exists for a single connection
        if url.database in (None, "", ":memory:"):
            config["poolclass"] = StaticPool
        return config

    configs: Dict[str, Dict] = {
        "development": {
            "echo": settings.DB_ECHO,
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_POOL_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_pre_ping": True,
        },
        "production": {
            "echo": False,
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_POOL_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_pre_ping": True,
        },
        "testing": {
            "echo": False,
            "pool_pre_ping": True,
        },
    }
    return configs.get(settings.ENVIRONMENT.value, configs["development"])


class Database:
    """Handle on the mapping store.

    The handle is created once per application, opened on startup and
    closed on shutdown, and reaches request handlers through dependency
    injection rather than a module-level connection.
    """

    def __init__(self, url: str, **engine_options):
        self.url = url
        self.engine_options = engine_options
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.DATABASE_URL, **get_engine_config(settings))

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    async def connect(self, create_schema: bool = True) -> None:
        """Create the engine and, optionally, any missing tables."""
        if self.engine is not None:
            return

        logger.info(f"Opening database engine for {make_url(self.url).render_as_string(hide_password=True)}")
        self.engine = create_async_engine(self.url, **self.engine_options)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        if create_schema:
            # Register table models with the metadata before creating tables
            from shortlink.models import UrlRecord  # noqa: F401

            try:
                async with self.engine.begin() as conn:
                    await conn.run_sync(SQLModel.metadata.create_all)
            except Exception as e:
                logger.error(f"Schema creation failed: {e}")
                await self.disconnect()
                raise

    async def disconnect(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get async session with proper cleanup.

        Yields:
            AsyncSession: SQLAlchemy async session

        Raises:
            RuntimeError: If the store has not been opened
        """
        if self.session_factory is None:
            raise RuntimeError("Database is not connected; call connect() first")

        session = self.session_factory()
        try:
            yield session
        finally:
            await session.close()

    async def check_connection(self) -> Dict:
        """Check database connectivity and return status.

        Returns:
            Dict: Health check result containing status and latency information
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        status = "healthy"
        error_message = None
        latency_ms = 0

        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            latency_ms = int((loop.time() - start_time) * 1000)
        except Exception as e:
            status = "unhealthy"
            error_message = str(e)
            logger.error(f"Database health check failed: {e}")

        return {
            "status": status,
            "latency_ms": latency_ms,
            "error": error_message,
        }
