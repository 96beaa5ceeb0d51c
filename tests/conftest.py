"""Test fixtures for the URL shortener application."""

import os

# Settings are read at import time, so the test profile must be in place first
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BASE_URL"] = "http://localhost"
os.environ["PORT"] = "5004"
os.environ["SHORT_CODE_LENGTH"] = "6"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from typing import AsyncGenerator, Generator
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from shortlink.main import app as main_app
from shortlink.repositories.url_repository import URLRepository
from shortlink.services.shortener import ShortenerService
# Import models to ensure they're registered with SQLModel metadata
from shortlink.models.url_record import UrlRecord  # noqa: F401


# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_SHORT_URL_BASE = "http://localhost:5004"


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with in-memory SQLite."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create isolated test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def url_repository() -> URLRepository:
    """Return URL repository instance."""
    return URLRepository()


@pytest.fixture
def shortener_service(url_repository) -> ShortenerService:
    """Return a shortening service issuing URLs under the test base."""
    return ShortenerService(url_repository=url_repository, short_url_base=TEST_SHORT_URL_BASE)


@pytest.fixture
def test_app() -> Generator[FastAPI, None, None]:
    """Return the FastAPI app, clearing dependency overrides afterwards."""
    yield main_app
    main_app.dependency_overrides.clear()


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """Return FastAPI TestClient instance.

    Entering the client runs the startup handler, which opens a fresh
    in-memory store for every test.
    """
    with TestClient(test_app) as test_client:
        yield test_client
