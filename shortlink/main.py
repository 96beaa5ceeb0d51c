"""Main application module.

This module initializes the FastAPI application, includes routes,
and configures middleware, exception handlers and the store lifecycle.
"""

import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from shortlink.api import api_router
from shortlink.core.config import settings
from shortlink.core.logging import setup_logging
from shortlink.core.url_logger import setup_url_logging
from shortlink.db.base import Database
from shortlink.middleware.logging import RequestLoggingMiddleware

# Setup logging
logger = setup_logging()

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/api-docs" if settings.docs_enabled else None,
    redoc_url=None,
    openapi_url="/api-docs/openapi.json" if settings.docs_enabled else None,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.REQUEST_LOGGING_ENABLED:
    app.add_middleware(RequestLoggingMiddleware)

# Include API router
app.include_router(api_router)


# Add exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Answer malformed requests as client errors."""
    logger.warning(f"Request validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request"}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to catch and log all unhandled exceptions."""
    error_id = f"error-{time.time()}"
    logger.opt(exception=exc).bind(
        error_id=error_id,
        method=request.method,
        path=request.url.path,
    ).error(f"Unhandled exception in {request.method} {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={"error": "Server error"}
    )


# Add startup and shutdown event handlers
@app.on_event("startup")
async def startup_event():
    """Open the mapping store."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT.value}")
    logger.info(f"Short URLs are issued under {settings.SHORT_URL_BASE}")

    setup_url_logging()

    database = Database.from_settings(settings)
    await database.connect()
    app.state.database = database
    logger.info("Database connection established")


@app.on_event("shutdown")
async def shutdown_event():
    """Close the mapping store."""
    logger.info(f"Shutting down {settings.APP_NAME}")

    database = getattr(app.state, "database", None)
    if database is not None:
        await database.disconnect()
