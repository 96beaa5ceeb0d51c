"""
Request logging middleware for FastAPI using Loguru.

Every request gets an ID, exposed in the ``X-Request-ID`` response header
and bound to the log record together with method, path, status and timing.
While the request is handled, every other log record carries the same ID.
"""

import time
import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from shortlink.core.logging import request_id_var

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per HTTP request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.bind(request_id=request_id).exception(
                f"{request.method} {request.url.path} failed"
            )
            raise
        finally:
            request_id_var.reset(token)

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id

        client_ip = request.client.host if request.client else "unknown"
        if "X-Forwarded-For" in request.headers:
            client_ip = request.headers["X-Forwarded-For"].split(",")[0].strip()

        log = logger.bind(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
            client_ip=client_ip,
        )
        message = f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms} ms)"
        if response.status_code >= 500:
            log.error(message)
        else:
            log.info(message)

        return response
