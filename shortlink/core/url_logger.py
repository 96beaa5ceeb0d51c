"""Redirect access logging using Loguru's built-in async features."""

import os
from datetime import datetime, timezone

from loguru import logger

from shortlink.core.config import settings

url_access_logger = logger.bind(event_type="url_access")

_access_sinks = []


def setup_url_logging():
    """Route URL access events to their own non-blocking sinks.

    Safe to call more than once; sinks from an earlier call are replaced.
    """
    for sink_id in _access_sinks:
        logger.remove(sink_id)
    _access_sinks.clear()

    if not settings.LOG_TO_FILE:
        return url_access_logger

    os.makedirs(settings.LOG_DIR, exist_ok=True)

    _access_sinks.append(logger.add(
        f"{settings.LOG_DIR}/url_access.log",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | IP:{extra[ip]} | Id:{extra[short_id]} | {message}",
        rotation=settings.LOG_ROTATION,
        retention=settings.LOG_RETENTION,
        enqueue=True,  # Loguru's internal queue
        level="INFO",
        backtrace=False,
        diagnose=False,
        filter=lambda record: record["extra"].get("event_type") == "url_access"
    ))

    _access_sinks.append(logger.add(
        f"{settings.LOG_DIR}/url_access.json",
        serialize=True,
        enqueue=True,
        level="INFO",
        filter=lambda record: record["extra"].get("event_type") == "url_access"
    ))

    return url_access_logger


def log_url_access(short_id: str, ip_address: str, found: bool, user_agent: str = ""):
    """
    Log a redirect lookup.

    Args:
        short_id: The short identifier that was requested
        ip_address: The client's IP address
        found: Whether the identifier resolved to a stored URL
        user_agent: Optional user agent string
    """
    url_access_logger.bind(
        ip=ip_address,
        short_id=short_id,
        user_agent=user_agent,
        found=found,
        timestamp=datetime.now(timezone.utc).isoformat()
    ).info(f"Short URL {'resolved' if found else 'missed'}: {short_id}")
