"""Tests for the logging setup."""

import io
import sys

import pytest
from loguru import logger

from shortlink.core.config import settings
from shortlink.core.logging import request_id_var, setup_logging
from shortlink.core.url_logger import log_url_access


@pytest.fixture
def stderr_stream(monkeypatch):
    """Route the console sink into a buffer at INFO level."""
    stream = io.StringIO()
    monkeypatch.setattr(sys, "stderr", stream)
    monkeypatch.setattr(settings, "LOG_LEVEL", "INFO")
    setup_logging()
    yield stream
    monkeypatch.undo()
    setup_logging()


def test_request_id_is_added_to_records():
    setup_logging()
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="WARNING")

    token = request_id_var.set("req-123")
    try:
        logger.warning("inside a request")
    finally:
        request_id_var.reset(token)
    logger.warning("outside a request")
    logger.remove(sink_id)

    assert records[0]["extra"]["request_id"] == "req-123"
    assert "request_id" not in records[1]["extra"]


def test_bound_request_id_is_kept():
    setup_logging()
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="WARNING")

    token = request_id_var.set("from-context")
    try:
        logger.bind(request_id="from-bind").warning("bound explicitly")
    finally:
        request_id_var.reset(token)
    logger.remove(sink_id)

    assert records[0]["extra"]["request_id"] == "from-bind"


def test_console_skips_access_events(stderr_stream):
    logger.info("regular application event")
    log_url_access("abc123", "127.0.0.1", found=True)

    output = stderr_stream.getvalue()
    assert "regular application event" in output
    assert "abc123" not in output
