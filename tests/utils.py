"""Test utilities for URL shortener tests."""

import random
import string
from datetime import datetime
from typing import Optional

from shortlink.models.url_record import UrlRecord

SHORT_URL_BASE = "http://localhost:5004"


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


async def create_test_record(
    db,
    original_url: Optional[str] = None,
    short_id: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> UrlRecord:
    """Create and persist a test UrlRecord in the database."""
    record = UrlRecord(
        original_url=original_url or random_url(),
        short_url=f"{SHORT_URL_BASE}/{short_id or random_string(6)}",
    )
    if created_at is not None:
        record.created_at = created_at

    db.add(record)
    await db.flush()
    await db.refresh(record)
    return record
