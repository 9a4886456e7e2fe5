"""
Time-related utilities for the application.

Record creation times are stored as integer unix timestamps (UTC) so they
compare numerically in the store. Freshness markers handed to the transport
layer use the HTTP date format.
"""

import time
from datetime import datetime, timezone
from email.utils import formatdate


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat()


def utc_now_timestamp() -> int:
    """Return the current unix timestamp in whole seconds."""
    return int(time.time())


def http_date(timestamp: int) -> str:
    """Format a unix timestamp as an HTTP date.

    Example:
        http_date(0) -> "Thu, 01 Jan 1970 00:00:00 GMT"
    """
    return formatdate(timestamp, usegmt=True)
