"""Timestamp handling for borg 1.x listings.

borg prints times as ``Wed, 2016-01-27 03:01:19`` without a zone. They are
read as UTC and written back out as RFC3339 with a ``Z`` suffix.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

BORG_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# strptime's %a follows the process locale; borg always prints English names
WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
BORG_TIME_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\Z", re.ASCII)


def parse_borg_timestamp(text: str) -> Optional[datetime]:
    """Parse ``"<Weekday>, YYYY-MM-DD HH:MM:SS"``; return None when it doesn't fit."""
    weekday, sep, rest = text.partition(", ")
    if not sep or weekday not in WEEKDAYS or not BORG_TIME_SHAPE.match(rest):
        return None
    try:
        parsed = datetime.strptime(rest, BORG_TIME_FORMAT)
    except ValueError:
        return None
    return parsed.replace(tzinfo=timezone.utc)


def format_rfc3339(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(RFC3339_FORMAT)
