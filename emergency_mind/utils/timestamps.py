"""
Timestamp Utilities

Rendering and storage both stamp documents with the same ISO-8601 form
(millisecond precision, "Z" suffix). Naive datetimes are taken as UTC so
output never depends on the host timezone.

Author: Emergency-Mind Team
Date: October 2026
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime. Default clock everywhere."""
    return datetime.now(timezone.utc)


def to_utc(moment: datetime) -> datetime:
    """Normalise to aware UTC; naive values are assumed to already be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_iso_timestamp(moment: datetime) -> str:
    """
    Format as e.g. "2026-10-19T08:30:00.000Z".

    Example:
        >>> format_iso_timestamp(datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc))
        '2026-10-19T08:30:00.000Z'
    """
    utc = to_utc(moment)
    return f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z"


def format_display_date(moment: datetime) -> str:
    """Format as M/D/YYYY without zero padding, e.g. "10/19/2026"."""
    utc = to_utc(moment)
    return f"{utc.month}/{utc.day}/{utc.year}"
