"""
Utility Functions Package

Author: Emergency-Mind Team
Date: October 2026
"""

from emergency_mind.utils.timestamps import (
    Clock,
    utc_now,
    to_utc,
    format_iso_timestamp,
    format_display_date,
)

__all__ = [
    "Clock",
    "utc_now",
    "to_utc",
    "format_iso_timestamp",
    "format_display_date",
]
