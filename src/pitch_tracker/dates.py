# src/pitch_tracker/dates.py
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from .filters import parse_record_date

UNKNOWN_DATE = "Unknown date"

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def format_record_date(value: Any, language: str = "ja") -> str:
    """"2024年5月3日" for ja, "May 3, 2024" otherwise; raw text if unparseable."""
    parsed = parse_record_date(value)
    if parsed is None:
        return "" if value is None else str(value)
    if language == "ja":
        return f"{parsed.year}年{parsed.month}月{parsed.day}日"
    return f"{MONTH_NAMES[parsed.month - 1]} {parsed.day}, {parsed.year}"


def format_short_date(value: Any, language: str = "ja") -> str:
    parsed = parse_record_date(value)
    if parsed is None:
        return "" if value is None else str(value)
    if language == "ja":
        return f"{parsed.month}/{parsed.day}"
    return f"{MONTH_NAMES[parsed.month - 1][:3]} {parsed.day}"


def _timestamp_to_date(value: Any) -> Optional[date]:
    try:
        return _epoch_or_text_to_date(value)
    except (OverflowError, OSError, ValueError, TypeError):
        return None


def _epoch_or_text_to_date(value: Any) -> Optional[date]:
    if isinstance(value, dict):
        seconds = value.get("seconds")
        if seconds is None:
            return None
        return datetime.fromtimestamp(float(seconds), tz=timezone.utc).date()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(float(value), tz=timezone.utc).date()
    return parse_record_date(value)


def format_timestamp(value: Any) -> str:
    """
    Render a stored creation timestamp as DD/MM/YYYY.

    Accepts ``{"seconds": ..., "nanoseconds": ...}`` mappings, epoch seconds
    or date strings.
    """
    if value is None or value == "":
        return UNKNOWN_DATE
    parsed = _timestamp_to_date(value)
    if parsed is None:
        return UNKNOWN_DATE
    return parsed.strftime("%d/%m/%Y")


def to_yyyymmdd(value: date) -> str:
    return value.strftime("%Y-%m-%d")
