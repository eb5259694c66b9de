"""Timestamp normalisation for trades and transfers.

Stored dates are ISO-8601 strings that may or may not carry an offset.
Offset-aware values are converted to the viewer's zone before the calendar
date is taken, so a trade closed late in the evening is not filed under the
next UTC day.
"""

from datetime import date, datetime, tzinfo
from typing import Optional


def parse_timestamp(value: str, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse an ISO-8601 string into a naive datetime in the viewer's zone.

    Args:
        value: ISO-8601 date or datetime string.
        tz: Zone to express aware timestamps in. Defaults to local time.

    Returns:
        Naive datetime, or None if the value is not a readable timestamp.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz).replace(tzinfo=None)
    return parsed


def trade_day(value: str, tz: Optional[tzinfo] = None) -> Optional[date]:
    """Calendar date a stored timestamp falls on, or None if unreadable."""
    parsed = parse_timestamp(value, tz)
    return parsed.date() if parsed else None
