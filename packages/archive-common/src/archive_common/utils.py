"""
Shared utility functions for Transcriptorator.

Display formatting for dates, durations, and playback timestamps, plus
the parsing rule for the ``?t=`` start-offset query parameter.  The same
helpers are registered as template filters by the web service.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from archive_common.models.session import Chamber

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
_LEADING_INT = re.compile(r"\s*\+?(\d+)")


def format_timestamp(seconds: float) -> str:
    """Format a playback offset as ``M:SS`` or ``H:MM:SS``.

    Fractions of a second are truncated; negative input clamps to zero.

    Examples:
        >>> format_timestamp(75.9)
        '1:15'
        >>> format_timestamp(3723)
        '1:02:03'
    """
    total = max(int(seconds), 0)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_duration(seconds: float) -> str:
    """Format a recording length as ``1h 5m``, ``42m``, or ``30s``."""
    total = max(int(seconds), 0)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes}m"
    if minutes:
        return f"{minutes}m"
    return f"{secs}s"


def format_date(value: date | datetime | str) -> str:
    """Format a calendar date as ``Jan 5, 2025``.

    Accepts ``date``/``datetime`` objects or ISO ``YYYY-MM-DD`` strings.
    """
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"


def chamber_label(chamber: Chamber | str) -> str:
    """Return the capitalized chamber name (``House`` / ``Senate``)."""
    raw = chamber.value if isinstance(chamber, Chamber) else str(chamber)
    return raw[:1].upper() + raw[1:]


def parse_start_offset(raw: str | None) -> int:
    """Parse the ``?t=`` query value into whole seconds.

    Leading digits are taken (``"90s"`` -> 90, ``"12.7"`` -> 12); anything
    without leading digits, and a missing value, yields 0.
    """
    if not raw:
        return 0
    match = _LEADING_INT.match(raw)
    if match is None:
        return 0
    return int(match.group(1))
