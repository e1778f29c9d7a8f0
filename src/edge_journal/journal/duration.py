"""Trade duration in minutes, and its compact display form."""

from __future__ import annotations

import math
from datetime import datetime

from .record import parse_timestamp


def calculate_duration(
    entry: datetime | str,
    exit: datetime | str | None = None,
) -> float:
    """Minutes between entry and exit.

    Returns 0.0 when there is no exit, and clamps exits recorded before
    the entry to 0.0.
    """
    if not exit:
        return 0.0
    start = parse_timestamp(entry)
    end = parse_timestamp(exit)
    # A naive side is read in the other side's offset
    if start.tzinfo is None and end.tzinfo is not None:
        start = start.replace(tzinfo=end.tzinfo)
    elif end.tzinfo is None and start.tzinfo is not None:
        end = end.replace(tzinfo=start.tzinfo)
    return max(0.0, (end - start).total_seconds() / 60)


def format_duration(minutes: float) -> str:
    """Render minutes as ``"-"``, ``"45m"`` or ``"2h 5m"``."""
    if minutes == 0:
        return "-"
    if minutes < 60:
        return f"{_round_half_up(minutes)}m"
    hours = math.floor(minutes / 60)
    mins = _round_half_up(minutes) % 60
    return f"{hours}h {mins}m"


def _round_half_up(value: float) -> int:
    # Half up: 2.5 minutes shows as 3m
    return math.floor(value + 0.5)
