"""Categorical bucketing helpers: session from time, delta magnitude.

Both functions are total; every input maps to exactly one category.
"""

from __future__ import annotations

from datetime import datetime

from ..core.enums import DeltaCategory, Session
from .record import parse_timestamp

# Delta magnitude thresholds (strictly greater-than)
DELTA_HIGH_PLUS = 20.0
DELTA_HIGH = 7.0


def session_from_time(timestamp: datetime | str) -> Session:
    """Classify an entry time into a trading session.

    Uses the hour the timestamp carries, without timezone conversion.
    Checked in order, first match wins::

        05-10 -> S1, 11-16 -> S2, 17-22 -> S3, 01-04 -> IS4, 23/00 -> S4
    """
    hour = parse_timestamp(timestamp).hour

    if 5 <= hour < 11:
        return Session.S1
    if 11 <= hour < 17:
        return Session.S2
    if 17 <= hour < 23:
        return Session.S3
    if 1 <= hour < 5:
        return Session.IS4
    return Session.S4


def delta_category(delta: float) -> DeltaCategory:
    """Bucket a signed delta by magnitude only."""
    magnitude = abs(delta)
    if magnitude > DELTA_HIGH_PLUS:
        return DeltaCategory.HIGH_PLUS
    if magnitude > DELTA_HIGH:
        return DeltaCategory.HIGH
    return DeltaCategory.LOW
