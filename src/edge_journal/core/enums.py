"""Enumerations used across the journal.

Display order for ordered categories is the member definition order,
exposed through ``rank``.
"""

from enum import Enum


class Direction(str, Enum):
    LONG = "Long"
    SHORT = "Short"


class Session(str, Enum):
    """Local time-of-day trading session."""

    S1 = "S1"    # 05:00-10:59
    S2 = "S2"    # 11:00-16:59
    S3 = "S3"    # 17:00-22:59
    S4 = "S4"    # 23:00-00:59
    IS4 = "IS4"  # 01:00-04:59
    NA = "N/A"   # Session never recorded

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    @classmethod
    def sort_key(cls, label: str) -> int:
        """Sort key for a session label; unknown labels sort last."""
        try:
            return cls(label).rank
        except ValueError:
            return len(cls)


class DeltaCategory(str, Enum):
    """Order-flow delta magnitude bucket."""

    HIGH_PLUS = "High++"  # |delta| > 20
    HIGH = "High"         # 7 < |delta| <= 20
    LOW = "Low"           # |delta| <= 7

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    @classmethod
    def sort_key(cls, label: str) -> int:
        try:
            return cls(label).rank
        except ValueError:
            return len(cls)
