"""Small reproducible statistics: median and nearest-rank OI percentile."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from .record import Trade


def median(values: Sequence[float]) -> float:
    """Median of *values*; mean of the two central values for even counts.

    Returns 0.0 for an empty sequence.  The input is not modified.
    """
    if len(values) == 0:
        return 0.0
    return float(np.median(np.asarray(values, dtype=float)))


def oi_percentile_value(trades: Sequence[Trade], percentile: float) -> float:
    """Open interest at *percentile* (0-100) by nearest-rank selection.

    ``index = floor(percentile / 100 * n)`` clamped to ``n - 1`` over the
    ascending OI values; no interpolation.  Returns 0.0 for no trades.
    """
    if not trades:
        return 0.0
    ois = np.sort(np.fromiter((t.oi for t in trades), dtype=float, count=len(trades)))
    index = math.floor(percentile / 100 * len(ois))
    return float(ois[max(0, min(index, len(ois) - 1))])


@dataclass
class MeanAccumulator:
    """Running total and count for an arithmetic mean."""

    total: float = 0.0
    count: int = 0

    def add(self, value: float) -> None:
        self.total += value
        self.count += 1

    @property
    def mean(self) -> float:
        return self.total / self.count if self.count else 0.0
