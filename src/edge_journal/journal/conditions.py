"""Best TA level under a delta / open-interest condition.

The open-interest threshold is the 75th percentile of the *whole* list
passed in, computed before the condition narrows it, so "high OI" keeps
the same absolute meaning whichever condition is asked.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ..core.enums import DeltaCategory
from .classify import delta_category
from .factor_analysis import AnalysisResult, single_factor_stats
from .record import Trade
from .stats import oi_percentile_value

Condition = Callable[[Trade, float], bool]

OI_THRESHOLD_PERCENTILE = 75.0


def best_level_for_condition(
    trades: Sequence[Trade],
    condition: Condition,
    *,
    percentile: float = OI_THRESHOLD_PERCENTILE,
) -> AnalysisResult | None:
    """Top TA level (by average MFE) among trades matching *condition*.

    *condition* receives each trade and the OI threshold.  Returns
    ``None`` when there are no trades, none match, or the matches hold
    no TA levels.
    """
    if not trades:
        return None

    threshold = oi_percentile_value(trades, percentile)
    matched = [t for t in trades if condition(t, threshold)]
    if not matched:
        return None

    stats = single_factor_stats(matched)
    return stats[0] if stats else None


def high_delta_high_oi(trade: Trade, oi_threshold: float) -> bool:
    """Aggressive order flow into above-threshold open interest."""
    category = delta_category(trade.delta)
    return (
        category in (DeltaCategory.HIGH, DeltaCategory.HIGH_PLUS)
        and trade.oi > oi_threshold
    )


def low_delta_low_oi(trade: Trade, oi_threshold: float) -> bool:
    """Quiet order flow at or below the open-interest threshold."""
    return delta_category(trade.delta) == DeltaCategory.LOW and trade.oi <= oi_threshold
