"""Trade-list filters and the small dashboard aggregates.

Everything here returns new lists; the input trade list is never
modified.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from ..core.enums import Direction
from .duration import calculate_duration
from .record import StrategyGroup, Trade
from .stats import MeanAccumulator


@dataclass
class AssetResult:
    symbol: str
    avg_mfe: float
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"symbol": self.symbol, "avg_mfe": self.avg_mfe, "count": self.count}


@dataclass
class DurationPoint:
    """One point of the duration vs MFE scatter."""

    trade_id: str
    duration: float  # minutes
    mfe: float


def _as_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def filter_trades(
    trades: Sequence[Trade],
    *,
    strategies: Iterable[str] | None = None,
    start_date: date | datetime | str | None = None,
    end_date: date | datetime | str | None = None,
    direction: Direction | str | None = None,
    symbol: str | None = None,
) -> list[Trade]:
    """Narrow *trades* by the dashboard criteria.

    Parameters
    ----------
    strategies : iterable of str | None
        Keep a trade if any of its strategy names is selected.  An empty
        or missing selection keeps everything.
    start_date, end_date : date | None
        Inclusive calendar-day bounds on the entry timestamp.
    direction : Direction | None
        ``Long`` or ``Short``.
    symbol : str | None
        Exact instrument match.
    """
    result = list(trades)

    selected = set(strategies or ())
    if selected:
        result = [t for t in result if any(s in selected for s in t.strategy_names)]

    if start_date:
        start = _as_date(start_date)
        result = [t for t in result if t.timestamp.date() >= start]
    if end_date:
        end = _as_date(end_date)
        result = [t for t in result if t.timestamp.date() <= end]

    if direction:
        wanted = Direction(direction)
        result = [t for t in result if t.direction == wanted]

    if symbol:
        result = [t for t in result if t.symbol == symbol]

    return result


def all_strategies(trades: Iterable[Trade]) -> list[str]:
    """Sorted distinct strategy names across *trades*."""
    return sorted({s for t in trades for s in t.strategy_names})


def unique_symbols(trades: Iterable[Trade]) -> list[str]:
    return sorted({t.symbol or "UNK" for t in trades})


def group_strategies(
    strategies: Sequence[str],
    groups: Sequence[StrategyGroup],
) -> tuple[list[tuple[StrategyGroup, list[str]]], list[str]]:
    """Arrange *strategies* under their groups for display.

    A strategy belongs to the first group listing it.  Groups with no
    matching strategy are omitted.

    Returns
    -------
    tuple
        ``(grouped, ungrouped)`` where ``grouped`` is a list of
        ``(group, strategies)`` in group order.
    """
    available = set(strategies)
    assigned: set[str] = set()
    grouped: list[tuple[StrategyGroup, list[str]]] = []

    for group in groups:
        members = [s for s in group.strategies if s in available and s not in assigned]
        if members:
            grouped.append((group, members))
            assigned.update(members)

    ungrouped = [s for s in strategies if s not in assigned]
    return grouped, ungrouped


def asset_stats(trades: Iterable[Trade]) -> list[AssetResult]:
    """Average MFE per symbol, best first."""
    totals: dict[str, MeanAccumulator] = {}
    for trade in trades:
        totals.setdefault(trade.symbol or "UNK", MeanAccumulator()).add(trade.mfe)

    results = [
        AssetResult(symbol=sym, avg_mfe=acc.mean, count=acc.count)
        for sym, acc in totals.items()
    ]
    results.sort(key=lambda r: r.avg_mfe, reverse=True)
    return results


def most_common_entry(trades: Iterable[Trade]) -> tuple[str, int] | None:
    """Most frequent entry type and its count; earliest seen wins ties.

    Blank entry types are counted too.  Returns ``None`` when there are no
    trades or when blank is the most frequent.
    """
    counts: dict[str, int] = {}
    for trade in trades:
        counts[trade.entry_type] = counts.get(trade.entry_type, 0) + 1

    best = ("", 0)
    for entry_type, count in counts.items():
        if count > best[1]:
            best = (entry_type, count)
    return best if best[0] else None


def duration_points(trades: Iterable[Trade]) -> list[DurationPoint]:
    """Duration vs MFE for trades that have an exit time."""
    return [
        DurationPoint(
            trade_id=t.id,
            duration=calculate_duration(t.timestamp, t.exit_timestamp),
            mfe=t.mfe,
        )
        for t in trades
        if t.exit_timestamp
    ]
