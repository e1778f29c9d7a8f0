"""Dashboard report: every aggregate over one filtered trade list.

Runs each analysis independently over the same narrowed list and
collects the results into a single structure for rendering or JSON
output.

Usage::

    report = build_report(filter_trades(trades, strategies=["scalp"]),
                          direction="Long")
    print(report.best_high_delta_high_oi)
    json.dumps(report.to_dict())
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ..core.enums import Direction
from .conditions import best_level_for_condition, high_delta_high_oi, low_delta_low_oi
from .factor_analysis import (
    AnalysisResult,
    PairAnalysisResult,
    pair_stats,
    session_stats,
    single_factor_stats,
)
from .filters import (
    AssetResult,
    DurationPoint,
    asset_stats,
    duration_points,
    filter_trades,
    most_common_entry,
    unique_symbols,
)
from .heatmap import HeatmapData, delta_heatmap, entry_type_heatmap, session_heatmap
from .record import Trade

logger = logging.getLogger(__name__)


@dataclass
class DashboardReport:
    total_trades: int
    symbols: list[str]
    single_factor: list[AnalysisResult]
    sessions: list[AnalysisResult]
    pairs: list[PairAnalysisResult]
    entry_heatmap: HeatmapData
    session_heatmap: HeatmapData
    delta_heatmap: HeatmapData
    assets: list[AssetResult]
    durations: list[DurationPoint]
    most_common_entry: tuple[str, int] | None
    best_high_delta_high_oi: AnalysisResult | None
    best_low_delta_low_oi: AnalysisResult | None
    filters: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        def _opt(result: AnalysisResult | None) -> dict[str, Any] | None:
            return result.to_dict() if result else None

        entry = self.most_common_entry
        return {
            "total_trades": self.total_trades,
            "filters": dict(self.filters),
            "symbols": list(self.symbols),
            "single_factor": [r.to_dict() for r in self.single_factor],
            "sessions": [r.to_dict() for r in self.sessions],
            "pairs": [r.to_dict() for r in self.pairs],
            "entry_heatmap": self.entry_heatmap.to_dict(),
            "session_heatmap": self.session_heatmap.to_dict(),
            "delta_heatmap": self.delta_heatmap.to_dict(),
            "assets": [a.to_dict() for a in self.assets],
            "durations": [
                {"trade_id": p.trade_id, "duration": p.duration, "mfe": p.mfe}
                for p in self.durations
            ],
            "most_common_entry": (
                {"entry_type": entry[0], "count": entry[1]} if entry else None
            ),
            "best_high_delta_high_oi": _opt(self.best_high_delta_high_oi),
            "best_low_delta_low_oi": _opt(self.best_low_delta_low_oi),
        }


def build_report(
    trades: Sequence[Trade],
    *,
    direction: Direction | str | None = None,
    symbol: str | None = None,
    min_pair_count: int = 2,
    oi_percentile: float = 75.0,
) -> DashboardReport:
    """Compute every dashboard aggregate.

    *direction* and *symbol* narrow the list for all analyses except the
    per-asset table, which only applies *direction* so every symbol
    stays listed.
    """
    by_direction = filter_trades(trades, direction=direction)
    displayed = filter_trades(by_direction, symbol=symbol)

    logger.info(
        "Building report over %d of %d trades (direction=%s symbol=%s)",
        len(displayed), len(trades), direction or "All", symbol or "All",
    )

    return DashboardReport(
        total_trades=len(displayed),
        symbols=unique_symbols(trades),
        single_factor=single_factor_stats(displayed),
        sessions=session_stats(displayed),
        pairs=pair_stats(displayed, min_count=min_pair_count),
        entry_heatmap=entry_type_heatmap(displayed),
        session_heatmap=session_heatmap(displayed),
        delta_heatmap=delta_heatmap(displayed),
        assets=asset_stats(by_direction),
        durations=duration_points(displayed),
        most_common_entry=most_common_entry(displayed),
        best_high_delta_high_oi=best_level_for_condition(
            displayed, high_delta_high_oi, percentile=oi_percentile
        ),
        best_low_delta_low_oi=best_level_for_condition(
            displayed, low_delta_low_oi, percentile=oi_percentile
        ),
        filters={
            "direction": Direction(direction).value if direction else None,
            "symbol": symbol,
        },
    )
