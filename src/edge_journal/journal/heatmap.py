"""Two-dimensional heatmaps of average MFE: TA level against a second tag.

The y axis is always the trade's distinct TA levels (a trade shows up in
every row it holds).  The x axis is one of entry type, session, or
delta category.  Cells with no trades are absent from the grid.

Usage::

    data = session_heatmap(trades)
    for y in data.y_labels:
        row = [data.cell(y, x) for x in data.x_labels]
    intensity = cell.avg_mfe / data.max_mfe
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..core.enums import DeltaCategory, Session
from .classify import delta_category
from .record import Trade
from .stats import MeanAccumulator


@dataclass
class HeatmapCell:
    avg_mfe: float
    count: int


@dataclass
class HeatmapData:
    """Sparse cross-tab keyed by ``(y_label, x_label)``."""

    x_labels: list[str] = field(default_factory=list)
    y_labels: list[str] = field(default_factory=list)
    grid: dict[tuple[str, str], HeatmapCell] = field(default_factory=dict)
    max_mfe: float = 0.0

    def cell(self, y: str, x: str) -> HeatmapCell | None:
        return self.grid.get((y, x))

    def to_dict(self) -> dict[str, Any]:
        return {
            "x_labels": list(self.x_labels),
            "y_labels": list(self.y_labels),
            "cells": [
                {"y": y, "x": x, "avg_mfe": c.avg_mfe, "count": c.count}
                for (y, x), c in self.grid.items()
            ],
            "max_mfe": self.max_mfe,
        }


def build_heatmap(
    trades: Sequence[Trade],
    x_axis: Callable[[Trade], str | None],
    x_sort_key: Callable[[str], Any] | None = None,
) -> HeatmapData:
    """Cross-tabulate average MFE between TA levels and *x_axis*.

    Parameters
    ----------
    x_axis : callable
        Returns the trade's x label, or a falsy value to leave the trade
        out of this heatmap entirely.
    x_sort_key : callable | None
        Ordering for x labels.  ``None`` sorts lexicographically.
    """
    x_set: set[str] = set()
    y_set: set[str] = set()
    totals: dict[tuple[str, str], MeanAccumulator] = {}

    for trade in trades:
        x = x_axis(trade)
        if not x:
            continue
        x_set.add(x)
        for y in trade.active_levels:
            y_set.add(y)
            totals.setdefault((y, x), MeanAccumulator()).add(trade.mfe)

    grid: dict[tuple[str, str], HeatmapCell] = {}
    max_mfe = 0.0
    for key, acc in totals.items():
        avg = acc.mean
        if avg > max_mfe:
            max_mfe = avg
        grid[key] = HeatmapCell(avg_mfe=avg, count=acc.count)

    return HeatmapData(
        x_labels=sorted(x_set, key=x_sort_key),
        y_labels=sorted(y_set),
        grid=grid,
        max_mfe=max_mfe,
    )


def entry_type_heatmap(trades: Sequence[Trade]) -> HeatmapData:
    """TA level x entry type.  Trades without an entry type are skipped."""
    return build_heatmap(trades, lambda t: t.entry_type)


def session_heatmap(trades: Sequence[Trade]) -> HeatmapData:
    """TA level x session, columns in session order."""
    return build_heatmap(trades, lambda t: t.session_label, Session.sort_key)


def delta_heatmap(trades: Sequence[Trade]) -> HeatmapData:
    """TA level x delta category, columns ``High++, High, Low``."""
    return build_heatmap(
        trades, lambda t: delta_category(t.delta).value, DeltaCategory.sort_key
    )
