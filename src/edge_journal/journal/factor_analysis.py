"""Single-factor and paired-factor outcome statistics.

Groups trades by a categorical tag and reports how the outcome metrics
(MFE / MAE) behave inside each group.  Answers questions like "Do my
trades at the Weekly Open run further than at the POC?" or "Which two
levels together give the best excursion?"

Usage::

    for row in single_factor_stats(trades):
        print(row.level, row.avg_mfe, row.count)

    best_pairs = pair_stats(trades)[:3]
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from itertools import combinations
from typing import Any

from ..core.enums import Session
from .record import Trade
from .stats import MeanAccumulator, median

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Outcome statistics for one category.

    ``level`` holds the category label for any axis (TA level, session).
    """

    level: str
    avg_mfe: float
    avg_mae: float
    median_mfe: float
    median_mae: float
    count: int
    score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "avg_mfe": self.avg_mfe,
            "avg_mae": self.avg_mae,
            "median_mfe": self.median_mfe,
            "median_mae": self.median_mae,
            "count": self.count,
            "score": self.score,
        }


@dataclass
class PairAnalysisResult:
    """Average MFE for trades sharing two TA levels."""

    pair: tuple[str, str]
    avg_mfe: float
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"pair": list(self.pair), "avg_mfe": self.avg_mfe, "count": self.count}


@dataclass
class _GroupStats:
    """Accumulator for one category."""

    mfes: list[float] = field(default_factory=list)
    maes: list[float] = field(default_factory=list)

    def record(self, trade: Trade) -> None:
        self.mfes.append(trade.mfe)
        self.maes.append(trade.mae)

    def to_result(self, label: str) -> AnalysisResult:
        count = len(self.mfes)
        avg_mfe = sum(self.mfes) / count
        avg_mae = sum(self.maes) / count
        return AnalysisResult(
            level=label,
            avg_mfe=avg_mfe,
            avg_mae=avg_mae,
            median_mfe=median(self.mfes),
            median_mae=median(self.maes),
            count=count,
            score=avg_mfe - avg_mae,
        )


def _group_by(
    trades: Iterable[Trade],
    keys: Callable[[Trade], Iterable[str]],
) -> list[AnalysisResult]:
    """Bucket each trade under every label *keys* yields for it.

    Results come back in first-encountered label order.
    """
    groups: dict[str, _GroupStats] = {}
    for trade in trades:
        for label in keys(trade):
            groups.setdefault(label, _GroupStats()).record(trade)
    return [stats.to_result(label) for label, stats in groups.items()]


def single_factor_stats(trades: Sequence[Trade]) -> list[AnalysisResult]:
    """Per-TA-level statistics, best average MFE first.

    A trade contributes once to each distinct level it holds.  Ties keep
    first-encountered order.
    """
    results = _group_by(trades, lambda t: t.active_levels)
    results.sort(key=lambda r: r.avg_mfe, reverse=True)
    return results


def session_stats(trades: Sequence[Trade]) -> list[AnalysisResult]:
    """Per-session statistics in fixed session order (S1..IS4, N/A).

    Every trade lands in exactly one session; an unset session counts
    as ``N/A``.
    """
    results = _group_by(trades, lambda t: (t.session_label,))
    results.sort(key=lambda r: Session.sort_key(r.level))
    return results


def pair_stats(
    trades: Sequence[Trade],
    *,
    min_count: int = 2,
) -> list[PairAnalysisResult]:
    """Average MFE for every pair of TA levels seen together on a trade.

    Each trade's distinct levels are sorted before pairing, so a pair is
    always keyed ``(a, b)`` with ``a < b`` regardless of slot order.
    Pairs observed on fewer than *min_count* trades are dropped.  Best
    average MFE first.
    """
    totals: dict[tuple[str, str], MeanAccumulator] = {}
    for trade in trades:
        for pair in combinations(sorted(trade.active_levels), 2):
            totals.setdefault(pair, MeanAccumulator()).add(trade.mfe)

    results = [
        PairAnalysisResult(pair=pair, avg_mfe=acc.mean, count=acc.count)
        for pair, acc in totals.items()
        if acc.count >= min_count
    ]
    results.sort(key=lambda r: r.avg_mfe, reverse=True)
    logger.debug(
        "pair_stats: %d pairs seen, %d kept (min_count=%d)",
        len(totals), len(results), min_count,
    )
    return results
