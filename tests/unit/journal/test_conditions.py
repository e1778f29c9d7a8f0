"""Tests for best-level-under-condition queries."""

from edge_journal.journal.conditions import (
    best_level_for_condition,
    high_delta_high_oi,
    low_delta_low_oi,
)

from .conftest import make_trade


def _trades():
    # OI threshold (75th of 100,200,300,400) is 400
    return [
        make_trade(["Quiet"], mfe=3, delta=1, oi=100),
        make_trade(["Quiet", "POC"], mfe=1, delta=-2, oi=200),
        make_trade(["Loud"], mfe=8, delta=25, oi=300),
        make_trade(["Loud"], mfe=9, delta=12, oi=400),
    ]


class TestPredicates:
    def test_high_delta_needs_oi_strictly_above(self):
        assert high_delta_high_oi(make_trade(delta=10, oi=401), 400)
        assert not high_delta_high_oi(make_trade(delta=10, oi=400), 400)

    def test_high_delta_accepts_high_plus(self):
        assert high_delta_high_oi(make_trade(delta=-30, oi=500), 400)

    def test_high_delta_rejects_low(self):
        assert not high_delta_high_oi(make_trade(delta=7, oi=500), 400)

    def test_low_delta_includes_threshold(self):
        assert low_delta_low_oi(make_trade(delta=3, oi=400), 400)
        assert not low_delta_low_oi(make_trade(delta=3, oi=401), 400)
        assert not low_delta_low_oi(make_trade(delta=8, oi=10), 400)


class TestBestLevelForCondition:
    def test_low_delta_low_oi(self):
        best = best_level_for_condition(_trades(), low_delta_low_oi)
        assert best.level == "Quiet"
        assert best.count == 2
        assert best.avg_mfe == 2

    def test_no_trade_above_top_percentile(self):
        # Top OI equals the threshold, so nothing is strictly above it
        assert best_level_for_condition(_trades(), high_delta_high_oi) is None

    def test_high_delta_high_oi_match(self):
        trades = _trades() + [make_trade(["Spike"], mfe=6, delta=30, oi=900)]
        # threshold over five trades: floor(3.75) = index 3 -> 400
        best = best_level_for_condition(trades, high_delta_high_oi)
        assert best.level == "Spike"

    def test_threshold_from_full_list(self):
        seen = []

        def record(trade, threshold):
            seen.append(threshold)
            return False

        best_level_for_condition(_trades(), record)
        assert set(seen) == {400.0}

    def test_custom_percentile(self):
        seen = []

        def record(trade, threshold):
            seen.append(threshold)
            return True

        best_level_for_condition(_trades(), record, percentile=0)
        assert set(seen) == {100.0}

    def test_empty(self):
        assert best_level_for_condition([], low_delta_low_oi) is None

    def test_matches_without_levels(self):
        trades = [make_trade([], delta=1, oi=10)]
        assert best_level_for_condition(trades, low_delta_low_oi) is None
