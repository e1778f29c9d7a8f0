"""Shared fixtures for journal tests."""

import pytest
from datetime import datetime, timedelta

from edge_journal.core.enums import Direction, Session
from edge_journal.journal.record import Trade


def make_trade(
    levels: list[str | None] | None = None,
    mfe: float = 1.0,
    mae: float = 0.5,
    *,
    trade_id: str | None = None,
    timestamp: datetime | None = None,
    exit_after: timedelta | None = None,
    session: Session | None = None,
    direction: Direction = Direction.LONG,
    symbol: str = "BTCUSDT",
    strategies: list[str] | None = None,
    delta: float = 0.0,
    oi: float = 100_000.0,
    entry_type: str = "Type 1",
) -> Trade:
    """Helper to create a Trade with sensible defaults."""
    ts = timestamp or datetime(2025, 12, 2, 9, 44, 0)
    kwargs = {}
    if trade_id is not None:
        kwargs["id"] = trade_id
    return Trade(
        timestamp=ts,
        exit_timestamp=ts + exit_after if exit_after is not None else None,
        session=session,
        direction=direction,
        symbol=symbol,
        strategy_names=strategies if strategies is not None else ["levels only"],
        ta_levels=list(levels or []),
        delta=delta,
        oi=oi,
        entry_type=entry_type,
        exit_type="TP Full",
        mfe=mfe,
        mae=mae,
        **kwargs,
    )


@pytest.fixture
def scenario_trades() -> list[Trade]:
    """Three trades: {A,B}:10, {A}:20, {A,B}:6."""
    return [
        make_trade(["A", "B"], mfe=10),
        make_trade(["A"], mfe=20),
        make_trade(["A", "B"], mfe=6),
    ]


@pytest.fixture
def sample_trades() -> list[Trade]:
    """A small journal resembling real usage."""
    day = datetime(2025, 12, 2)
    return [
        make_trade(
            ["Daily Open", "Weekly Open", "Monthly Open"], mfe=7, mae=0.5,
            trade_id="sample-1", timestamp=day.replace(hour=21, minute=46),
            session=Session.S3, direction=Direction.SHORT, delta=-1.0, oi=150_000,
            entry_type="Type 1",
        ),
        make_trade(
            ["Previous Day High"], mfe=5, mae=0.5,
            trade_id="sample-2", timestamp=day.replace(hour=9, minute=44),
            session=Session.S1, direction=Direction.SHORT, delta=-10.0, oi=450_000,
            entry_type="SFP", strategies=["of sfp"],
        ),
        make_trade(
            ["Previous Day High"], mfe=2, mae=1,
            trade_id="sample-3", timestamp=day.replace(hour=21, minute=43),
            session=Session.S3, delta=1.0, oi=100_000, entry_type="Retest",
        ),
        make_trade(
            ["Daily Open", "Naked POC"], mfe=4, mae=0.2,
            trade_id="sample-4", timestamp=day.replace(hour=13, minute=42),
            session=Session.S2, delta=21.0, oi=800_000, entry_type="Type 2",
            exit_after=timedelta(minutes=125),
        ),
        make_trade(
            ["Daily Open", "Naked POC", "Golden Pocket"], mfe=3, mae=0.88,
            trade_id="sample-5", timestamp=day.replace(hour=2, minute=10),
            session=Session.IS4, delta=12.0, oi=300_000, entry_type="Type 2",
            strategies=["of sfp", "levels only"], exit_after=timedelta(minutes=45),
        ),
    ]
