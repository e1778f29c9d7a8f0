"""CLI entry point for the trade journal."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

import click

from .core.config import Settings, load_settings
from .core.enums import Direction
from .core.errors import JournalError
from .observability.logger import get_logger, setup_logging, start_run

logger = get_logger(__name__)


def _filter_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Shared trade-list filter options."""
    options = [
        click.option("--strategy", "strategies", multiple=True,
                     help="Keep trades tagged with this strategy (repeatable)"),
        click.option("--start", type=click.DateTime(["%Y-%m-%d"]), default=None,
                     help="First entry date (YYYY-MM-DD)"),
        click.option("--end", type=click.DateTime(["%Y-%m-%d"]), default=None,
                     help="Last entry date (YYYY-MM-DD)"),
        click.option("--direction", type=click.Choice([d.value for d in Direction]),
                     default=None, help="Long or Short only"),
        click.option("--symbol", default=None, help="Single instrument only"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load_store(ctx: click.Context):
    from .journal.store import JournalStore

    settings: Settings = ctx.obj["settings"]
    path = ctx.obj["store_path"] or settings.journal.store_path
    return JournalStore(path, defaults=settings.journal).load()


def _filtered(store, strategies, start: datetime | None, end: datetime | None) -> list:
    from .journal.filters import filter_trades

    return filter_trades(
        store.trades,
        strategies=strategies,
        start_date=start.date() if start else None,
        end_date=end.date() if end else None,
    )


@click.group()
@click.option("--config", default="configs/journal.toml", help="Config file path")
@click.option("--store", "store_path", default=None, help="Journal JSON file override")
@click.option("--log-level", default=None, help="Override the configured log level")
@click.pass_context
def main(ctx: click.Context, config: str, store_path: str | None, log_level: str | None) -> None:
    """Trading journal analytics."""
    try:
        settings = load_settings(config_path=config)
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc

    setup_logging(settings.observability, level=log_level)
    start_run(ctx.invoked_subcommand or "main")
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["store_path"] = store_path


@main.command()
@_filter_options
@click.option("--indent", default=2, type=int, help="JSON indentation")
@click.pass_context
def analyze(
    ctx: click.Context,
    strategies: tuple[str, ...],
    start: datetime | None,
    end: datetime | None,
    direction: str | None,
    symbol: str | None,
    indent: int,
) -> None:
    """Print every dashboard statistic as JSON."""
    from .journal.report import build_report

    settings: Settings = ctx.obj["settings"]
    try:
        store = _load_store(ctx)
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc

    trades = _filtered(store, strategies, start, end)
    report = build_report(
        trades,
        direction=direction,
        symbol=symbol,
        min_pair_count=settings.analytics.min_pair_count,
        oi_percentile=settings.analytics.oi_percentile,
    )
    click.echo(json.dumps(report.to_dict(), indent=indent))


@main.command("import-csv")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def import_csv(ctx: click.Context, path: Path) -> None:
    """Merge trades from a CSV export into the journal."""
    from .journal.export import TradeExporter

    try:
        store = _load_store(ctx)
        result = TradeExporter().from_csv(path.read_text(encoding="utf-8"))
        added = store.merge_trades(result.trades)
        if added:
            store.save()
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc

    logger.info("csv_imported", path=str(path), added=added, skipped=result.skipped)
    if added:
        click.echo(f"Imported {added} new trades.")
    else:
        click.echo("No new trades found.")


@main.command("export-csv")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@_filter_options
@click.pass_context
def export_csv(
    ctx: click.Context,
    path: Path,
    strategies: tuple[str, ...],
    start: datetime | None,
    end: datetime | None,
    direction: str | None,
    symbol: str | None,
) -> None:
    """Write the (filtered) trades to a CSV file."""
    from .journal.export import TradeExporter
    from .journal.filters import filter_trades

    try:
        store = _load_store(ctx)
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc

    trades = filter_trades(
        _filtered(store, strategies, start, end), direction=direction, symbol=symbol
    )
    path.write_text(TradeExporter().to_csv(trades), encoding="utf-8")
    click.echo(f"Exported {len(trades)} trades to {path}")


@main.command()
@_filter_options
@click.pass_context
def insight(
    ctx: click.Context,
    strategies: tuple[str, ...],
    start: datetime | None,
    end: datetime | None,
    direction: str | None,
    symbol: str | None,
) -> None:
    """Ask Claude for commentary on the strongest edges."""
    from .journal.factor_analysis import pair_stats, single_factor_stats
    from .journal.filters import filter_trades
    from .journal.insight import InsightGenerator

    settings: Settings = ctx.obj["settings"]
    try:
        store = _load_store(ctx)
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc

    trades = filter_trades(
        _filtered(store, strategies, start, end), direction=direction, symbol=symbol
    )
    if not trades:
        raise click.ClickException("Current filters returned 0 trades.")

    generator = InsightGenerator(
        settings.insight,
        top_n=settings.analytics.insight_top_n,
        sample_size=settings.analytics.insight_sample_size,
    )
    click.echo(
        generator.generate_insight(
            single_factor_stats(trades),
            pair_stats(trades, min_count=settings.analytics.min_pair_count),
            trades,
        )
    )


if __name__ == "__main__":
    main()
