"""Trade export and import: CSV/JSON.

The CSV layout matches the journal app's export files: one row
per trade, camelCase headers, list fields joined with ``|``.

Usage::

    exporter = TradeExporter()
    csv_str = exporter.to_csv(trades)
    result = exporter.from_csv(csv_str)
    print(len(result.trades), result.skipped)
"""

from __future__ import annotations

import csv
import io
import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any

from ..core.errors import DataError, MissingColumnsError
from .record import Trade

logger = logging.getLogger(__name__)

LIST_SEPARATOR = "|"

_CSV_COLUMNS = [
    "id",
    "timestamp",
    "exitTimestamp",
    "session",
    "direction",
    "symbol",
    "marketRegime",
    "strategyNames",
    "taLevels",
    "delta",
    "oi",
    "entryType",
    "exitType",
    "mfe",
    "mae",
    "notes",
    "imageUrls",
]

REQUIRED_COLUMNS = ["timestamp", "delta", "oi", "mfe", "mae", "entryType", "exitType"]

_LIST_FIELDS = ("strategyNames", "taLevels", "imageUrls")
_NUMERIC_FIELDS = ("delta", "oi", "mfe", "mae")


@dataclass
class ImportResult:
    """Trades decoded from an import file plus the rows that were dropped."""

    trades: list[Trade] = field(default_factory=list)
    skipped: int = 0


def _parse_number(value: Any) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


class TradeExporter:
    """Convert trades to and from CSV / JSON text."""

    # ------------------------------------------------------------------ #
    # CSV Export                                                           #
    # ------------------------------------------------------------------ #

    def to_csv(
        self,
        trades: list[Trade],
        *,
        columns: list[str] | None = None,
    ) -> str:
        """Export trades as a CSV string.

        Parameters
        ----------
        trades : list[Trade]
            Trades to export.
        columns : list[str] | None
            Column selection.  Defaults to ``_CSV_COLUMNS``.

        Returns
        -------
        str
            CSV-formatted string with header row.
        """
        cols = columns or _CSV_COLUMNS
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()

        for trade in trades:
            row = self._trade_to_row(trade)
            writer.writerow({c: row.get(c, "") for c in cols})

        return buf.getvalue()

    # ------------------------------------------------------------------ #
    # CSV Import                                                           #
    # ------------------------------------------------------------------ #

    def from_csv(self, text: str) -> ImportResult:
        """Decode trades from CSV text.

        Rows whose delta / oi / mfe / mae are not numbers, or whose
        timestamp cannot be parsed, are skipped and counted.

        Raises
        ------
        MissingColumnsError
            If any of ``REQUIRED_COLUMNS`` is absent from the header.
        """
        reader = csv.DictReader(io.StringIO(text))
        headers = reader.fieldnames or []
        missing = [h for h in REQUIRED_COLUMNS if h not in headers]
        if missing:
            raise MissingColumnsError(missing)

        result = ImportResult()
        for line_no, row in enumerate(reader, start=2):
            if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
                continue

            numbers = {k: _parse_number(row.get(k)) for k in _NUMERIC_FIELDS}
            if any(v is None for v in numbers.values()):
                logger.debug("Skipping CSV line %d: non-numeric metric", line_no)
                result.skipped += 1
                continue

            data: dict[str, Any] = {k: v for k, v in row.items() if k is not None}
            data.update(numbers)
            for name in _LIST_FIELDS:
                raw = data.get(name)
                data[name] = raw.split(LIST_SEPARATOR) if raw else []
            if not data["strategyNames"] and data.get("strategyName"):
                data["strategyNames"] = [data["strategyName"]]

            try:
                result.trades.append(Trade.from_dict(data))
            except DataError as exc:
                logger.warning("Skipping CSV line %d: %s", line_no, exc)
                result.skipped += 1

        logger.info(
            "Decoded %d trades from CSV (%d skipped)", len(result.trades), result.skipped
        )
        return result

    # ------------------------------------------------------------------ #
    # JSON Export                                                          #
    # ------------------------------------------------------------------ #

    def to_json(
        self,
        trades: list[Trade],
        *,
        indent: int = 2,
    ) -> str:
        """Export trades as a JSON string (list of trade objects)."""
        return json.dumps([t.to_dict() for t in trades], indent=indent, default=str)

    # ------------------------------------------------------------------ #
    # Private helpers                                                      #
    # ------------------------------------------------------------------ #

    def _trade_to_row(self, trade: Trade) -> dict[str, Any]:
        """Flatten a Trade for one CSV row."""
        row = trade.to_dict()
        for name in _LIST_FIELDS:
            row[name] = LIST_SEPARATOR.join(row[name])
        row["exitTimestamp"] = row["exitTimestamp"] or ""
        row["session"] = row["session"] or ""
        return row
