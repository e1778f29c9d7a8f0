"""JSON-file record store for trades and journal settings.

Holds the full trade list and the user's vocabularies (TA levels, entry
types, market regimes, strategy groups) in one JSON document.  The
analytics functions never touch the store; callers load trades from here
and pass lists on.

Document layout::

    {
      "trades": [<Trade.to_dict()>, ...],
      "settings": {"taLevels": [...], "entryTypes": [...], "marketRegimes": [...],
                   "strategyGroups": [{"id", "name", "strategies"}, ...]}
    }
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import asdict
from pathlib import Path
from typing import Any

from ..core.config import JournalConfig
from ..core.errors import DataError, StoreError
from ..core.file_io import read_text, safe_write_text
from .classify import session_from_time
from .record import StrategyGroup, Trade

logger = logging.getLogger(__name__)


class JournalStore:
    """Load, mutate and persist the trade list.

    Parameters
    ----------
    path : str | Path
        Location of the JSON document.  A missing file is an empty
        journal.
    defaults : JournalConfig | None
        Vocabularies used when the document has no saved settings.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        defaults: JournalConfig | None = None,
    ) -> None:
        self._path = Path(path)
        self._defaults = defaults or JournalConfig()
        self._trades: list[Trade] = []
        self._settings: dict[str, Any] = {}

    @property
    def path(self) -> Path:
        return self._path

    @property
    def trades(self) -> list[Trade]:
        """A copy of the stored trade list."""
        return list(self._trades)

    # ------------------------------------------------------------------ #
    # Persistence                                                          #
    # ------------------------------------------------------------------ #

    def load(self) -> JournalStore:
        """Read the document from disk, replacing in-memory state.

        Raises
        ------
        StoreError
            If the file is not valid JSON or a record cannot be decoded.
        """
        text = read_text(self._path)
        if text is None:
            logger.info("No journal at %s, starting empty", self._path)
            self._trades = []
            self._settings = {}
            return self

        try:
            doc = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StoreError(f"Corrupt journal file {self._path}: {exc}") from exc
        if not isinstance(doc, dict):
            raise StoreError(f"Journal file {self._path} is not a JSON object")

        try:
            self._trades = [Trade.from_dict(d) for d in doc.get("trades", [])]
        except DataError as exc:
            raise StoreError(f"Bad trade record in {self._path}: {exc}") from exc
        self._settings = dict(doc.get("settings") or {})

        logger.info("Loaded %d trades from %s", len(self._trades), self._path)
        return self

    def save(self) -> None:
        doc = {
            "trades": [t.to_dict() for t in self._trades],
            "settings": self._settings,
        }
        safe_write_text(self._path, json.dumps(doc, indent=2))
        logger.debug("Saved %d trades to %s", len(self._trades), self._path)

    # ------------------------------------------------------------------ #
    # Trades                                                               #
    # ------------------------------------------------------------------ #

    def get_trade(self, trade_id: str) -> Trade | None:
        return next((t for t in self._trades if t.id == trade_id), None)

    def add_trade(self, trade: Trade) -> Trade:
        """Append *trade*, deriving its session from the entry time if unset."""
        if self.get_trade(trade.id) is not None:
            raise StoreError(f"Trade {trade.id} already exists")
        if trade.session is None:
            trade.session = session_from_time(trade.timestamp)
        self._trades.append(trade)
        return trade

    def update_trade(self, trade: Trade) -> Trade:
        """Replace the stored trade with the same id."""
        for i, existing in enumerate(self._trades):
            if existing.id == trade.id:
                self._trades[i] = trade
                return trade
        raise StoreError(f"Unknown trade {trade.id}")

    def delete_trade(self, trade_id: str) -> bool:
        """Remove a trade; returns ``False`` if it was not stored."""
        before = len(self._trades)
        self._trades = [t for t in self._trades if t.id != trade_id]
        return len(self._trades) != before

    def merge_trades(self, trades: Iterable[Trade]) -> int:
        """Add trades whose ids are not stored yet; returns how many were added."""
        existing = {t.id for t in self._trades}
        added = 0
        for trade in trades:
            if trade.id in existing:
                continue
            self._trades.append(trade)
            existing.add(trade.id)
            added += 1
        logger.info("Merged %d new trades into journal", added)
        return added

    # ------------------------------------------------------------------ #
    # Settings                                                             #
    # ------------------------------------------------------------------ #

    @property
    def ta_levels(self) -> list[str]:
        return list(self._settings.get("taLevels", self._defaults.ta_levels))

    @ta_levels.setter
    def ta_levels(self, levels: list[str]) -> None:
        self._settings["taLevels"] = _dedupe(levels)

    @property
    def entry_types(self) -> list[str]:
        return list(self._settings.get("entryTypes", self._defaults.entry_types))

    @entry_types.setter
    def entry_types(self, types: list[str]) -> None:
        self._settings["entryTypes"] = _dedupe(types)

    @property
    def market_regimes(self) -> list[str]:
        return list(self._settings.get("marketRegimes", self._defaults.market_regimes))

    @market_regimes.setter
    def market_regimes(self, regimes: list[str]) -> None:
        self._settings["marketRegimes"] = _dedupe(regimes)

    @property
    def strategy_groups(self) -> list[StrategyGroup]:
        saved = self._settings.get("strategyGroups")
        if saved is None:
            return [
                StrategyGroup(id=g.id, name=g.name, strategies=list(g.strategies))
                for g in self._defaults.strategy_groups
            ]
        return [
            StrategyGroup(
                id=str(g.get("id", "")),
                name=g.get("name", ""),
                strategies=list(g.get("strategies") or []),
            )
            for g in saved
        ]

    @strategy_groups.setter
    def strategy_groups(self, groups: list[StrategyGroup]) -> None:
        self._settings["strategyGroups"] = [asdict(g) for g in groups]


def _dedupe(items: Iterable[str]) -> list[str]:
    """Trimmed, non-empty, first occurrence kept."""
    return list(dict.fromkeys(i.strip() for i in items if i and i.strip()))
