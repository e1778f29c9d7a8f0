"""Trade record: the core data model.

A Trade captures one discretionary trade as logged by the user: when
it happened, the context tags present at entry (strategies, TA levels,
entry/exit mechanics, market regime) and the outcome metrics
(MFE / MAE, order-flow delta, open interest).

Records are owned by the surrounding application (record store, CSV
import); the analytics functions only read them.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..core.enums import Direction, Session
from ..core.errors import DataError

logger = logging.getLogger(__name__)

MAX_TA_LEVEL_SLOTS = 10

# Placeholder written by older versions for an unused TA slot
_LEGACY_EMPTY_LEVEL = "None"


def normalize_level(value: Any) -> str | None:
    """Map an unused TA slot (``None``, ``""`` or ``"None"``) to ``None``."""
    if value is None:
        return None
    text = str(value)
    if text == "" or text == _LEGACY_EMPTY_LEVEL:
        return None
    return text


def parse_timestamp(value: datetime | str) -> datetime:
    """Parse an ISO-8601 timestamp, keeping whatever offset it carries."""
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise DataError(f"Invalid timestamp: {value!r}") from exc


@dataclass
class StrategyGroup:
    """User-defined grouping of strategy names (display only)."""

    id: str
    name: str
    strategies: list[str] = field(default_factory=list)


@dataclass
class Trade:
    """One logged trade.

    Parameters
    ----------
    timestamp : datetime
        Entry time.  Its ``hour`` is taken as the local hour for session
        classification.
    exit_timestamp : datetime | None
        Exit time; ``None`` means the duration is undefined (zero).
    session : Session | None
        Session recorded with the trade.  ``None`` is aggregated as
        ``N/A``.
    ta_levels : list[str | None]
        Up to ten confluence slots; ``None`` marks an unused slot.
    mfe, mae : float
        Maximum favorable / adverse excursion, in percent.
    """

    timestamp: datetime
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    exit_timestamp: datetime | None = None
    session: Session | None = None
    direction: Direction = Direction.LONG
    symbol: str = "UNK"
    market_regime: str = "Unknown"
    strategy_names: list[str] = field(default_factory=list)
    ta_levels: list[str | None] = field(default_factory=list)
    delta: float = 0.0
    oi: float = 0.0
    entry_type: str = ""
    exit_type: str = ""
    mfe: float = 0.0
    mae: float = 0.0
    notes: str = ""
    image_urls: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.ta_levels = [normalize_level(lvl) for lvl in self.ta_levels]
        if not isinstance(self.direction, Direction):
            self.direction = Direction(self.direction)
        if self.session is not None and not isinstance(self.session, Session):
            self.session = Session(self.session)

    # ------------------------------------------------------------------ #
    # Computed properties                                                  #
    # ------------------------------------------------------------------ #

    @property
    def active_levels(self) -> list[str]:
        """Distinct TA levels present on this trade, in slot order."""
        return list(dict.fromkeys(lvl for lvl in self.ta_levels if lvl is not None))

    @property
    def session_label(self) -> str:
        """Session label used for grouping (``N/A`` when unset)."""
        return (self.session or Session.NA).value

    # ------------------------------------------------------------------ #
    # Serialization                                                        #
    # ------------------------------------------------------------------ #

    def to_dict(self) -> dict[str, Any]:
        """Encode to the JSON shape used by the store and JSON export."""
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "exitTimestamp": (
                self.exit_timestamp.isoformat() if self.exit_timestamp else None
            ),
            "session": self.session.value if self.session else None,
            "direction": self.direction.value,
            "symbol": self.symbol,
            "marketRegime": self.market_regime,
            "strategyNames": list(self.strategy_names),
            "taLevels": [lvl if lvl is not None else "" for lvl in self.ta_levels],
            "delta": self.delta,
            "oi": self.oi,
            "entryType": self.entry_type,
            "exitType": self.exit_type,
            "mfe": self.mfe,
            "mae": self.mae,
            "notes": self.notes,
            "imageUrls": list(self.image_urls),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Trade:
        """Decode a stored trade, backfilling fields older records lack.

        Raises
        ------
        DataError
            If the timestamp is missing or unparseable, or a numeric
            field is not a number.
        """
        from .classify import session_from_time

        raw_ts = data.get("timestamp")
        if not raw_ts:
            raise DataError(f"Trade {data.get('id', '?')} has no timestamp")
        timestamp = parse_timestamp(raw_ts)

        raw_exit = data.get("exitTimestamp")
        exit_timestamp = parse_timestamp(raw_exit) if raw_exit else None

        raw_session = data.get("session")
        try:
            session = Session(raw_session) if raw_session else session_from_time(timestamp)
        except ValueError:
            logger.warning("Unknown session %r, deriving from timestamp", raw_session)
            session = session_from_time(timestamp)

        strategy_names = data.get("strategyNames")
        if strategy_names is None:
            legacy = data.get("strategyName")
            strategy_names = [legacy] if legacy else []

        image_urls = data.get("imageUrls") or []
        if not image_urls and data.get("imageUrl"):
            image_urls = [data["imageUrl"]]

        ta_levels = list(data.get("taLevels") or [])
        if len(ta_levels) > MAX_TA_LEVEL_SLOTS:
            logger.warning(
                "Trade %s has %d TA slots, keeping the first %d",
                data.get("id", "?"), len(ta_levels), MAX_TA_LEVEL_SLOTS,
            )
            ta_levels = ta_levels[:MAX_TA_LEVEL_SLOTS]

        direction = Direction.SHORT if data.get("direction") == "Short" else Direction.LONG

        try:
            numbers = {k: float(data.get(k) or 0.0) for k in ("delta", "oi", "mfe", "mae")}
        except (TypeError, ValueError) as exc:
            raise DataError(f"Trade {data.get('id', '?')} has a non-numeric metric") from exc

        return cls(
            id=data.get("id") or str(uuid.uuid4()),
            timestamp=timestamp,
            exit_timestamp=exit_timestamp,
            session=session,
            direction=direction,
            symbol=data.get("symbol") or "UNK",
            market_regime=data.get("marketRegime") or "Unknown",
            strategy_names=list(strategy_names),
            ta_levels=ta_levels,
            entry_type=data.get("entryType") or "",
            exit_type=data.get("exitType") or "",
            notes=data.get("notes") or "",
            image_urls=list(image_urls),
            **numbers,
        )
