"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from .errors import ConfigError


DEFAULT_TA_LEVELS = [
    "Daily Open",
    "Weekly Open",
    "Monthly Open",
    "Fib 0.618",
    "Fib 0.5",
    "Fib 0.382",
    "POC",
    "VAL",
    "VAH",
    "Previous Day High",
    "Previous Day Low",
    "Golden Pocket",
    "Naked POC",
]

DEFAULT_ENTRY_TYPES = ["Type 1", "Type 2", "SFP", "Breakout", "Retest"]

DEFAULT_MARKET_REGIMES = [
    "Trending Up",
    "Trending Down",
    "Ranging / Chop",
    "High Volatility",
    "Low Volatility / Compression",
    "News Event",
]


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class StrategyGroupConfig(BaseModel):
    id: str
    name: str
    strategies: list[str] = Field(default_factory=list)


def _default_groups() -> list[StrategyGroupConfig]:
    return [
        StrategyGroupConfig(id="1", name="Trend Following"),
        StrategyGroupConfig(id="2", name="Reversals"),
        StrategyGroupConfig(id="3", name="Scalps"),
    ]


class JournalConfig(BaseModel):
    store_path: str = "data/journal.json"
    ta_levels: list[str] = Field(default_factory=lambda: list(DEFAULT_TA_LEVELS))
    entry_types: list[str] = Field(default_factory=lambda: list(DEFAULT_ENTRY_TYPES))
    market_regimes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MARKET_REGIMES)
    )
    strategy_groups: list[StrategyGroupConfig] = Field(default_factory=_default_groups)


class AnalyticsConfig(BaseModel):
    oi_percentile: float = Field(default=75.0, ge=0.0, le=100.0)
    min_pair_count: int = Field(default=2, ge=1)
    insight_top_n: int = 3
    insight_sample_size: int = 5


class InsightConfig(BaseModel):
    api_key_env: str = "ANTHROPIC_API_KEY"  # Name of env var holding the key
    model: str = "claude-3-5-haiku-latest"
    max_tokens: int = 1024

    @property
    def api_key(self) -> str:
        return os.environ.get(self.api_key_env, "")


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "console"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    journal: JournalConfig = Field(default_factory=JournalConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    insight: InsightConfig = Field(default_factory=InsightConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "EDGE_JOURNAL_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).  A path that
            does not exist is ignored.
        overrides: Dict of overrides to apply on top.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    if overrides:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value

    return Settings(**data)
