"""Trade Journal Analytics: which context tags come with better excursions.

Turns a list of logged trades into descriptive statistics.  Every
analysis is a pure function of the list passed in; nothing is cached
between calls and inputs are never modified.

Key components
--------------
**Record**

Trade                 One logged trade (context tags + MFE / MAE / delta / OI)
StrategyGroup         Display grouping of strategy names

**Classification helpers**

session_from_time     Entry hour -> S1 / S2 / S3 / S4 / IS4
delta_category        |delta| -> High++ / High / Low
calculate_duration    Entry -> exit minutes (format_duration for display)
oi_percentile_value   Nearest-rank open-interest percentile

**Aggregation**

single_factor_stats   Per-TA-level MFE / MAE averages and medians
session_stats         Same, per session in fixed session order
pair_stats            Co-occurring TA level pairs
entry_type_heatmap    TA level x entry type
session_heatmap       TA level x session
delta_heatmap         TA level x delta category
best_level_for_condition  Top level under a delta / OI predicate

**Around the core**

filter_trades         Strategy / date / direction / symbol narrowing
build_report          Every aggregate over one filtered list
TradeExporter         CSV / JSON import and export
JournalStore          JSON-file persistence for trades and settings
InsightGenerator      Optional Claude commentary on the results
"""

from .record import StrategyGroup, Trade
from .classify import delta_category, session_from_time
from .duration import calculate_duration, format_duration
from .stats import median, oi_percentile_value
from .factor_analysis import (
    AnalysisResult,
    PairAnalysisResult,
    pair_stats,
    session_stats,
    single_factor_stats,
)
from .heatmap import (
    HeatmapCell,
    HeatmapData,
    build_heatmap,
    delta_heatmap,
    entry_type_heatmap,
    session_heatmap,
)
from .conditions import best_level_for_condition, high_delta_high_oi, low_delta_low_oi
from .filters import filter_trades
from .report import DashboardReport, build_report
from .export import TradeExporter
from .store import JournalStore
from .insight import InsightGenerator

__all__ = [
    "Trade",
    "StrategyGroup",
    "session_from_time",
    "delta_category",
    "calculate_duration",
    "format_duration",
    "median",
    "oi_percentile_value",
    "AnalysisResult",
    "PairAnalysisResult",
    "single_factor_stats",
    "session_stats",
    "pair_stats",
    "HeatmapCell",
    "HeatmapData",
    "build_heatmap",
    "entry_type_heatmap",
    "session_heatmap",
    "delta_heatmap",
    "best_level_for_condition",
    "high_delta_high_oi",
    "low_delta_low_oi",
    "filter_trades",
    "DashboardReport",
    "build_report",
    "TradeExporter",
    "JournalStore",
    "InsightGenerator",
]
