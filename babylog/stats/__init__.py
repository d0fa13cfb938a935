"""Statistics over validated entries."""

from babylog.stats.aggregate import (
    WINDOW_LENGTHS,
    aggregate,
    calculate_daily_stats,
    format_minutes,
    local_day,
    resolve_timezone,
    window_days,
)
from babylog.stats.charts import ChartSeries, day_label, to_chart_series

__all__ = [
    "WINDOW_LENGTHS",
    "aggregate",
    "calculate_daily_stats",
    "format_minutes",
    "local_day",
    "resolve_timezone",
    "window_days",
    "ChartSeries",
    "day_label",
    "to_chart_series",
]
