"""Data models for babylog."""

from babylog.models.base import PENDING, SCHEMA_VERSION, coerce_timestamp
from babylog.models.bath import Bath
from babylog.models.diaper import DIAPER_TYPES, Diaper
from babylog.models.entry import ENTRY_TYPES, ENTRY_VARIANTS, Entry, entry_adapter
from babylog.models.feed import BottleFeed, NursingFeed
from babylog.models.pump import Pump
from babylog.models.sleep import Sleep
from babylog.models.stats import (
    DailyStat,
    DiaperDay,
    DiaperStats,
    FeedingDay,
    FeedingStats,
    NursingBreakdown,
    PumpDay,
    PumpStats,
    SleepDay,
    SleepStats,
    StatsReport,
)

__all__ = [
    "PENDING",
    "SCHEMA_VERSION",
    "coerce_timestamp",
    "Entry",
    "ENTRY_TYPES",
    "ENTRY_VARIANTS",
    "entry_adapter",
    "NursingFeed",
    "BottleFeed",
    "Sleep",
    "Pump",
    "Diaper",
    "DIAPER_TYPES",
    "Bath",
    "DailyStat",
    "NursingBreakdown",
    "FeedingDay",
    "FeedingStats",
    "SleepDay",
    "SleepStats",
    "PumpDay",
    "PumpStats",
    "DiaperDay",
    "DiaperStats",
    "StatsReport",
]
