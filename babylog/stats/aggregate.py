"""Day-level statistics over validated entries.

Entries are bucketed by the local calendar date of ``started_at`` in the
consumer's timezone. Every day of the window gets a bucket, so series have
no gaps, and averages divide by the window length rather than the number of
days that happen to have data.
"""

import math
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional, Union

import pytz
from pydantic import BaseModel

from babylog.models import (
    Bath,
    BottleFeed,
    DailyStat,
    Diaper,
    DiaperDay,
    DiaperStats,
    Entry,
    FeedingDay,
    FeedingStats,
    NursingBreakdown,
    NursingFeed,
    Pump,
    PumpDay,
    PumpStats,
    Sleep,
    SleepDay,
    SleepStats,
    StatsReport,
)

WINDOW_LENGTHS = (7, 30, 90)


def resolve_timezone(tz: Union[str, tzinfo]) -> tzinfo:
    """Turn a zone name into a tzinfo. tzinfo objects pass through.

    Raises:
        ValueError: If the zone name is unknown.
    """
    if not isinstance(tz, str):
        return tz
    try:
        return pytz.timezone(tz)
    except pytz.UnknownTimeZoneError as e:
        raise ValueError(f"Unknown timezone: {tz}") from e


def local_day(moment: datetime, zone: tzinfo) -> date:
    """Calendar date of an aware datetime in the given zone."""
    return moment.astimezone(zone).date()


def window_days(days: int, zone: tzinfo, today: Optional[date] = None) -> list[date]:
    """Every calendar day in the window, oldest first, ending today.

    Args:
        days: Window length. Must be 7, 30 or 90.
        zone: Zone that decides what "today" is.
        today: Override for the last day of the window.

    Raises:
        ValueError: If the window length is not supported.
    """
    if days not in WINDOW_LENGTHS:
        raise ValueError(f"Invalid window: {days}. Must be one of {list(WINDOW_LENGTHS)}")
    if today is None:
        today = datetime.now(zone).date()
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


class _DayBucket(BaseModel):
    """Running totals for one day. Frozen into a DailyStat when done."""

    date: str
    feed_count: int = 0
    nursing_minutes: float = 0.0
    left_side_minutes: float = 0.0
    right_side_minutes: float = 0.0
    bottle_oz: float = 0.0
    sleep_minutes: float = 0.0
    longest_sleep_minutes: float = 0.0
    pumped_oz: float = 0.0
    pee: int = 0
    poop: int = 0
    both: int = 0
    bath_count: int = 0

    def add(self, entry: Entry) -> None:
        if isinstance(entry, NursingFeed):
            self.feed_count += 1
            minutes = entry.duration_minutes
            if minutes is None:
                return
            self.nursing_minutes += minutes
            if entry.side == "left":
                self.left_side_minutes += minutes
            elif entry.side == "right":
                self.right_side_minutes += minutes
        elif isinstance(entry, BottleFeed):
            self.feed_count += 1
            self.bottle_oz += entry.amount_oz or 0.0
        elif isinstance(entry, Sleep):
            minutes = entry.duration_minutes
            if minutes is None:
                return
            self.sleep_minutes += minutes
            self.longest_sleep_minutes = max(self.longest_sleep_minutes, minutes)
        elif isinstance(entry, Pump):
            self.pumped_oz += entry.pumped_oz
        elif isinstance(entry, Diaper):
            setattr(self, entry.diaper_type, getattr(self, entry.diaper_type) + 1)
        elif isinstance(entry, Bath):
            self.bath_count += 1
        else:
            raise TypeError(f"Unhandled entry variant: {type(entry).__name__}")

    def freeze(self) -> DailyStat:
        return DailyStat(**self.model_dump())


def _bucket(
    entries: Iterable[Entry],
    buckets: dict[str, _DayBucket],
    zone: tzinfo,
    sparse: bool,
) -> None:
    """Add entries to their local-day bucket; sparse mode creates missing days."""
    for entry in entries:
        key = local_day(entry.started_at, zone).isoformat()
        bucket = buckets.get(key)
        if bucket is None:
            if not sparse:
                continue
            bucket = buckets[key] = _DayBucket(date=key)
        bucket.add(entry)


def calculate_daily_stats(
    entries: Iterable[Entry], tz: Union[str, tzinfo] = "UTC"
) -> dict[str, DailyStat]:
    """Per-day stats for only the days that have entries, in date order."""
    zone = resolve_timezone(tz)
    buckets: dict[str, _DayBucket] = {}
    _bucket(entries, buckets, zone, sparse=True)
    return {key: buckets[key].freeze() for key in sorted(buckets)}


def _feeding_stats(days: tuple[DailyStat, ...], length: int) -> FeedingStats:
    total_feeds = sum(d.feed_count for d in days)
    return FeedingStats(
        total_feeds=total_feeds,
        avg_feeds_per_day=total_feeds / length,
        total_bottle_oz=sum(d.bottle_oz for d in days),
        total_nursing_mins=sum(d.nursing_minutes for d in days),
        nursing_breakdown=NursingBreakdown(
            left_mins=sum(d.left_side_minutes for d in days),
            right_mins=sum(d.right_side_minutes for d in days),
        ),
        daily=tuple(
            FeedingDay(
                date=d.date,
                bottle_amount_oz=d.bottle_oz,
                nursing_duration_mins=d.nursing_minutes,
            )
            for d in days
        ),
    )


def _sleep_stats(days: tuple[DailyStat, ...], length: int) -> SleepStats:
    total = sum(d.sleep_minutes for d in days)
    return SleepStats(
        total_sleep_mins=total,
        avg_sleep_per_day_mins=total / length,
        longest_sleep_mins=max((d.longest_sleep_minutes for d in days), default=0.0),
        daily=tuple(SleepDay(date=d.date, total_sleep_mins=d.sleep_minutes) for d in days),
    )


def _pump_stats(days: tuple[DailyStat, ...], length: int) -> PumpStats:
    total = sum(d.pumped_oz for d in days)
    return PumpStats(
        total_pumped_oz=total,
        avg_pumped_per_day_oz=total / length,
        daily=tuple(PumpDay(date=d.date, total_amount_oz=d.pumped_oz) for d in days),
    )


def _diaper_stats(days: tuple[DailyStat, ...], length: int) -> DiaperStats:
    total = sum(d.diaper_changes for d in days)
    return DiaperStats(
        total_changes=total,
        avg_changes_per_day=total / length,
        daily=tuple(DiaperDay(date=d.date, pee=d.pee, poop=d.poop, both=d.both) for d in days),
    )


def aggregate(
    entries: Iterable[Entry],
    days: int,
    tz: Union[str, tzinfo] = "UTC",
    today: Optional[date] = None,
) -> StatsReport:
    """Aggregate validated entries over a 7, 30 or 90 day window.

    Args:
        entries: Validated, current-version entries.
        days: Window length.
        tz: Zone name (or tzinfo) the calendar days are local to.
        today: Last day of the window. Defaults to today in ``tz``.

    Returns:
        Summaries per kind plus one DailyStat per day, oldest first.

    Raises:
        ValueError: If the window length or timezone is invalid.
    """
    zone = resolve_timezone(tz)
    keys = [day.isoformat() for day in window_days(days, zone, today)]
    buckets = {key: _DayBucket(date=key) for key in keys}
    _bucket(entries, buckets, zone, sparse=False)
    daily = tuple(bucket.freeze() for bucket in buckets.values())

    return StatsReport(
        window_days=days,
        timezone=str(zone),
        feeding=_feeding_stats(daily, days),
        sleep=_sleep_stats(daily, days),
        pump=_pump_stats(daily, days),
        diaper=_diaper_stats(daily, days),
        days=daily,
    )


def format_minutes(mins: Optional[float]) -> str:
    """Render minutes as ``"Xh Ym"``. Negative or missing values read as zero."""
    if mins is None or math.isnan(mins) or mins < 0:
        return "0h 0m"
    hours = int(mins // 60)
    remaining = round(mins % 60)
    if remaining == 60:
        hours, remaining = hours + 1, 0
    return f"{hours}h {remaining}m"
