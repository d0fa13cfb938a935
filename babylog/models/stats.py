"""Derived statistics models. Built fresh per aggregation, never persisted."""

from pydantic import BaseModel, Field


class DailyStat(BaseModel):
    """Per-kind aggregates for one local calendar day."""

    date: str = Field(..., description="Local calendar day (YYYY-MM-DD)")
    feed_count: int = Field(default=0, ge=0, description="Feeds started this day")
    nursing_minutes: float = Field(default=0.0, description="Completed nursing minutes")
    left_side_minutes: float = Field(default=0.0, description="Nursing minutes on the left")
    right_side_minutes: float = Field(default=0.0, description="Nursing minutes on the right")
    bottle_oz: float = Field(default=0.0, description="Bottle ounces")
    sleep_minutes: float = Field(default=0.0, description="Completed sleep minutes")
    longest_sleep_minutes: float = Field(default=0.0, description="Longest sleep this day")
    pumped_oz: float = Field(default=0.0, description="Pumped ounces")
    pee: int = Field(default=0, ge=0, description="Pee-only diapers")
    poop: int = Field(default=0, ge=0, description="Poop-only diapers")
    both: int = Field(default=0, ge=0, description="Mixed diapers")
    bath_count: int = Field(default=0, ge=0, description="Baths")

    model_config = {"frozen": True}

    @property
    def diaper_changes(self) -> int:
        return self.pee + self.poop + self.both


class NursingBreakdown(BaseModel):
    left_mins: float = 0.0
    right_mins: float = 0.0

    model_config = {"frozen": True}


class FeedingDay(BaseModel):
    date: str
    bottle_amount_oz: float
    nursing_duration_mins: float

    model_config = {"frozen": True}


class FeedingStats(BaseModel):
    """Feeding summary over the window."""

    total_feeds: int = Field(..., ge=0)
    avg_feeds_per_day: float
    total_bottle_oz: float
    total_nursing_mins: float
    nursing_breakdown: NursingBreakdown
    daily: tuple[FeedingDay, ...]

    model_config = {"frozen": True}


class SleepDay(BaseModel):
    date: str
    total_sleep_mins: float

    model_config = {"frozen": True}


class SleepStats(BaseModel):
    """Sleep summary over the window."""

    total_sleep_mins: float
    avg_sleep_per_day_mins: float
    longest_sleep_mins: float = Field(..., description="Longest completed sleep in the window")
    daily: tuple[SleepDay, ...]

    model_config = {"frozen": True}


class PumpDay(BaseModel):
    date: str
    total_amount_oz: float

    model_config = {"frozen": True}


class PumpStats(BaseModel):
    """Pumping summary over the window."""

    total_pumped_oz: float
    avg_pumped_per_day_oz: float
    daily: tuple[PumpDay, ...]

    model_config = {"frozen": True}


class DiaperDay(BaseModel):
    date: str
    pee: int
    poop: int
    both: int

    model_config = {"frozen": True}


class DiaperStats(BaseModel):
    """Diaper summary over the window."""

    total_changes: int = Field(..., ge=0)
    avg_changes_per_day: float
    daily: tuple[DiaperDay, ...]

    model_config = {"frozen": True}


class StatsReport(BaseModel):
    """Everything one aggregation call produces."""

    window_days: int = Field(..., description="Window length in days")
    timezone: str = Field(..., description="Zone the day keys are local to")
    feeding: FeedingStats
    sleep: SleepStats
    pump: PumpStats
    diaper: DiaperStats
    days: tuple[DailyStat, ...] = Field(..., description="One record per day, oldest first")

    model_config = {"frozen": True}
