"""Flat, aligned series for chart rendering."""

from datetime import date

from pydantic import BaseModel, Field

from babylog.models import StatsReport


class ChartSeries(BaseModel):
    """Parallel arrays, oldest day first. Index i of every array is one day."""

    dates: tuple[str, ...] = Field(..., description="ISO day keys")
    labels: tuple[str, ...] = Field(..., description="Axis labels, e.g. 'Oct 26'")
    bottle_oz: tuple[float, ...]
    nursing_mins: tuple[float, ...]
    sleep_mins: tuple[float, ...]
    pumped_oz: tuple[float, ...]
    pee: tuple[int, ...]
    poop: tuple[int, ...]
    both: tuple[int, ...]
    left_mins: float = 0.0
    right_mins: float = 0.0

    model_config = {"frozen": True}

    def nursing_side_breakdown(self) -> list[tuple[str, float]]:
        """Left/right slices for a pie chart, leaving out empty sides."""
        slices = [("Left", self.left_mins), ("Right", self.right_mins)]
        return [s for s in slices if s[1] > 0]


def day_label(day_key: str) -> str:
    """'2025-10-26' -> 'Oct 26'."""
    day = date.fromisoformat(day_key)
    return f"{day.strftime('%b')} {day.day}"


def to_chart_series(report: StatsReport) -> ChartSeries:
    feeding = report.feeding.daily
    return ChartSeries(
        dates=tuple(d.date for d in feeding),
        labels=tuple(day_label(d.date) for d in feeding),
        bottle_oz=tuple(d.bottle_amount_oz for d in feeding),
        nursing_mins=tuple(d.nursing_duration_mins for d in feeding),
        sleep_mins=tuple(d.total_sleep_mins for d in report.sleep.daily),
        pumped_oz=tuple(d.total_amount_oz for d in report.pump.daily),
        pee=tuple(d.pee for d in report.diaper.daily),
        poop=tuple(d.poop for d in report.diaper.daily),
        both=tuple(d.both for d in report.diaper.daily),
        left_mins=report.feeding.nursing_breakdown.left_mins,
        right_mins=report.feeding.nursing_breakdown.right_mins,
    )
