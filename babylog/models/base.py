"""Shared entry fields and timestamp coercion."""

from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, Field, model_validator
from pydantic.alias_generators import to_camel

# Current document shape. Migrations upgrade stored documents to this version.
SCHEMA_VERSION = 2

# Placeholder the store writes for server timestamps that have not resolved yet.
PENDING = "pending"


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def coerce_timestamp(value: Any) -> datetime:
    """Convert a date-like value into an aware UTC datetime.

    Accepts datetime objects, ISO-8601 strings, epoch numbers in
    milliseconds and the pending sentinel (``None`` or ``"pending"``),
    which resolves to the current time. Naive values are read as UTC.

    Raises:
        ValueError: If the value cannot be read as a point in time.
    """
    if value is None or value == PENDING:
        return utcnow()

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, bool):
        raise ValueError("boolean is not a timestamp")

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"epoch value out of range: {value!r}") from e

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise ValueError(f"not an ISO-8601 timestamp: {value!r}") from e
        return coerce_timestamp(parsed)

    raise ValueError(f"unsupported timestamp type: {type(value).__name__}")


Timestamp = Annotated[datetime, BeforeValidator(coerce_timestamp)]


class BaseEntry(BaseModel):
    """Fields every logged entry carries."""

    id: str = Field(..., min_length=1, description="Document ID")
    baby_id: str = Field(..., description="Owning child")
    family_id: str = Field(..., description="Owning family")
    created_by: str = Field(..., description="Author user ID")
    created_at: Timestamp = Field(default_factory=utcnow, description="Creation timestamp")
    updated_at: Timestamp = Field(default_factory=utcnow, description="Last update timestamp")
    note: Optional[str] = Field(default=None, description="Free-text note")
    schema_version: int = Field(default=SCHEMA_VERSION, description="Document schema version")
    started_at: Timestamp = Field(..., description="Start of the event")

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
        "strict": True,
    }

    @property
    def is_open(self) -> bool:
        """Whether the entry is a session still in progress."""
        return getattr(self, "ended_at", None) is None

    @property
    def duration_minutes(self) -> Optional[float]:
        """Completed duration in minutes, or None for an open session."""
        ended_at = getattr(self, "ended_at", None)
        if ended_at is None:
            return None
        return ((ended_at - self.started_at) // timedelta(milliseconds=1)) / 60000


class TimedEntry(BaseEntry):
    """An entry that may still be running (no end time yet)."""

    ended_at: Optional[Timestamp] = Field(default=None, description="End of the event")


class InstantEntry(BaseEntry):
    """An entry logged as a single moment: end time equals start time."""

    ended_at: Timestamp = Field(..., description="End of the event")

    @model_validator(mode="before")
    @classmethod
    def _fill_ended_at(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("endedAt") is not None or data.get("ended_at") is not None:
            return data

        key = "startedAt" if "startedAt" in data else "started_at"
        if key not in data:
            return data
        try:
            started = coerce_timestamp(data[key])
        except ValueError:
            # Leave it for field validation to report against startedAt.
            return data
        return {**data, key: started, "endedAt": started}
