"""Sleep entry model."""

from typing import Literal, Optional

from pydantic import Field

from babylog.models.base import TimedEntry


class Sleep(TimedEntry):
    """A nap or night sleep. Open while ``ended_at`` is None."""

    type: Literal["sleep"] = Field(default="sleep", description="Entry discriminant")
    category: Literal["nap", "night"] = Field(..., description="Sleep category")
    quality: Optional[Literal["good", "ok", "fussy"]] = Field(
        default=None, description="Caregiver's rating"
    )
