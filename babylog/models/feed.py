"""Feed entry models."""

from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from babylog.models.base import InstantEntry, TimedEntry


class NursingFeed(TimedEntry):
    """A nursing session on one side. Open while ``ended_at`` is None."""

    type: Literal["feed"] = Field(default="feed", description="Entry discriminant")
    kind: Literal["nursing"] = Field(default="nursing", description="Feed discriminant")
    side: Optional[Literal["left", "right"]] = Field(default=None, description="Breast side")
    session_id: Optional[str] = Field(
        default=None, description="Groups left/right sides of one feeding"
    )


class BottleFeed(InstantEntry):
    """A bottle feed, logged instantaneously."""

    type: Literal["feed"] = Field(default="feed", description="Entry discriminant")
    kind: Literal["bottle"] = Field(default="bottle", description="Feed discriminant")
    amount_oz: Optional[float] = Field(default=None, gt=0, description="Amount in ounces")


Feed = Annotated[Union[NursingFeed, BottleFeed], Field(discriminator="kind")]
