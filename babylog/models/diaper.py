"""Diaper entry model."""

from typing import Literal, Optional

from pydantic import Field

from babylog.models.base import InstantEntry

DiaperType = Literal["pee", "poop", "both"]

DIAPER_TYPES: tuple[str, ...] = ("pee", "poop", "both")


class Diaper(InstantEntry):
    """A diaper change."""

    type: Literal["diaper"] = Field(default="diaper", description="Entry discriminant")
    diaper_type: DiaperType = Field(..., description="What the diaper held")
    rash: Optional[bool] = Field(default=None, description="Rash observed")
    consistency: Optional[Literal["runny", "mushy", "soft", "hard", "solid"]] = Field(
        default=None, description="Stool consistency"
    )
    color: Optional[Literal["yellow", "brown", "green", "black", "red"]] = Field(
        default=None, description="Stool color"
    )
    volume: Optional[Literal["light", "medium", "heavy"]] = Field(
        default=None, description="Stool volume"
    )
