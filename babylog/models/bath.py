"""Bath entry model."""

from typing import Literal

from pydantic import Field

from babylog.models.base import InstantEntry


class Bath(InstantEntry):
    """A bath."""

    type: Literal["bath"] = Field(default="bath", description="Entry discriminant")
    bath_type: Literal["sponge", "full"] = Field(..., description="Bath type")
