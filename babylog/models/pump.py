"""Pump entry model."""

from typing import Literal, Optional

from pydantic import Field

from babylog.models.base import TimedEntry


class Pump(TimedEntry):
    """A pumping session.

    ``total_amount_oz`` is stored as recorded. Producers keep it equal to
    left + right, but historical documents may disagree and are not corrected.
    """

    type: Literal["pump"] = Field(default="pump", description="Entry discriminant")
    kind: Literal["pump"] = Field(default="pump", description="Legacy kind tag")
    left_amount_oz: Optional[float] = Field(default=None, ge=0, description="Left side ounces")
    right_amount_oz: Optional[float] = Field(default=None, ge=0, description="Right side ounces")
    total_amount_oz: Optional[float] = Field(default=None, ge=0, description="Total ounces")

    @property
    def pumped_oz(self) -> float:
        """Recorded total, or left + right when no total was stored."""
        if self.total_amount_oz is not None:
            return self.total_amount_oz
        return (self.left_amount_oz or 0.0) + (self.right_amount_oz or 0.0)
