"""Tagged union over every entry variant."""

from typing import Annotated, Union

from pydantic import Field, TypeAdapter

from babylog.models.bath import Bath
from babylog.models.diaper import Diaper
from babylog.models.feed import BottleFeed, Feed, NursingFeed
from babylog.models.pump import Pump
from babylog.models.sleep import Sleep

Entry = Annotated[Union[Feed, Sleep, Pump, Diaper, Bath], Field(discriminator="type")]

# Concrete classes an Entry can resolve to. Consumers that dispatch on
# variant are tested against this tuple.
ENTRY_VARIANTS = (NursingFeed, BottleFeed, Sleep, Pump, Diaper, Bath)

ENTRY_TYPES: tuple[str, ...] = ("feed", "sleep", "pump", "diaper", "bath")

entry_adapter: TypeAdapter = TypeAdapter(Entry)
