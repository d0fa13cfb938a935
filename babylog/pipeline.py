"""Migrate, validate and aggregate a snapshot of raw entry documents.

Each live update from the store delivers the whole collection again, and
the pipeline recomputes from scratch. Calls share no state, so overlapping
updates can each run to completion; the pipeline keeps whichever finished
last.
"""

import logging
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel

from babylog.migrations import MigrationEngine, default_engine
from babylog.models import StatsReport
from babylog.stats import aggregate
from babylog.validator import EntryValidator, Rejection, ValidationResult

logger = logging.getLogger(__name__)


def process_snapshot(
    docs: Iterable[Mapping[str, Any]],
    engine: Optional[MigrationEngine] = None,
    validator: Optional[EntryValidator] = None,
) -> ValidationResult:
    """Upgrade every document and split the snapshot into entries and rejections.

    Anything that is not a mapping skips migration and is rejected by the
    validator.
    """
    engine = engine or default_engine()
    validator = validator or EntryValidator(engine.current_version)
    return validator.validate_many(engine.migrate_all(list(docs)))


class SnapshotStats(BaseModel):
    """Stats for one snapshot plus the documents left out of them."""

    report: StatsReport
    rejections: tuple[Rejection, ...]

    model_config = {"frozen": True}


class StatsPipeline:
    """Recomputes stats for each new snapshot of a child's entries."""

    def __init__(
        self,
        days: int = 7,
        tz: str = "UTC",
        engine: Optional[MigrationEngine] = None,
        validator: Optional[EntryValidator] = None,
    ):
        self.days = days
        self.tz = tz
        self.engine = engine or default_engine()
        self.validator = validator or EntryValidator(self.engine.current_version)
        self.latest: Optional[SnapshotStats] = None

    def update(
        self, docs: Iterable[Mapping[str, Any]], today: Optional[date] = None
    ) -> SnapshotStats:
        """Run the full pipeline over a snapshot and remember the result."""
        result = process_snapshot(docs, self.engine, self.validator)
        if result.rejections:
            logger.info(
                "Snapshot: %d entries accepted, %d rejected",
                len(result.entries), len(result.rejections),
            )
        stats = SnapshotStats(
            report=aggregate(result.entries, self.days, self.tz, today),
            rejections=result.rejections,
        )
        self.latest = stats
        return stats
