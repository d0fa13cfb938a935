"""Tests for the snapshot pipeline.

**Feature: babylog**
"""

from datetime import date

from babylog.migrations import MigrationEngine
from babylog.migrations.v2 import upgrade
from babylog.models import BottleFeed, Diaper, NursingFeed, Sleep
from babylog.pipeline import SnapshotStats, StatsPipeline, process_snapshot
from babylog.validator import EntryValidator

TODAY = date(2025, 10, 27)

BASE = {
    "babyId": "b1",
    "familyId": "f1",
    "createdBy": "u1",
    "createdAt": "2025-10-26T08:00:00Z",
    "updatedAt": "2025-10-26T08:00:00Z",
}

# Documents as an older client wrote them: no type tag, no schemaVersion
LEGACY_DOCS = [
    {**BASE, "id": "n1", "kind": "nursing", "side": "left",
     "startedAt": "2025-10-26T08:00:00Z", "endedAt": "2025-10-26T08:15:00Z"},
    {**BASE, "id": "b1", "kind": "bottle", "amountOz": 4, "startedAt": "2025-10-26T11:00:00Z"},
    {**BASE, "id": "s1", "category": "nap",
     "startedAt": "2025-10-26T09:00:00Z", "endedAt": "2025-10-26T10:30:00Z"},
    {**BASE, "id": "d1", "type": "poop", "startedAt": "2025-10-26T12:00:00Z"},
]


class TestProcessSnapshot:
    def test_legacy_documents_are_accepted(self):
        result = process_snapshot(LEGACY_DOCS)

        assert result.rejections == ()
        assert [type(e) for e in result.entries] == [NursingFeed, BottleFeed, Sleep, Diaper]
        assert result.entries[0].session_id
        assert result.entries[3].diaper_type == "poop"

    def test_mixed_versions(self):
        current = {**BASE, "id": "x1", "schemaVersion": 2, "type": "bath", "bathType": "full",
                   "startedAt": "2025-10-26T18:00:00Z"}
        result = process_snapshot(LEGACY_DOCS + [current])
        assert len(result.entries) == 5

    def test_gap_in_injected_chain_rejects_documents(self):
        engine = MigrationEngine({2: upgrade}, current_version=3)
        result = process_snapshot(LEGACY_DOCS, engine=engine)

        assert result.entries == ()
        assert {r.doc_id for r in result.rejections} == {"n1", "b1", "s1", "d1"}

    def test_explicit_validator_is_used(self):
        result = process_snapshot(LEGACY_DOCS, validator=EntryValidator(schema_version=9))
        assert len(result.rejections) == len(LEGACY_DOCS)


class TestStatsPipeline:
    """
    **Feature: babylog, Property 18: Each snapshot is recomputed from scratch**
    """

    def test_update_produces_report(self):
        pipeline = StatsPipeline(days=7, tz="UTC")

        stats = pipeline.update(LEGACY_DOCS, today=TODAY)

        assert isinstance(stats, SnapshotStats)
        assert stats.report.feeding.total_nursing_mins == 15
        assert stats.report.feeding.total_bottle_oz == 4
        assert stats.report.sleep.longest_sleep_mins == 90
        assert stats.report.diaper.total_changes == 1
        assert pipeline.latest is stats

    def test_latest_reflects_last_snapshot_only(self):
        pipeline = StatsPipeline(days=7)
        pipeline.update(LEGACY_DOCS, today=TODAY)
        second = pipeline.update(LEGACY_DOCS[:1], today=TODAY)

        assert pipeline.latest is second
        assert pipeline.latest.report.feeding.total_feeds == 1
        assert pipeline.latest.report.diaper.total_changes == 0

    def test_rejections_travel_with_report(self):
        pipeline = StatsPipeline(days=30, tz="America/Chicago")
        stats = pipeline.update(LEGACY_DOCS + [{"id": "junk"}], today=TODAY)

        assert [r.doc_id for r in stats.rejections] == ["junk"]
        assert len(stats.report.days) == 30

    def test_input_documents_untouched(self):
        docs = [dict(d) for d in LEGACY_DOCS]
        StatsPipeline().update(docs, today=TODAY)
        assert docs == LEGACY_DOCS
