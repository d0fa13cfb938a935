"""Tests for entry models and timestamp coercion.

**Feature: babylog**
"""

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from babylog.models import (
    PENDING,
    Bath,
    BottleFeed,
    Diaper,
    NursingFeed,
    Pump,
    Sleep,
    coerce_timestamp,
    entry_adapter,
)
from babylog.models import base

T0 = datetime(2025, 10, 26, 8, 0, tzinfo=timezone.utc)


def _doc(entry_id: str, **fields) -> dict:
    doc = {
        "id": entry_id,
        "babyId": "b1",
        "familyId": "f1",
        "createdBy": "u1",
        "createdAt": "2025-10-26T08:00:00Z",
        "updatedAt": "2025-10-26T08:00:00Z",
        "schemaVersion": 2,
    }
    doc.update(fields)
    return doc


class TestTimestampCoercion:
    """
    **Feature: babylog, Property 1: Date-like values become aware UTC datetimes**

    *For any* accepted date-like input, the coerced value is a timezone-aware
    datetime in UTC.
    """

    def test_iso_string_with_z_suffix(self):
        assert coerce_timestamp("2025-10-26T08:00:00Z") == T0

    def test_iso_string_with_offset(self):
        result = coerce_timestamp("2025-10-26T04:00:00-04:00")
        assert result == T0
        assert result.tzinfo == timezone.utc

    def test_naive_datetime_is_read_as_utc(self):
        assert coerce_timestamp(datetime(2025, 10, 26, 8, 0)) == T0

    def test_aware_datetime_is_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        result = coerce_timestamp(datetime(2025, 10, 26, 10, 0, tzinfo=plus_two))
        assert result == T0
        assert result.tzinfo == timezone.utc

    def test_epoch_milliseconds(self):
        assert coerce_timestamp(int(T0.timestamp() * 1000)) == T0

    def test_pending_sentinel_is_now(self, monkeypatch):
        monkeypatch.setattr(base, "utcnow", lambda: T0)
        assert coerce_timestamp(PENDING) == T0
        assert coerce_timestamp(None) == T0

    def test_missing_audit_timestamps_are_now(self):
        doc = _doc("s1", type="sleep", category="nap", startedAt="2025-10-26T08:00:00Z")
        del doc["createdAt"]
        del doc["updatedAt"]

        before = datetime.now(timezone.utc)
        entry = entry_adapter.validate_python(doc)
        after = datetime.now(timezone.utc)

        assert before <= entry.created_at <= after
        assert before <= entry.updated_at <= after

    def test_missing_start_is_still_required(self):
        doc = _doc("s1", type="sleep", category="nap")
        with pytest.raises(ValidationError):
            entry_adapter.validate_python(doc)

    def test_boolean_is_rejected(self):
        with pytest.raises(ValueError):
            coerce_timestamp(True)

    def test_garbage_string_is_rejected(self):
        with pytest.raises(ValueError):
            coerce_timestamp("yesterday-ish")

    def test_unsupported_type_is_rejected(self):
        with pytest.raises(ValueError):
            coerce_timestamp(["2025-10-26"])

    @given(ms=st.integers(min_value=0, max_value=4_102_444_800_000))
    @settings(max_examples=100)
    def test_epoch_values_keep_millisecond_precision(self, ms: int):
        result = coerce_timestamp(ms)
        assert result.tzinfo is not None
        assert round(result.timestamp() * 1000) == ms


class TestEntryUnion:
    """
    **Feature: babylog, Property 2: The type tag selects exactly one variant**
    """

    @pytest.mark.parametrize(
        "fields,expected",
        [
            ({"type": "feed", "kind": "nursing", "side": "left", "startedAt": "2025-10-26T08:00:00Z"}, NursingFeed),
            ({"type": "feed", "kind": "bottle", "amountOz": 4, "startedAt": "2025-10-26T08:00:00Z"}, BottleFeed),
            ({"type": "sleep", "category": "nap", "startedAt": "2025-10-26T08:00:00Z"}, Sleep),
            ({"type": "pump", "totalAmountOz": 3.5, "startedAt": "2025-10-26T08:00:00Z"}, Pump),
            ({"type": "diaper", "diaperType": "poop", "startedAt": "2025-10-26T08:00:00Z"}, Diaper),
            ({"type": "bath", "bathType": "sponge", "startedAt": "2025-10-26T08:00:00Z"}, Bath),
        ],
    )
    def test_variant_selected_by_tag(self, fields, expected):
        entry = entry_adapter.validate_python(_doc("e1", **fields))
        assert type(entry) is expected

    def test_unknown_type_is_rejected(self):
        with pytest.raises(ValidationError):
            entry_adapter.validate_python(_doc("e1", type="nap", startedAt="2025-10-26T08:00:00Z"))

    def test_unknown_feed_kind_is_rejected(self):
        with pytest.raises(ValidationError):
            entry_adapter.validate_python(
                _doc("e1", type="feed", kind="solids", startedAt="2025-10-26T08:00:00Z")
            )

    def test_entries_are_frozen(self):
        entry = entry_adapter.validate_python(
            _doc("e1", type="sleep", category="night", startedAt="2025-10-26T08:00:00Z")
        )
        with pytest.raises(ValidationError):
            entry.category = "nap"

    def test_fields_populate_by_python_name(self):
        feed = NursingFeed(
            id="n1",
            baby_id="b1",
            family_id="f1",
            created_by="u1",
            created_at=T0,
            updated_at=T0,
            started_at=T0,
            side="right",
        )
        assert feed.type == "feed"
        assert feed.kind == "nursing"
        assert feed.model_dump(by_alias=True)["babyId"] == "b1"


class TestInstantEntries:
    """
    **Feature: babylog, Property 3: Instantaneous entries end when they start**
    """

    @pytest.mark.parametrize(
        "fields",
        [
            {"type": "feed", "kind": "bottle", "amountOz": 4},
            {"type": "diaper", "diaperType": "pee"},
            {"type": "bath", "bathType": "full"},
        ],
    )
    def test_missing_end_is_filled_from_start(self, fields):
        entry = entry_adapter.validate_python(_doc("e1", startedAt="2025-10-26T08:00:00Z", **fields))
        assert entry.ended_at == entry.started_at == T0
        assert entry.is_open is False
        assert entry.duration_minutes == 0

    def test_pending_start_gives_equal_end(self):
        entry = entry_adapter.validate_python(
            _doc("e1", type="bath", bathType="full", startedAt=PENDING)
        )
        assert entry.ended_at == entry.started_at

    def test_bad_start_is_reported_against_start(self):
        with pytest.raises(ValidationError) as exc_info:
            entry_adapter.validate_python(
                _doc("e1", type="diaper", diaperType="pee", startedAt="not a date")
            )
        assert "startedAt" in str(exc_info.value)


class TestTimedEntries:
    """
    **Feature: babylog, Property 4: Missing end time means an open session**
    """

    def test_open_nursing_session(self):
        feed = entry_adapter.validate_python(
            _doc("n1", type="feed", kind="nursing", side="left", startedAt="2025-10-26T08:00:00Z")
        )
        assert feed.is_open
        assert feed.duration_minutes is None

    def test_completed_sleep_duration(self):
        sleep = entry_adapter.validate_python(
            _doc(
                "s1",
                type="sleep",
                category="nap",
                startedAt="2025-10-26T09:00:00Z",
                endedAt="2025-10-26T10:30:00Z",
            )
        )
        assert not sleep.is_open
        assert sleep.duration_minutes == 90

    def test_duration_uses_millisecond_resolution(self):
        sleep = Sleep(
            id="s1",
            baby_id="b1",
            family_id="f1",
            created_by="u1",
            created_at=T0,
            updated_at=T0,
            category="nap",
            started_at=T0,
            ended_at=T0 + timedelta(seconds=90, microseconds=999),
        )
        assert sleep.duration_minutes == 1.5


class TestPumpAmounts:
    """
    **Feature: babylog, Property 5: Recorded pump totals are trusted verbatim**
    """

    def _pump(self, **amounts) -> Pump:
        return Pump(
            id="p1",
            baby_id="b1",
            family_id="f1",
            created_by="u1",
            created_at=T0,
            updated_at=T0,
            started_at=T0,
            **amounts,
        )

    def test_total_used_even_when_inconsistent(self):
        assert self._pump(left_amount_oz=1, right_amount_oz=1, total_amount_oz=5).pumped_oz == 5

    def test_left_plus_right_when_total_missing(self):
        assert self._pump(left_amount_oz=1.5, right_amount_oz=2).pumped_oz == 3.5

    def test_no_amounts_is_zero(self):
        assert self._pump().pumped_oz == 0.0

    def test_negative_amount_is_rejected(self):
        with pytest.raises(ValidationError):
            self._pump(left_amount_oz=-1)

    @given(
        left=st.floats(min_value=0, max_value=20, allow_nan=False),
        right=st.floats(min_value=0, max_value=20, allow_nan=False),
    )
    @settings(max_examples=50)
    def test_fallback_never_nan(self, left: float, right: float):
        assert self._pump(left_amount_oz=left, right_amount_oz=right).pumped_oz == left + right
