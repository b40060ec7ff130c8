"""
Tests for Fitbit activity normalization.

Covers duration priority, missing-field defaults and external ids.
"""

import pytest

from app.features.smartwatch.errors import MalformedResponseError
from app.features.smartwatch.fitbit import (
    PLACEHOLDER_COUNT,
    derive_duration_seconds,
    normalize_activity,
    normalize_activities,
    placeholder_workouts,
)


# =============================================================================
# Test Duration Derivation
# =============================================================================

class TestDeriveDurationSeconds:
    """Tests for derive_duration_seconds function."""

    def test_active_duration_wins_over_duration(self):
        """activeDuration has the highest priority."""
        assert derive_duration_seconds({"activeDuration": 600000, "duration": 999000}) == 600

    def test_duration_before_duration_in_millis(self):
        assert derive_duration_seconds({"duration": 120000, "durationInMillis": 5000}) == 120

    def test_duration_in_millis_before_original_duration(self):
        assert derive_duration_seconds({"durationInMillis": 90000, "originalDuration": 1000}) == 90

    def test_original_duration(self):
        assert derive_duration_seconds({"originalDuration": 45000}) == 45

    def test_active_minutes_is_last_resort(self):
        """activeMinutes is only used when no millisecond field exists."""
        assert derive_duration_seconds({"activeMinutes": 30}) == 1800
        assert derive_duration_seconds({"activeMinutes": 30, "originalDuration": 60000}) == 60

    def test_missing_duration_is_zero(self):
        """No duration field at all yields 0, not an error."""
        assert derive_duration_seconds({"distance": 5.0}) == 0

    def test_partial_seconds_truncated(self):
        assert derive_duration_seconds({"activeDuration": 1999}) == 1


# =============================================================================
# Test Activity Normalization
# =============================================================================

class TestNormalizeActivity:
    """Tests for normalize_activity function."""

    def test_full_item(self):
        item = {
            "logId": 123456789,
            "startTime": "2025-07-10T07:00:00.000+09:00",
            "activeDuration": 1800000,
            "distance": 5.004,
            "averageHeartRate": 150,
            "calories": 320,
            "activityName": "Run",
            "source": {"id": "charge6"},
        }
        record = normalize_activity(item, default_date="2025-07-01")

        assert record.external_id == "123456789"
        assert record.date == "2025-07-10"
        assert record.time == "07:00:00"
        assert record.duration_seconds == 1800
        assert record.distance_km == 5.0
        assert record.heart_rate_bpm == 150
        assert record.calories == 320
        assert record.activity_type == "Run"
        assert record.device_id == "charge6"
        assert record.synthetic_id is False
        assert record.placeholder is False

    def test_alternate_field_names(self):
        """heartRate, caloriesOut, name and activityId are fallbacks."""
        item = {
            "activityId": 90013,
            "startTime": "2025-07-11T18:30:00",
            "heartRate": 138,
            "caloriesOut": 240,
            "name": "Walk",
        }
        record = normalize_activity(item, default_date="2025-07-01")

        assert record.external_id == "90013"
        assert record.heart_rate_bpm == 138
        assert record.calories == 240
        assert record.activity_type == "Walk"

    def test_missing_numbers_default_to_zero(self):
        record = normalize_activity({"logId": 1, "startTime": "2025-07-10T07:00:00"}, "2025-07-01")

        assert record.distance_km == 0
        assert record.heart_rate_bpm == 0
        assert record.calories == 0
        assert record.duration_seconds == 0
        assert record.activity_type == "Unknown"
        assert record.device_id == "fitbit"

    def test_legacy_start_date_and_clock(self):
        """startDate plus a bare HH:MM clock."""
        item = {"logId": 2, "startDate": "2025-07-12", "startTime": "06:45"}
        record = normalize_activity(item, default_date="2025-07-01")

        assert record.date == "2025-07-12"
        assert record.time == "06:45:00"

    def test_default_date_when_no_start(self):
        record = normalize_activity({"logId": 3}, default_date="2025-07-01")
        assert record.date == "2025-07-01"
        assert record.time == "00:00:00"

    def test_synthetic_id_is_stable(self):
        """Without logId/activityId the id is a content hash, equal across retries."""
        item = {"startTime": "2025-07-10T07:00:00", "distance": 5.0, "averageHeartRate": 150}

        first = normalize_activity(item, "2025-07-01")
        second = normalize_activity(dict(item), "2025-07-01")

        assert first.synthetic_id is True
        assert first.external_id.startswith("synthetic-")
        assert first.external_id == second.external_id

    def test_synthetic_id_changes_with_content(self):
        base = {"startTime": "2025-07-10T07:00:00", "distance": 5.0}
        other = {"startTime": "2025-07-10T07:00:00", "distance": 5.5}

        assert normalize_activity(base, "2025-07-01").external_id != \
            normalize_activity(other, "2025-07-01").external_id

    def test_non_object_item_rejected(self):
        with pytest.raises(MalformedResponseError):
            normalize_activity(["not", "a", "dict"], "2025-07-01")

    def test_raw_payload_kept(self):
        item = {"logId": 4, "startTime": "2025-07-10T07:00:00", "extra": "x"}
        assert normalize_activity(item, "2025-07-01").raw_payload == item


# =============================================================================
# Test Placeholder Workouts
# =============================================================================

class TestPlaceholderWorkouts:
    """Tests for placeholder_workouts function."""

    def test_fixed_count_and_flagged(self):
        records = placeholder_workouts("2025-07-01")

        assert len(records) == PLACEHOLDER_COUNT
        assert all(record.placeholder for record in records)

    def test_dates_start_at_window(self):
        records = placeholder_workouts("2025-07-30")
        assert [r.date for r in records] == ["2025-07-30", "2025-07-31", "2025-08-01"]

    def test_ids_are_not_vendor_ids(self):
        records = placeholder_workouts("2025-07-01")
        assert [r.external_id for r in records] == ["placeholder-1", "placeholder-2", "placeholder-3"]


class TestMalformedActivities:
    """Mistyped Fitbit fields surface as MalformedResponseError."""

    def test_numeric_start_time(self):
        with pytest.raises(MalformedResponseError):
            normalize_activity({"logId": 1, "startTime": 1752130800}, "2025-07-01")

    def test_list_with_broken_item(self):
        items = [
            {"logId": 1, "startTime": "2025-07-10T07:00:00"},
            ["not", "an", "activity"],
        ]
        with pytest.raises(MalformedResponseError):
            normalize_activities(items, "2025-07-01")
