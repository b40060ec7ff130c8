"""
Fitbit activity normalization.

Converts activity-log items into WorkoutRecord values. Fitbit payloads
vary by device and logging method, so every field has a fallback chain
and a default.
"""

import logging
from datetime import date, timedelta
from typing import Any, Optional

from ..adapters.base import external_id_for, normalize_all, split_timestamp
from ..errors import MalformedResponseError
from ..models import WorkoutRecord

logger = logging.getLogger(__name__)

DEVICE_ID = "fitbit"

# Millisecond fields, highest priority first; activeMinutes is the last resort
MILLISECOND_DURATION_FIELDS = ("activeDuration", "duration", "durationInMillis", "originalDuration")

PLACEHOLDER_COUNT = 3
_PLACEHOLDER_SAMPLES = (
    # time, distance km, heart rate, duration s, calories, activity
    ("07:00:00", 5.0, 150, 1800, 320, "Run"),
    ("18:30:00", 3.5, 138, 1500, 240, "Walk"),
    ("06:45:00", 6.2, 158, 2100, 410, "Run"),
)


def _number(value: Any, default: float = 0) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric Fitbit value {value!r}")
        return default


def _first_present(item: dict, *keys: str) -> Any:
    for key in keys:
        if item.get(key) is not None:
            return item[key]
    return None


def derive_duration_seconds(item: dict) -> int:
    """
    Duration in seconds from the highest-priority field present.

    activeDuration > duration > durationInMillis > originalDuration
    (all milliseconds) > activeMinutes. Returns 0 when none is present.
    """
    for key in MILLISECOND_DURATION_FIELDS:
        if item.get(key) is not None:
            return int(_number(item[key]) // 1000)
    if item.get("activeMinutes") is not None:
        return int(_number(item["activeMinutes"]) * 60)
    return 0


def _start_date_time(item: dict, default_date: str) -> tuple[str, str]:
    start_time = _first_present(item, "startTime", "originalStartTime")
    if start_time is not None and not isinstance(start_time, str):
        raise MalformedResponseError(f"Fitbit startTime is not a string: {start_time!r}")
    if start_time and "T" in start_time:
        return split_timestamp(start_time)

    # Older payloads: startDate plus a bare HH:MM clock
    day = item.get("startDate") or default_date
    clock = start_time or "00:00:00"
    if len(clock) == 5:
        clock = f"{clock}:00"
    return day, clock[:8]


def normalize_activity(item: dict, default_date: str) -> WorkoutRecord:
    """
    Build a WorkoutRecord from one Fitbit activity-log item.

    Args:
        item: Raw activity dict
        default_date: Date used when the item carries no start date

    Raises:
        MalformedResponseError: Item is not an object or has a broken timestamp
    """
    if not isinstance(item, dict):
        raise MalformedResponseError(f"Fitbit activity is not an object: {item!r}")

    day, clock = _start_date_time(item, default_date)
    duration = derive_duration_seconds(item)
    distance = _number(item.get("distance"))
    heart_rate = _number(_first_present(item, "averageHeartRate", "heartRate"))
    calories = _number(_first_present(item, "calories", "caloriesOut"))
    name = _first_present(item, "activityName", "name") or "Unknown"
    device_id = str((item.get("source") or {}).get("id") or DEVICE_ID)

    external_id, synthetic = external_id_for(
        _first_present(item, "logId", "activityId"), day, clock, distance, heart_rate, duration
    )

    return WorkoutRecord(
        external_id=external_id,
        date=day,
        time=clock,
        duration_seconds=duration,
        distance_km=distance,
        heart_rate_bpm=heart_rate,
        calories=calories,
        activity_type=str(name),
        device_id=device_id,
        raw_payload=item,
        synthetic_id=synthetic,
    )


def normalize_activities(items: list, default_date: str) -> list[WorkoutRecord]:
    return normalize_all(
        items,
        lambda item: normalize_activity(item, default_date),
        "Fitbit activity list"
    )


def placeholder_workouts(start_date: str, device_id: Optional[str] = None) -> list[WorkoutRecord]:
    """
    Fixed sample records returned when Fitbit rejects the token.

    Every record is flagged placeholder=True and must never be stored as
    real data. Dates start at the sync window start.
    """
    first_day = date.fromisoformat(start_date)
    records = []
    for index, sample in enumerate(_PLACEHOLDER_SAMPLES[:PLACEHOLDER_COUNT]):
        clock, distance, heart_rate, duration, calories, activity = sample
        records.append(WorkoutRecord(
            external_id=f"placeholder-{index + 1}",
            date=(first_day + timedelta(days=index)).isoformat(),
            time=clock,
            duration_seconds=duration,
            distance_km=distance,
            heart_rate_bpm=heart_rate,
            calories=calories,
            activity_type=activity,
            device_id=device_id or f"{DEVICE_ID}-placeholder",
            raw_payload={"placeholder": True},
            placeholder=True,
        ))
    return records
