"""
Canonical, vendor-independent sync data types.

Types:
- DateRange: Inclusive sync window (ISO dates)
- WorkoutRecord: One normalized vendor activity
- AuthRequest / AuthResult: Input and outcome of adapter.authenticate()
- SyncResult: Summary returned by the sync coordinator
"""

import hashlib
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

SYNTHETIC_ID_PREFIX = "synthetic-"


@dataclass(frozen=True)
class DateRange:
    """Inclusive date window, both ends as YYYY-MM-DD."""

    start: str
    end: str

    def __post_init__(self):
        start = date.fromisoformat(self.start)
        end = date.fromisoformat(self.end)
        if start > end:
            raise ValueError(f"Date range start {self.start} is after end {self.end}")


def synthetic_external_id(
    date: str,
    time: str,
    distance_km: float,
    heart_rate_bpm: int,
    duration_seconds: int,
) -> str:
    """
    Stable id for records the vendor did not identify.

    Same content always hashes to the same id, so a retried sync
    deduplicates instead of inserting twice.
    """
    key = f"{date}|{time}|{distance_km:.2f}|{heart_rate_bpm}|{duration_seconds}"
    digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:16]
    return f"{SYNTHETIC_ID_PREFIX}{digest}"


@dataclass(frozen=True)
class WorkoutRecord:
    """
    Normalized workout produced by a vendor adapter.

    Immutable once built. Distance is rounded to 2 decimals and negative
    numbers are clamped to 0 at construction.
    """

    external_id: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM:SS
    duration_seconds: int
    distance_km: float
    heart_rate_bpm: int
    calories: int
    activity_type: str
    device_id: str
    raw_payload: Any = field(default=None, compare=False, repr=False)
    placeholder: bool = False
    synthetic_id: bool = False

    def __post_init__(self):
        object.__setattr__(self, "duration_seconds", max(0, int(self.duration_seconds)))
        object.__setattr__(self, "distance_km", round(max(0.0, float(self.distance_km)), 2))
        object.__setattr__(self, "heart_rate_bpm", max(0, int(round(self.heart_rate_bpm))))
        object.__setattr__(self, "calories", max(0, int(round(self.calories))))

    @property
    def composite_key(self) -> tuple:
        """Key matched against persisted workouts (calories excluded)."""
        return (self.date, self.time, self.distance_km, self.heart_rate_bpm)

    def to_workout_fields(self, source: str) -> dict:
        """Column values for the persisted Workout row."""
        return {
            "date": self.date,
            "time": self.time,
            "distance": self.distance_km,
            "heart_rate": self.heart_rate_bpm,
            "duration": self.duration_seconds,
            "calories": self.calories,
            "source": source,
            "external_id": self.external_id,
        }

    def to_dict(self) -> dict:
        """JSON representation for API responses."""
        return {
            "externalId": self.external_id,
            "date": self.date,
            "time": self.time,
            "duration": self.duration_seconds,
            "distance": self.distance_km,
            "heartRate": self.heart_rate_bpm,
            "calories": self.calories,
            "activityType": self.activity_type,
            "deviceId": self.device_id,
            "placeholder": self.placeholder,
            "syntheticId": self.synthetic_id,
            "rawPayload": self.raw_payload,
        }


@dataclass(frozen=True)
class AuthRequest:
    """
    Credentials passed to adapter.authenticate().

    Without a code the adapter returns an authorization URL; with one it
    exchanges it for an access token. `extra` carries vendor-specific
    values (e.g. an already issued token for passthrough vendors).
    """

    redirect_uri: Optional[str] = None
    code: Optional[str] = None
    extra: dict = field(default_factory=dict)


@dataclass(frozen=True)
class AuthResult:
    """Either an authorization URL to visit or an access token."""

    authorization_url: Optional[str] = None
    access_token: Optional[str] = None

    @property
    def is_redirect(self) -> bool:
        return self.authorization_url is not None


@dataclass
class SyncResult:
    """Outcome of one sync call."""

    brand: str
    records: list[WorkoutRecord]
    saved_count: int = 0
    duplicate_count: int = 0
    failed_count: int = 0

    @property
    def requested_count(self) -> int:
        return len(self.records)

    @property
    def placeholder(self) -> bool:
        """True when the adapter fell back to sample data."""
        return any(record.placeholder for record in self.records)
