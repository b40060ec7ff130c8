"""
Tracker schemas.

Pydantic models for goals, workouts, habit data and statistics.
JSON uses camelCase (heartRate, distanceAchieved, ...) to match the web client.
"""

from datetime import datetime, date as date_type
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _check_iso_date(v: str) -> str:
    date_type.fromisoformat(v)
    return v


# YYYY-MM-DD string, validated as a real calendar date
IsoDate = Annotated[str, AfterValidator(_check_iso_date)]


# === Goals ===

class GoalUpdate(CamelModel):
    """Set the current goal."""

    distance: float = Field(default=5.0, ge=0)
    heart_rate: int = Field(default=150, ge=0)
    duration: int = Field(default=30, ge=0, description="Minutes")


class GoalResponse(CamelModel):
    id: int
    distance: float
    heart_rate: int
    duration: int
    created_at: Optional[datetime] = None


# === Workouts ===

class WorkoutCreate(CamelModel):
    """Manually logged workout."""

    date: IsoDate
    time: str = Field(..., pattern=r"^\d{2}:\d{2}:\d{2}$", description="HH:MM:SS")
    distance: float = Field(..., ge=0)
    heart_rate: int = Field(..., ge=0)
    duration: int = Field(..., ge=0, description="Seconds")
    calories: int = Field(..., ge=0)


class WorkoutResponse(CamelModel):
    id: int
    date: str
    time: str
    distance: float
    heart_rate: int
    duration: int
    calories: int
    source: Optional[str] = None
    created_at: Optional[datetime] = None


# === Habit data ===

class HabitDataUpsert(CamelModel):
    date: IsoDate
    distance_achieved: bool = False
    heart_rate_achieved: bool = False
    duration_achieved: bool = False
    workout_id: Optional[int] = None


class HabitDataResponse(CamelModel):
    id: int
    date: str
    distance_achieved: bool
    heart_rate_achieved: bool
    duration_achieved: bool
    workout_id: Optional[int] = None


# === Statistics ===

class StatisticsResponse(CamelModel):
    streak: int
    total_workout_days: int
    average_achievement_rate: int
