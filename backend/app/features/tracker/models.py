"""
Tracker database models.

Models:
- Goal: Daily workout targets (distance, heart rate, duration)
- Workout: A logged or device-synced workout
- HabitData: Per-day goal achievement flags
"""

from datetime import datetime

from sqlalchemy import (
    Column, String, DateTime, Integer, Float, Boolean, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.models.base import Base


class Goal(Base):
    """
    Workout goal.

    The most recently created goal is the current one; older rows are
    kept as history.
    """

    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    distance = Column(Float, nullable=False, default=5.0)  # km
    heart_rate = Column(Integer, nullable=False, default=150)  # bpm
    duration = Column(Integer, nullable=False, default=30)  # minutes
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Goal {self.distance}km {self.heart_rate}bpm {self.duration}min>"


class Workout(Base):
    """
    Workout record.

    Manual entries have no external_id. Device-synced rows carry
    the vendor brand and the vendor activity id; the pair is unique so a
    concurrent sync of the same activity fails on insert instead of
    duplicating it.
    """

    __tablename__ = "workouts"
    __table_args__ = (
        UniqueConstraint("source", "external_id", name="uq_workouts_source_external_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    time = Column(String(8), nullable=False)  # HH:MM:SS
    distance = Column(Float, nullable=False)  # km
    heart_rate = Column(Integer, nullable=False)  # bpm
    duration = Column(Integer, nullable=False)  # seconds
    calories = Column(Integer, nullable=False)

    # Device sync metadata
    source = Column(String(20), nullable=True)
    external_id = Column(String(64), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    habit_data = relationship("HabitData", back_populates="workout")

    def __repr__(self):
        return f"<Workout {self.date} {self.time} {self.distance}km>"


class HabitData(Base):
    """Which goals were achieved on a given day."""

    __tablename__ = "habit_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(String(10), unique=True, nullable=False)  # YYYY-MM-DD
    distance_achieved = Column(Boolean, default=False)
    heart_rate_achieved = Column(Boolean, default=False)
    duration_achieved = Column(Boolean, default=False)
    workout_id = Column(Integer, ForeignKey("workouts.id"), nullable=True)

    workout = relationship("Workout", back_populates="habit_data")

    @property
    def achieved_count(self) -> int:
        """Number of goals achieved on this day (0-3)."""
        return sum(
            1 for flag in (
                self.distance_achieved,
                self.heart_rate_achieved,
                self.duration_achieved,
            )
            if flag
        )

    def __repr__(self):
        return f"<HabitData {self.date} achieved={self.achieved_count}/3>"
