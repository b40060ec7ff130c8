"""
Habit tracker module.

Usage:
    from app.features.tracker import WorkoutRepository, compute_statistics

Models:
- Goal: Daily workout targets
- Workout: Logged or device-synced workout
- HabitData: Per-day goal achievement

Repositories:
- GoalRepository, WorkoutRepository, HabitDataRepository
"""

from .models import Goal, Workout, HabitData
from .repository import (
    GoalRepository,
    WorkoutRepository,
    HabitDataRepository,
    WorkoutConflictError,
)
from .stats import compute_statistics

__all__ = [
    # Models
    "Goal",
    "Workout",
    "HabitData",
    # Repositories
    "GoalRepository",
    "WorkoutRepository",
    "HabitDataRepository",
    "WorkoutConflictError",
    # Stats
    "compute_statistics",
]
