"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy.

Note: Feature models are imported lazily to avoid circular imports.
Use direct imports from features/ modules when possible.
"""

from app.models.base import Base


def _get_tracker_models():
    """Lazy import of tracker models."""
    from app.features.tracker.models import Goal, Workout, HabitData
    return {"Goal": Goal, "Workout": Workout, "HabitData": HabitData}


def __getattr__(name):
    if name in ("Goal", "Workout", "HabitData"):
        return _get_tracker_models()[name]

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Base",
    "Goal",
    "Workout",
    "HabitData",
]
