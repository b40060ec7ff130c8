"""
Achievement statistics.

Pure functions over habit data rows; no database access.
"""

from datetime import date, timedelta
from typing import Iterable, Optional, Protocol

# How far back the streak is counted
MAX_STREAK_DAYS = 365

GOALS_PER_DAY = 3


class DailyAchievement(Protocol):
    date: str
    distance_achieved: Optional[bool]
    heart_rate_achieved: Optional[bool]
    duration_achieved: Optional[bool]


def _achieved_count(day: DailyAchievement) -> int:
    return sum(
        1 for flag in (day.distance_achieved, day.heart_rate_achieved, day.duration_achieved)
        if flag
    )


def calculate_streak(days: Iterable[DailyAchievement], today: date) -> int:
    """
    Count consecutive days, ending today, with at least one goal achieved.

    A day with no habit data or with no goal achieved ends the streak.
    """
    by_date = {day.date: day for day in days}
    streak = 0
    for offset in range(MAX_STREAK_DAYS):
        day = by_date.get((today - timedelta(days=offset)).isoformat())
        if day is None or _achieved_count(day) == 0:
            break
        streak += 1
    return streak


def average_achievement_rate(days: list[DailyAchievement]) -> int:
    """Mean share of goals achieved per day, as a rounded percentage."""
    if not days:
        return 0
    total = sum(_achieved_count(day) / GOALS_PER_DAY for day in days)
    return round(total / len(days) * 100)


def compute_statistics(days: list[DailyAchievement], today: Optional[date] = None) -> dict:
    today = today or date.today()
    return {
        "streak": calculate_streak(days, today),
        "total_workout_days": len(days),
        "average_achievement_rate": average_achievement_rate(days),
    }
