"""
Fitbit integration.

Components:
- FitbitOAuth: Authorization URL and code exchange
- FitbitClient: Activity log API client
- FitbitAdapter: VendorAdapter implementation
"""

from .adapter import FitbitAdapter
from .client import FitbitClient
from .normalize import (
    derive_duration_seconds,
    normalize_activity,
    normalize_activities,
    placeholder_workouts,
    PLACEHOLDER_COUNT,
)
from .oauth import FitbitOAuth

__all__ = [
    "FitbitAdapter",
    "FitbitClient",
    "FitbitOAuth",
    "derive_duration_seconds",
    "normalize_activity",
    "normalize_activities",
    "placeholder_workouts",
    "PLACEHOLDER_COUNT",
]
