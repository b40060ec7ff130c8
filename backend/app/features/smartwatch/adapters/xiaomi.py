"""
Xiaomi Mi Fitness adapter.

Xiaomi offers no public API; Mi Fitness syncs into Google Fit, so this
adapter reads Google Fit sessions and keeps those recorded by Xiaomi
devices.
"""

from typing import Optional

from ..models import AuthRequest, AuthResult, DateRange, WorkoutRecord
from .google_fit import GoogleFitAdapter


class XiaomiMiFitnessAdapter:
    """Xiaomi data through Google Fit."""

    brand = "Xiaomi"

    def __init__(self, google_fit: Optional[GoogleFitAdapter] = None):
        self.google_fit = google_fit or GoogleFitAdapter()

    def is_available(self) -> bool:
        # No direct API; only reachable through a Google Fit token
        return False

    async def authenticate(self, credentials: AuthRequest) -> AuthResult:
        return await self.google_fit.authenticate(credentials)

    async def fetch_workouts(self, access_token: str, date_range: DateRange) -> list[WorkoutRecord]:
        sessions = await self.google_fit.fetch_workouts(access_token, date_range)
        return [s for s in sessions if "xiaomi" in s.device_id.lower()]
