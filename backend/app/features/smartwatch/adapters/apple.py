"""
Apple HealthKit adapter.

HealthKit has no web API: workouts are pushed by the iOS companion app,
so there is nothing to authorize or fetch server-side.
"""

from ..errors import IntegrationUnavailableError
from ..models import AuthRequest, AuthResult, DateRange, WorkoutRecord


class AppleHealthKitAdapter:
    """Placeholder adapter for data delivered by the iOS app."""

    brand = "Apple"

    def is_available(self) -> bool:
        # Reachable through the iOS app without server credentials
        return True

    async def authenticate(self, credentials: AuthRequest) -> AuthResult:
        raise IntegrationUnavailableError("Apple HealthKit requires iOS app integration")

    async def fetch_workouts(self, access_token: str, date_range: DateRange) -> list[WorkoutRecord]:
        return []
