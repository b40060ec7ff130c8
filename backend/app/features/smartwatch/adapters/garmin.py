"""
Garmin Connect adapter.

Garmin uses OAuth 1.0a; the handshake happens outside this service and
authenticate() only hands the resulting token through.
"""

import logging
from typing import Optional

import httpx

from ..config import VendorCredentials
from ..errors import IntegrationUnavailableError, VendorFetchError
from ..models import AuthRequest, AuthResult, DateRange, WorkoutRecord
from .base import external_id_for, normalize_all, parse_json, split_timestamp

logger = logging.getLogger(__name__)


def normalize_garmin_activity(activity: dict) -> WorkoutRecord:
    """startTimeLocal is 'YYYY-MM-DD HH:MM:SS' in the device's timezone."""
    day, clock = split_timestamp(activity.get("startTimeLocal"), sep=" ")
    duration = int(float(activity.get("duration") or 0))
    distance = float(activity.get("distance") or 0)
    heart_rate = float(activity.get("averageHR") or 0)
    external_id, synthetic = external_id_for(
        activity.get("activityId"), day, clock, distance, heart_rate, duration
    )
    return WorkoutRecord(
        external_id=external_id,
        date=day,
        time=clock,
        duration_seconds=duration,
        distance_km=distance,
        heart_rate_bpm=heart_rate,
        calories=activity.get("calories") or 0,
        activity_type=(activity.get("activityType") or {}).get("typeKey", "unknown"),
        device_id=str(activity.get("deviceId") or "garmin"),
        raw_payload=activity,
        synthetic_id=synthetic,
    )


class GarminConnectAdapter:
    """Garmin Connect activity adapter."""

    brand = "Garmin"
    BASE_URL = "https://connectapi.garmin.com"

    def __init__(
        self,
        credentials: VendorCredentials,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.credentials = credentials
        self._transport = transport

    def is_available(self) -> bool:
        return self.credentials.configured

    async def authenticate(self, credentials: AuthRequest) -> AuthResult:
        access_token = credentials.extra.get("access_token")
        if not access_token:
            raise IntegrationUnavailableError("Garmin requires an OAuth 1.0a access token")
        return AuthResult(access_token=access_token)

    async def fetch_workouts(self, access_token: str, date_range: DateRange) -> list[WorkoutRecord]:
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.get(
                f"{self.BASE_URL}/activity-service/activities",
                headers={"Authorization": f"OAuth {access_token}"},
                params={"startDate": date_range.start, "endDate": date_range.end}
            )

        if not response.is_success:
            raise VendorFetchError(response.status_code, response.text)

        activities = parse_json(response, "Garmin activities").get("activities") or []
        records = normalize_all(activities, normalize_garmin_activity, "Garmin activities")
        logger.debug(f"Normalized {len(records)} Garmin activities")
        return records
