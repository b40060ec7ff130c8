"""
Huawei Health Kit adapter.
"""

import logging
from typing import Optional

import httpx

from ..config import VendorCredentials
from ..errors import (
    AuthExchangeError,
    IntegrationUnavailableError,
    MalformedResponseError,
    VendorFetchError,
)
from ..models import AuthRequest, AuthResult, DateRange, WorkoutRecord
from .base import external_id_for, normalize_all, parse_json, split_timestamp

logger = logging.getLogger(__name__)


def normalize_huawei_activity(activity: dict) -> WorkoutRecord:
    """Huawei reports distance in meters and duration in seconds."""
    day, clock = split_timestamp(activity.get("startTime"))
    duration = int(float(activity.get("duration") or 0))
    distance = float(activity.get("distance") or 0) / 1000
    heart_rate = float(activity.get("avgHeartRate") or 0)
    external_id, synthetic = external_id_for(
        activity.get("id"), day, clock, distance, heart_rate, duration
    )
    return WorkoutRecord(
        external_id=external_id,
        date=day,
        time=clock,
        duration_seconds=duration,
        distance_km=distance,
        heart_rate_bpm=heart_rate,
        calories=activity.get("calories") or 0,
        activity_type=activity.get("type") or "Unknown",
        device_id=activity.get("deviceId") or "huawei",
        raw_payload=activity,
        synthetic_id=synthetic,
    )


class HuaweiHealthKitAdapter:
    """
    Huawei Health Kit REST adapter.

    Authorization happens in the Huawei app; this adapter only exchanges
    the resulting code.
    """

    brand = "Huawei"
    BASE_URL = "https://health-api.cloud.huawei.com"

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
        if not credentials.code:
            raise IntegrationUnavailableError(
                "Huawei authorization starts in the Huawei Health app; pass the code"
            )

        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(
                f"{self.BASE_URL}/auth/v2/token",
                json={
                    "grant_type": "authorization_code",
                    "client_id": self.credentials.client_id,
                    "client_secret": self.credentials.client_secret,
                    "code": credentials.code,
                }
            )

        if not response.is_success:
            raise AuthExchangeError(response.status_code, response.text)

        access_token = parse_json(response, "Huawei token exchange").get("access_token")
        if not access_token:
            raise MalformedResponseError("Huawei token response has no access_token")
        return AuthResult(access_token=access_token)

    async def fetch_workouts(self, access_token: str, date_range: DateRange) -> list[WorkoutRecord]:
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.get(
                f"{self.BASE_URL}/fitness/v1/activities",
                headers={"Authorization": f"Bearer {access_token}"},
                params={"startTime": date_range.start, "endTime": date_range.end}
            )

        if not response.is_success:
            raise VendorFetchError(response.status_code, response.text)

        activities = parse_json(response, "Huawei activities").get("activities") or []
        records = normalize_all(activities, normalize_huawei_activity, "Huawei activities")
        logger.debug(f"Normalized {len(records)} Huawei activities")
        return records
