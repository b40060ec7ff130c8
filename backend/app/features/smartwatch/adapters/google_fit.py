"""
Google Fit adapter.

Google Fit sessions are also the only route to Xiaomi data (see xiaomi.py).
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from ..errors import IntegrationUnavailableError, VendorFetchError
from ..models import AuthRequest, AuthResult, DateRange, WorkoutRecord
from .base import external_id_for, normalize_all, parse_json

logger = logging.getLogger(__name__)


def normalize_google_fit_session(session: dict) -> WorkoutRecord:
    """Sessions carry epoch-millisecond strings; times are reported in UTC."""
    start_ms = int(session.get("startTimeMillis") or 0)
    end_ms = int(session.get("endTimeMillis") or start_ms)
    started = datetime.fromtimestamp(start_ms / 1000, tz=timezone.utc)
    day, clock = started.strftime("%Y-%m-%d"), started.strftime("%H:%M:%S")
    duration = (end_ms - start_ms) // 1000
    distance = float(session.get("distance") or 0)
    heart_rate = float(session.get("averageHeartRate") or 0)
    external_id, synthetic = external_id_for(
        session.get("id"), day, clock, distance, heart_rate, duration
    )
    return WorkoutRecord(
        external_id=external_id,
        date=day,
        time=clock,
        duration_seconds=duration,
        distance_km=distance,
        heart_rate_bpm=heart_rate,
        calories=session.get("calories") or 0,
        activity_type=str(session.get("activityType", "unknown")),
        device_id=(session.get("application") or {}).get("packageName") or "unknown",
        raw_payload=session,
        synthetic_id=synthetic,
    )


class GoogleFitAdapter:
    """Google Fit REST adapter (API scheduled for shutdown in 2026)."""

    brand = "Google"
    BASE_URL = "https://www.googleapis.com/fitness/v1"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    def is_available(self) -> bool:
        # Tokens come from Google Sign-In on the client; no server secret needed
        return True

    async def authenticate(self, credentials: AuthRequest) -> AuthResult:
        access_token = credentials.extra.get("access_token")
        if not access_token:
            raise IntegrationUnavailableError("Google Fit requires a Google access token")
        return AuthResult(access_token=access_token)

    async def fetch_workouts(self, access_token: str, date_range: DateRange) -> list[WorkoutRecord]:
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.get(
                f"{self.BASE_URL}/users/me/sessions",
                headers={"Authorization": f"Bearer {access_token}"},
                params={
                    "startTime": f"{date_range.start}T00:00:00Z",
                    "endTime": f"{date_range.end}T23:59:59Z",
                }
            )

        if not response.is_success:
            raise VendorFetchError(response.status_code, response.text)

        sessions = parse_json(response, "Google Fit sessions").get("session") or []
        records = normalize_all(sessions, normalize_google_fit_session, "Google Fit sessions")
        logger.debug(f"Normalized {len(records)} Google Fit sessions")
        return records
