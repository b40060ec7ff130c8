"""
Fitbit vendor adapter.

OAuth states:
    NoToken -> AuthorizationRequested   authenticate() without a code
    CodeReceived -> TokenExchanged      authenticate() with a code
    Valid                               fetch_workouts() returns real records
    Invalid                             fetch_workouts() got HTTP 401 and
                                        returns flagged placeholder records
"""

import logging
from typing import Optional

import httpx

from ..config import VendorCredentials
from ..errors import ConfigurationError, VendorFetchError
from ..models import AuthRequest, AuthResult, DateRange, WorkoutRecord
from .client import FitbitClient
from .normalize import normalize_activities, placeholder_workouts
from .oauth import FitbitOAuth

logger = logging.getLogger(__name__)


class FitbitAdapter:
    """
    Fitbit Web API adapter.

    Usage:
        adapter = FitbitAdapter(VendorCredentials(client_id, client_secret))
        result = await adapter.authenticate(AuthRequest(redirect_uri=uri))
        records = await adapter.fetch_workouts(token, DateRange("2025-07-01", "2025-07-16"))
    """

    brand = "Fitbit"

    def __init__(
        self,
        credentials: VendorCredentials,
        redirect_uri: Optional[str] = None,
        include_location_scope: bool = True,
        max_pages: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.credentials = credentials
        self.redirect_uri = redirect_uri
        self.oauth = FitbitOAuth(
            credentials.client_id,
            credentials.client_secret,
            include_location=include_location_scope,
            transport=transport
        )
        self.client = FitbitClient(max_pages=max_pages, transport=transport)

    def is_available(self) -> bool:
        return self.credentials.configured

    async def authenticate(self, credentials: AuthRequest) -> AuthResult:
        """
        Build the authorization URL, or exchange a received code.

        Raises:
            ConfigurationError: No redirect URI given or configured
            AuthExchangeError: Fitbit rejected the code
            MalformedResponseError: Token response lacks access_token
        """
        redirect_uri = credentials.redirect_uri or self.redirect_uri
        if not redirect_uri:
            raise ConfigurationError("Fitbit redirect URI is required")

        if not credentials.code:
            return AuthResult(authorization_url=self.oauth.get_authorization_url(redirect_uri))

        access_token = await self.oauth.exchange_code(credentials.code, redirect_uri)
        return AuthResult(access_token=access_token)

    async def fetch_workouts(
        self,
        access_token: str,
        date_range: DateRange
    ) -> list[WorkoutRecord]:
        """
        Fetch activity logs since the window start and normalize them.

        A 401 does not raise: the token is invalid or expired, and the
        caller gets placeholder records (placeholder=True) so the UI can
        prompt for re-authentication.

        Raises:
            VendorFetchError: Any other non-2xx status
            MalformedResponseError: Response is not the expected JSON
        """
        try:
            items = await self.client.get_activity_log(access_token, date_range.start)
        except VendorFetchError as e:
            if e.status_code == 401:
                logger.warning("Fitbit rejected access token, returning placeholder workouts")
                return placeholder_workouts(date_range.start)
            logger.error(f"Fitbit activity fetch failed: {e.status_code}")
            raise

        records = normalize_activities(items, default_date=date_range.start)
        logger.info(f"Normalized {len(records)} Fitbit workouts from {date_range.start}")
        return records
