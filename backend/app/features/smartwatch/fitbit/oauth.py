"""
Fitbit OAuth flow.

Handles:
- Authorization URL generation
- Code exchange for an access token
"""

import base64
import logging
from typing import Optional
from urllib.parse import urlencode, quote

import httpx

from ..adapters.base import parse_json
from ..errors import AuthExchangeError, ConfigurationError, MalformedResponseError

logger = logging.getLogger(__name__)


class FitbitOAuth:
    """
    Fitbit OAuth 2.0 authorization-code handler.

    Usage:
        oauth = FitbitOAuth(client_id, client_secret)
        auth_url = oauth.get_authorization_url(
            redirect_uri="https://example.com/callback"
        )
        access_token = await oauth.exchange_code(code, redirect_uri)
    """

    AUTHORIZE_URL = "https://www.fitbit.com/oauth2/authorize"
    TOKEN_URL = "https://api.fitbit.com/oauth2/token"

    BASE_SCOPES = ("activity", "heartrate", "profile")
    LOCATION_SCOPE = "location"

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        include_location: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.include_location = include_location
        self._transport = transport

    @property
    def scope(self) -> str:
        scopes = list(self.BASE_SCOPES)
        if self.include_location:
            scopes.append(self.LOCATION_SCOPE)
        return " ".join(scopes)

    def get_authorization_url(self, redirect_uri: str) -> str:
        """
        Generate Fitbit OAuth authorization URL.

        Pure function of client id, redirect URI and scope: no state,
        nonce or timestamp, so equal inputs give byte-identical URLs.

        Raises:
            ConfigurationError: Client id is not configured
        """
        if not self.client_id:
            raise ConfigurationError("Fitbit client id is not configured")

        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": redirect_uri,
            "scope": self.scope,
        }
        return f"{self.AUTHORIZE_URL}?{urlencode(params, quote_via=quote)}"

    def _basic_auth_header(self) -> str:
        raw = f"{self.client_id}:{self.client_secret}".encode("utf-8")
        return f"Basic {base64.b64encode(raw).decode('ascii')}"

    async def exchange_code(self, code: str, redirect_uri: str) -> str:
        """
        Exchange authorization code for an access token.

        Args:
            code: Authorization code from Fitbit callback
            redirect_uri: Same redirect URI used for the authorization URL

        Returns:
            Access token string

        Raises:
            ConfigurationError: Client credentials are not configured
            AuthExchangeError: Fitbit answered with a non-2xx status
            MalformedResponseError: Response lacks access_token or is not JSON
        """
        if not (self.client_id and self.client_secret):
            raise ConfigurationError("Fitbit client credentials are not configured")

        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(
                self.TOKEN_URL,
                headers={
                    "Authorization": self._basic_auth_header(),
                    "Content-Type": "application/x-www-form-urlencoded",
                },
                data={
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": redirect_uri,
                    "client_id": self.client_id,
                }
            )

        if not response.is_success:
            logger.error(
                f"Fitbit token exchange failed: {response.status_code} {response.text}"
            )
            raise AuthExchangeError(response.status_code, response.text)

        data = parse_json(response, "Fitbit token exchange")
        access_token = data.get("access_token")
        if not access_token:
            raise MalformedResponseError("Fitbit token response has no access_token")

        logger.info(f"Fitbit token exchanged for user {data.get('user_id', 'unknown')}")
        return access_token
