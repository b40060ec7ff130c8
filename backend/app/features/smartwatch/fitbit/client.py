"""
Fitbit Web API client.

Only the activity log list is used. Pages are requested one after
another (never concurrently) by following `pagination.next`.
"""

import logging
from typing import Optional

import httpx

from ..adapters.base import parse_json
from ..errors import MalformedResponseError, VendorFetchError

logger = logging.getLogger(__name__)


class FitbitClient:
    """
    Async client for the Fitbit activity log.

    Usage:
        client = FitbitClient()
        activities = await client.get_activity_log(access_token, after_date="2025-07-01")
    """

    API_URL = "https://api.fitbit.com"
    ACTIVITY_LIST_PATH = "/1/user/-/activities/list.json"
    PAGE_LIMIT = 100

    def __init__(
        self,
        max_pages: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.max_pages = max_pages
        self._transport = transport

    async def _get_page(
        self,
        client: httpx.AsyncClient,
        url: str,
        access_token: str,
        params: Optional[dict] = None
    ) -> dict:
        """
        Fetch one page of the activity log.

        Raises:
            VendorFetchError: Non-2xx status (401 included; callers decide)
            MalformedResponseError: Body is not a JSON object
        """
        response = await client.get(
            url,
            headers={"Authorization": f"Bearer {access_token}"},
            params=params
        )

        if not response.is_success:
            raise VendorFetchError(response.status_code, response.text)

        return parse_json(response, "Fitbit activity list")

    async def get_activity_log(self, access_token: str, after_date: str) -> list[dict]:
        """
        Get activities logged after a date, oldest first.

        Args:
            access_token: Bearer token
            after_date: YYYY-MM-DD start of the window

        Returns:
            Raw activity dicts across all fetched pages
        """
        params = {
            "afterDate": after_date,
            "sort": "asc",
            "limit": self.PAGE_LIMIT,
            "offset": 0,
        }
        url = f"{self.API_URL}{self.ACTIVITY_LIST_PATH}"
        activities: list[dict] = []

        async with httpx.AsyncClient(transport=self._transport) as client:
            for page in range(self.max_pages):
                data = await self._get_page(client, url, access_token, params)

                items = data.get("activities")
                if not isinstance(items, list):
                    raise MalformedResponseError(
                        "Fitbit activity list has no 'activities' array"
                    )
                activities.extend(items)

                next_url = (data.get("pagination") or {}).get("next")
                if not next_url:
                    break
                # The next link already carries its own query string
                url, params = next_url, None
            else:
                logger.warning(
                    f"Fitbit activity log truncated at {self.max_pages} pages"
                )

        logger.debug(f"Fetched {len(activities)} Fitbit activities after {after_date}")
        return activities
