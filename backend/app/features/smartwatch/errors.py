"""
SmartWatch integration errors.

All adapter and coordinator failures derive from SmartwatchError so the
HTTP layer can render them uniformly.
"""

from typing import Optional


class SmartwatchError(Exception):
    """Base smartwatch integration error."""
    pass


class ConfigurationError(SmartwatchError):
    """Required vendor configuration is missing at startup."""
    pass


class UnsupportedVendorError(SmartwatchError):
    """No adapter is registered for the requested brand."""

    def __init__(self, brand: str):
        self.brand = brand
        super().__init__(f"Unsupported brand: {brand}")


class IntegrationUnavailableError(SmartwatchError):
    """The vendor offers no server-side flow for this operation."""
    pass


class VendorHTTPError(SmartwatchError):
    """Vendor answered with an unexpected HTTP status."""

    def __init__(self, message: str, status_code: Optional[int], body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"{message}: {status_code} - {body}")


class AuthExchangeError(VendorHTTPError):
    """Vendor rejected the authorization code exchange."""

    def __init__(self, status_code: Optional[int], body: str):
        super().__init__("Token exchange failed", status_code, body)


class VendorFetchError(VendorHTTPError):
    """Fetching activities failed with a non-401 status."""

    def __init__(self, status_code: Optional[int], body: str):
        super().__init__("Activity fetch failed", status_code, body)


class MalformedResponseError(SmartwatchError):
    """Vendor response is not JSON or lacks an expected field."""
    pass


class PersistError(SmartwatchError):
    """Saving a single synced workout failed."""

    def __init__(self, external_id: str, cause: Exception):
        self.external_id = external_id
        self.cause = cause
        super().__init__(f"Failed to persist workout {external_id}: {cause}")
