"""
SmartWatch integration configuration.

An explicit, immutable configuration struct built once from application
settings and injected into the adapter registry. Adapters receive their
own credentials through it and never read settings directly.
"""

from dataclasses import dataclass, field
from typing import Optional

from .errors import ConfigurationError


@dataclass(frozen=True)
class VendorCredentials:
    """OAuth client credentials for one vendor."""

    client_id: Optional[str] = None
    client_secret: Optional[str] = None

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret)


@dataclass(frozen=True)
class IntegrationConfig:
    """Credentials and options for every supported vendor."""

    fitbit: VendorCredentials = field(default_factory=VendorCredentials)
    huawei: VendorCredentials = field(default_factory=VendorCredentials)
    garmin: VendorCredentials = field(default_factory=VendorCredentials)

    fitbit_redirect_uri: Optional[str] = None
    fitbit_include_location_scope: bool = True
    fitbit_max_pages: int = 10
    fitbit_required: bool = False

    @classmethod
    def from_settings(cls, settings) -> "IntegrationConfig":
        return cls(
            fitbit=VendorCredentials(
                settings.fitbit_client_id,
                settings.fitbit_client_secret,
            ),
            huawei=VendorCredentials(
                settings.huawei_client_id,
                settings.huawei_client_secret,
            ),
            garmin=VendorCredentials(
                settings.garmin_consumer_key,
                settings.garmin_consumer_secret,
            ),
            fitbit_redirect_uri=settings.fitbit_redirect_uri,
            fitbit_include_location_scope=settings.fitbit_include_location_scope,
            fitbit_max_pages=settings.fitbit_max_pages,
            fitbit_required=settings.fitbit_required,
        )

    def validate(self) -> None:
        """
        Fail fast on missing mandatory credentials.

        Raises:
            ConfigurationError: Fitbit is required but not configured
        """
        if self.fitbit_required and not self.fitbit.configured:
            raise ConfigurationError(
                "FITBIT_CLIENT_ID and FITBIT_CLIENT_SECRET must be set "
                "when FITBIT_REQUIRED is enabled"
            )
