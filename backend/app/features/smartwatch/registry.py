"""
Adapter registry.

Holds one adapter instance per supported brand. Built once at startup
from an IntegrationConfig; there is no registration at runtime.
"""

import logging
from typing import Iterable, Optional

import httpx

from .adapters import (
    AppleHealthKitAdapter,
    GarminConnectAdapter,
    GoogleFitAdapter,
    HuaweiHealthKitAdapter,
    VendorAdapter,
    XiaomiMiFitnessAdapter,
)
from .config import IntegrationConfig
from .errors import UnsupportedVendorError
from .fitbit import FitbitAdapter

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """
    Brand -> adapter lookup.

    Brand names match case-insensitively ("fitbit" finds "Fitbit").
    """

    def __init__(self, adapters: Iterable[VendorAdapter]):
        self._adapters: dict[str, VendorAdapter] = {}
        for adapter in adapters:
            key = adapter.brand.casefold()
            if key in self._adapters:
                raise ValueError(f"Duplicate adapter for brand {adapter.brand}")
            self._adapters[key] = adapter

    def get(self, brand: str) -> Optional[VendorAdapter]:
        return self._adapters.get(brand.casefold())

    def resolve(self, brand: str) -> VendorAdapter:
        """
        Get the adapter for a brand.

        Raises:
            UnsupportedVendorError: No adapter registered for the brand
        """
        adapter = self.get(brand)
        if adapter is None:
            raise UnsupportedVendorError(brand)
        return adapter

    def all(self) -> list[VendorAdapter]:
        """All adapters in registration order."""
        return list(self._adapters.values())

    def available(self) -> list[VendorAdapter]:
        return [adapter for adapter in self._adapters.values() if adapter.is_available()]


def build_registry(
    config: IntegrationConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> AdapterRegistry:
    """
    Create the registry with every supported vendor.

    Args:
        config: Vendor credentials and options
        transport: Optional httpx transport shared by all adapters (tests)

    Raises:
        ConfigurationError: Mandatory credentials are missing
    """
    config.validate()

    google_fit = GoogleFitAdapter(transport=transport)
    registry = AdapterRegistry([
        AppleHealthKitAdapter(),
        HuaweiHealthKitAdapter(config.huawei, transport=transport),
        XiaomiMiFitnessAdapter(google_fit=GoogleFitAdapter(transport=transport)),
        GarminConnectAdapter(config.garmin, transport=transport),
        google_fit,
        FitbitAdapter(
            config.fitbit,
            redirect_uri=config.fitbit_redirect_uri,
            include_location_scope=config.fitbit_include_location_scope,
            max_pages=config.fitbit_max_pages,
            transport=transport,
        ),
    ])

    available = [adapter.brand for adapter in registry.available()]
    logger.info(f"SmartWatch adapters available: {', '.join(available) or 'none'}")
    return registry
