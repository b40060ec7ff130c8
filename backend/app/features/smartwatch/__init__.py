"""
SmartWatch integration module.

Usage:
    from app.features.smartwatch import build_registry, IntegrationConfig, SyncCoordinator

Components:
- VendorAdapter: Protocol every brand adapter satisfies
- FitbitAdapter: OAuth2 + activity log sync (fully implemented vendor)
- AdapterRegistry: Brand lookup and availability
- SyncCoordinator: Fetch, deduplicate and persist workouts
"""

from .adapters import VendorAdapter
from .config import IntegrationConfig, VendorCredentials
from .errors import (
    SmartwatchError,
    ConfigurationError,
    UnsupportedVendorError,
    IntegrationUnavailableError,
    AuthExchangeError,
    VendorFetchError,
    MalformedResponseError,
    PersistError,
)
from .fitbit import FitbitAdapter
from .models import AuthRequest, AuthResult, DateRange, SyncResult, WorkoutRecord
from .registry import AdapterRegistry, build_registry
from .sync import SyncCoordinator, WorkoutStore

__all__ = [
    # Config
    "IntegrationConfig",
    "VendorCredentials",
    # Errors
    "SmartwatchError",
    "ConfigurationError",
    "UnsupportedVendorError",
    "IntegrationUnavailableError",
    "AuthExchangeError",
    "VendorFetchError",
    "MalformedResponseError",
    "PersistError",
    # Models
    "AuthRequest",
    "AuthResult",
    "DateRange",
    "SyncResult",
    "WorkoutRecord",
    # Adapters
    "VendorAdapter",
    "FitbitAdapter",
    "AdapterRegistry",
    "build_registry",
    # Sync
    "SyncCoordinator",
    "WorkoutStore",
]
