"""
Vendor adapters.

One adapter per device brand, all satisfying the VendorAdapter protocol.
Fitbit lives in its own package (app.features.smartwatch.fitbit).
"""

from .base import VendorAdapter, external_id_for, normalize_all, parse_json, split_timestamp
from .apple import AppleHealthKitAdapter
from .garmin import GarminConnectAdapter, normalize_garmin_activity
from .google_fit import GoogleFitAdapter, normalize_google_fit_session
from .huawei import HuaweiHealthKitAdapter, normalize_huawei_activity
from .xiaomi import XiaomiMiFitnessAdapter

__all__ = [
    "VendorAdapter",
    "external_id_for",
    "normalize_all",
    "parse_json",
    "split_timestamp",
    "AppleHealthKitAdapter",
    "GarminConnectAdapter",
    "GoogleFitAdapter",
    "HuaweiHealthKitAdapter",
    "XiaomiMiFitnessAdapter",
    "normalize_garmin_activity",
    "normalize_google_fit_session",
    "normalize_huawei_activity",
]
