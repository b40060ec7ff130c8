"""
Tests for the non-Fitbit vendor adapters.
"""

import pytest

from app.features.smartwatch import AuthRequest, DateRange, VendorAdapter, VendorCredentials
from app.features.smartwatch.adapters import (
    AppleHealthKitAdapter,
    GarminConnectAdapter,
    GoogleFitAdapter,
    HuaweiHealthKitAdapter,
    XiaomiMiFitnessAdapter,
    normalize_garmin_activity,
    normalize_google_fit_session,
    normalize_huawei_activity,
)
from app.features.smartwatch.adapters.base import external_id_for, split_timestamp
from app.features.smartwatch.errors import (
    AuthExchangeError,
    IntegrationUnavailableError,
    MalformedResponseError,
    VendorFetchError,
)
from app.features.smartwatch.fitbit import FitbitAdapter

WINDOW = DateRange("2025-07-01", "2025-07-16")


class TestSplitTimestamp:
    """Tests for split_timestamp function."""

    def test_iso_with_offset(self):
        assert split_timestamp("2025-07-10T07:00:00.000+09:00") == ("2025-07-10", "07:00:00")

    def test_space_separator(self):
        assert split_timestamp("2025-07-10 18:30:15", sep=" ") == ("2025-07-10", "18:30:15")

    def test_short_clock_padded(self):
        assert split_timestamp("2025-07-10T06:45") == ("2025-07-10", "06:45:00")

    def test_unparseable(self):
        with pytest.raises(MalformedResponseError):
            split_timestamp("yesterday")
        with pytest.raises(MalformedResponseError):
            split_timestamp(None)
        with pytest.raises(MalformedResponseError):
            split_timestamp(1752130800)


class TestProtocolConformance:
    """Every adapter satisfies the VendorAdapter capability set."""

    @pytest.mark.parametrize("adapter", [
        AppleHealthKitAdapter(),
        HuaweiHealthKitAdapter(VendorCredentials()),
        XiaomiMiFitnessAdapter(),
        GarminConnectAdapter(VendorCredentials()),
        GoogleFitAdapter(),
        FitbitAdapter(VendorCredentials()),
    ])
    def test_is_vendor_adapter(self, adapter):
        assert isinstance(adapter, VendorAdapter)


class TestAppleHealthKit:

    async def test_no_server_auth(self):
        with pytest.raises(IntegrationUnavailableError):
            await AppleHealthKitAdapter().authenticate(AuthRequest())

    async def test_fetch_returns_nothing(self):
        assert await AppleHealthKitAdapter().fetch_workouts("tok", WINDOW) == []


class TestHuaweiHealthKit:

    async def test_fetch_converts_meters(self, vendor_api):
        vendor_api.respond("/fitness/v1/activities", json={"activities": [{
            "id": "hw-1",
            "startTime": "2025-07-10T07:00:00",
            "duration": 1800,
            "distance": 5000,
            "avgHeartRate": 150,
            "calories": 320,
            "type": "running",
        }]})
        adapter = HuaweiHealthKitAdapter(VendorCredentials("id", "secret"), transport=vendor_api.transport)

        records = await adapter.fetch_workouts("tok", WINDOW)

        assert len(records) == 1
        assert records[0].external_id == "hw-1"
        assert records[0].distance_km == 5.0
        assert records[0].device_id == "huawei"
        assert vendor_api.requests[0].url.params["startTime"] == "2025-07-01"

    async def test_code_exchange_rejected(self, vendor_api):
        vendor_api.respond("/auth/v2/token", status_code=401, text="bad code")
        adapter = HuaweiHealthKitAdapter(VendorCredentials("id", "secret"), transport=vendor_api.transport)

        with pytest.raises(AuthExchangeError):
            await adapter.authenticate(AuthRequest(code="x"))

    async def test_auth_without_code(self):
        with pytest.raises(IntegrationUnavailableError):
            await HuaweiHealthKitAdapter(VendorCredentials("id", "secret")).authenticate(AuthRequest())


class TestGarminConnect:

    async def test_token_passthrough(self):
        adapter = GarminConnectAdapter(VendorCredentials("key", "secret"))
        result = await adapter.authenticate(AuthRequest(extra={"access_token": "oauth1"}))
        assert result.access_token == "oauth1"

    async def test_fetch(self, vendor_api):
        vendor_api.respond("/activity-service/activities", json={"activities": [{
            "activityId": 555,
            "startTimeLocal": "2025-07-12 06:45:00",
            "duration": 2100,
            "distance": 6.2,
            "averageHR": 158,
            "calories": 410,
            "activityType": {"typeKey": "running"},
        }]})
        adapter = GarminConnectAdapter(VendorCredentials("key", "secret"), transport=vendor_api.transport)

        records = await adapter.fetch_workouts("oauth1", WINDOW)

        assert records[0].external_id == "555"
        assert (records[0].date, records[0].time) == ("2025-07-12", "06:45:00")
        assert records[0].activity_type == "running"

    async def test_fetch_error(self, vendor_api):
        vendor_api.respond("/activity-service/activities", status_code=503, text="down")
        adapter = GarminConnectAdapter(VendorCredentials("key", "secret"), transport=vendor_api.transport)

        with pytest.raises(VendorFetchError):
            await adapter.fetch_workouts("oauth1", WINDOW)


class TestGoogleFitAndXiaomi:

    SESSIONS = {"session": [
        {
            "id": "g-1",
            "startTimeMillis": "1752130800000",  # 2025-07-10T07:00:00Z
            "endTimeMillis": "1752132600000",
            "activityType": 8,
            "application": {"packageName": "com.xiaomi.wearable"},
        },
        {
            "id": "g-2",
            "startTimeMillis": "1752217200000",  # 2025-07-11T07:00:00Z
            "endTimeMillis": "1752219000000",
            "activityType": 8,
            "application": {"packageName": "com.google.android.apps.fitness"},
        },
    ]}

    async def test_google_fit_sessions(self, vendor_api):
        vendor_api.respond("/fitness/v1/users/me/sessions", json=self.SESSIONS)
        adapter = GoogleFitAdapter(transport=vendor_api.transport)

        records = await adapter.fetch_workouts("tok", WINDOW)

        assert [r.external_id for r in records] == ["g-1", "g-2"]
        assert (records[0].date, records[0].time) == ("2025-07-10", "07:00:00")
        assert records[0].duration_seconds == 1800

    async def test_xiaomi_keeps_xiaomi_devices(self, vendor_api):
        vendor_api.respond("/fitness/v1/users/me/sessions", json=self.SESSIONS)
        adapter = XiaomiMiFitnessAdapter(GoogleFitAdapter(transport=vendor_api.transport))

        records = await adapter.fetch_workouts("tok", WINDOW)

        assert [r.external_id for r in records] == ["g-1"]
        assert adapter.is_available() is False

    async def test_google_fit_bad_millis(self, vendor_api):
        vendor_api.respond("/fitness/v1/users/me/sessions", json={"session": [
            {"id": "s1", "startTimeMillis": "not-a-number"},
        ]})
        adapter = GoogleFitAdapter(transport=vendor_api.transport)

        with pytest.raises(MalformedResponseError, match="Google Fit sessions"):
            await adapter.fetch_workouts("tok", WINDOW)


# =============================================================================
# Missing vendor ids
# =============================================================================

class TestExternalIdFallback:
    """Items without a vendor id get a content-derived synthetic id."""

    def test_vendor_id_kept(self):
        assert external_id_for(555, "2025-07-10", "07:00:00", 5.0, 150, 1800) == ("555", False)

    def test_empty_vendor_id_is_synthetic(self):
        external_id, synthetic = external_id_for("", "2025-07-10", "07:00:00", 5.0, 150, 1800)
        assert synthetic is True
        assert external_id.startswith("synthetic-")

    def test_garmin_without_activity_id(self):
        first = normalize_garmin_activity(
            {"startTimeLocal": "2025-07-10 07:00:00", "distance": 5.0, "averageHR": 150, "duration": 1800}
        )
        second = normalize_garmin_activity(
            {"startTimeLocal": "2025-07-11 07:00:00", "distance": 3.0, "averageHR": 140, "duration": 1200}
        )

        assert first.synthetic_id and second.synthetic_id
        assert first.external_id.startswith("synthetic-")
        assert first.external_id != second.external_id
        assert first.external_id != "None"

    def test_garmin_id_stable_across_retries(self):
        activity = {"startTimeLocal": "2025-07-10 07:00:00", "distance": 5.0, "duration": 1800}
        assert normalize_garmin_activity(activity).external_id == normalize_garmin_activity(dict(activity)).external_id

    def test_huawei_without_id(self):
        record = normalize_huawei_activity({"startTime": "2025-07-10T07:00:00", "distance": 5000})
        assert record.synthetic_id is True
        assert record.external_id.startswith("synthetic-")

    def test_google_fit_without_id(self):
        record = normalize_google_fit_session({"startTimeMillis": "1752130800000"})
        assert record.synthetic_id is True
        assert record.external_id.startswith("synthetic-")
