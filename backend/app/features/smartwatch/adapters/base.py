"""
Vendor adapter protocol.

Every device brand implements this capability set so the sync
coordinator can treat vendors uniformly. Adapters are independent
classes; there is no shared base class or shared state.
"""

from typing import Any, Callable, Iterable, Optional, Protocol, Sequence, runtime_checkable

import httpx

from ..errors import MalformedResponseError
from ..models import AuthRequest, AuthResult, DateRange, WorkoutRecord, synthetic_external_id


@runtime_checkable
class VendorAdapter(Protocol):
    """Common interface for all fitness-device vendors."""

    brand: str

    async def authenticate(self, credentials: AuthRequest) -> AuthResult:
        """
        Start or finish the vendor authorization.

        Returns an authorization URL when credentials carry no code,
        otherwise an access token.
        """
        ...

    async def fetch_workouts(
        self,
        access_token: str,
        date_range: DateRange
    ) -> Sequence[WorkoutRecord]:
        """Fetch and normalize the vendor's workouts for the window."""
        ...

    def is_available(self) -> bool:
        """True iff the adapter's required credentials are configured."""
        ...


def parse_json(response: httpx.Response, context: str) -> dict:
    """
    Decode a vendor JSON object.

    Raises:
        MalformedResponseError: Body is not a JSON object
    """
    try:
        data = response.json()
    except ValueError as e:
        raise MalformedResponseError(f"{context}: response is not JSON ({e})")
    if not isinstance(data, dict):
        raise MalformedResponseError(f"{context}: expected a JSON object")
    return data


def split_timestamp(value: Optional[str], sep: str = "T") -> tuple[str, str]:
    """
    Split '2025-07-10T07:00:00.000+09:00' into ('2025-07-10', '07:00:00').

    Fractional seconds and UTC offsets are dropped; the clock time stays
    local to the device.
    """
    if not isinstance(value, str) or sep not in value:
        raise MalformedResponseError(f"Unparseable timestamp: {value!r}")
    day, clock = value.split(sep, 1)
    clock = clock[:8]
    if len(clock) == 5:
        clock = f"{clock}:00"
    return day, clock


def external_id_for(
    vendor_id: Any,
    date: str,
    time: str,
    distance_km: float,
    heart_rate_bpm: float,
    duration_seconds: int,
) -> tuple[str, bool]:
    """
    Vendor id as a string, or a content hash when the vendor sent none.

    Returns:
        (external_id, synthetic) where synthetic is True for hashed ids
    """
    if vendor_id is not None and vendor_id != "":
        return str(vendor_id), False
    return synthetic_external_id(
        date, time, round(distance_km, 2), int(round(heart_rate_bpm)), duration_seconds
    ), True


def normalize_all(
    items: Iterable[Any],
    normalizer: Callable[[Any], WorkoutRecord],
    context: str
) -> list[WorkoutRecord]:
    """
    Apply a vendor normalizer to every item.

    Raises:
        MalformedResponseError: An item has a missing or mistyped field
    """
    records = []
    for item in items:
        try:
            records.append(normalizer(item))
        except (TypeError, ValueError, AttributeError, OverflowError) as e:
            raise MalformedResponseError(f"{context}: unexpected item {item!r} ({e})") from e
    return records
