"""
SmartWatch sync orchestration.

Sync Flow:
1. Resolve the brand's adapter (unknown brand fails before any network call)
2. Fetch and normalize vendor workouts (a failure here aborts the sync)
3. Drop repeated external ids within the batch, keeping the first
4. Skip placeholder records; they are never stored
5. Skip records matching a stored workout on (date, time, distance, heart rate)
6. Persist the rest one by one; a failed insert is logged and the batch goes on
"""

import logging
from typing import Any, Protocol, Sequence

from app.features.tracker import WorkoutConflictError

from .errors import PersistError
from .models import DateRange, SyncResult, WorkoutRecord
from .registry import AdapterRegistry

logger = logging.getLogger(__name__)


class WorkoutStore(Protocol):
    """Persistence operations the coordinator relies on."""

    async def find_workouts_in_range(self, start_date: str, end_date: str) -> Sequence[Any]:
        ...

    async def create_workout(self, fields: dict[str, Any]) -> int:
        ...


def _stored_key(workout: Any) -> tuple:
    return (workout.date, workout.time, round(workout.distance, 2), workout.heart_rate)


def dedupe_by_external_id(records: Sequence[WorkoutRecord]) -> list[WorkoutRecord]:
    """Keep the first record for every external id, preserving order."""
    seen: set[str] = set()
    unique = []
    for record in records:
        if record.external_id in seen:
            continue
        seen.add(record.external_id)
        unique.append(record)
    return unique


class SyncCoordinator:
    """
    Pulls workouts from a vendor into local storage.

    Usage:
        coordinator = SyncCoordinator(registry, WorkoutRepository(db))
        result = await coordinator.sync("Fitbit", token, DateRange(start, end))
    """

    def __init__(self, registry: AdapterRegistry, store: WorkoutStore):
        self.registry = registry
        self.store = store

    async def sync(self, brand: str, access_token: str, date_range: DateRange) -> SyncResult:
        """
        Sync one vendor's workouts for a date window.

        Returns:
            SyncResult with every fetched record (skipped ones included)

        Raises:
            UnsupportedVendorError: Unknown brand
            SmartwatchError: Adapter fetch failed
        """
        adapter = self.registry.resolve(brand)
        records = list(await adapter.fetch_workouts(access_token, date_range))
        result = SyncResult(brand=adapter.brand, records=records)

        unique = dedupe_by_external_id(records)
        result.duplicate_count = len(records) - len(unique)

        to_persist = [record for record in unique if not record.placeholder]
        if len(to_persist) < len(unique):
            logger.warning(
                f"{adapter.brand} returned {len(unique) - len(to_persist)} "
                f"placeholder workouts; not persisting them"
            )

        if to_persist:
            await self._persist(adapter.brand, to_persist, result)

        logger.info(
            f"{adapter.brand} sync {date_range.start}..{date_range.end}: "
            f"requested={result.requested_count} saved={result.saved_count} "
            f"duplicates={result.duplicate_count} failed={result.failed_count}"
        )
        return result

    async def _persist(
        self,
        brand: str,
        records: list[WorkoutRecord],
        result: SyncResult
    ) -> None:
        dates = [record.date for record in records]
        stored = await self.store.find_workouts_in_range(min(dates), max(dates))
        known_keys = {_stored_key(workout) for workout in stored}

        for record in records:
            if record.composite_key in known_keys:
                result.duplicate_count += 1
                continue

            try:
                await self.store.create_workout(record.to_workout_fields(brand))
            except WorkoutConflictError:
                logger.debug(f"{brand} workout {record.external_id} already stored")
                result.duplicate_count += 1
                continue
            except Exception as e:
                error = PersistError(record.external_id, e)
                logger.warning(str(error), exc_info=True)
                result.failed_count += 1
                continue

            known_keys.add(record.composite_key)
            result.saved_count += 1
