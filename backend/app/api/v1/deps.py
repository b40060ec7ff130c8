"""
Shared route dependencies.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_async_db
from app.features.smartwatch import AdapterRegistry, SyncCoordinator
from app.features.tracker import WorkoutRepository


def get_registry(request: Request) -> AdapterRegistry:
    """Adapter registry built during application startup."""
    return request.app.state.registry


def get_workout_store(db: AsyncSession = Depends(get_async_db)) -> WorkoutRepository:
    return WorkoutRepository(db)


def get_sync_coordinator(
    registry: AdapterRegistry = Depends(get_registry),
    store: WorkoutRepository = Depends(get_workout_store)
) -> SyncCoordinator:
    return SyncCoordinator(registry, store)
