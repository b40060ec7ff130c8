"""
Base repository with common CRUD operations.

Provides generic database operations for all feature repositories.
Uses SQLAlchemy async session for non-blocking database access.

Usage:
    class GoalRepository(BaseRepository[Goal]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, Goal)

        async def get_current(self) -> Goal | None:
            goals = await self.get_all(order_by=Goal.created_at.desc(), limit=1)
            return goals[0] if goals else None
"""

from typing import Any, TypeVar, Generic, Type

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository for database operations.

    Writes only flush; committing is left to the caller unless a
    subclass documents otherwise.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    def _filtered(self, query, filters: dict[str, Any]):
        for key, value in filters.items():
            query = query.where(getattr(self.model, key) == value)
        return query

    async def get_by_id(self, id: int) -> T | None:
        """Get entity by primary key, None if missing."""
        return await self.db.get(self.model, id)

    async def get_by(self, **filters) -> T | None:
        """
        Get single entity by arbitrary field values.

        Returns:
            First matching entity or None
        """
        query = self._filtered(select(self.model), filters).limit(1)
        result = await self.db.execute(query)
        return result.scalars().first()

    async def get_all(
        self,
        order_by: Any = None,
        limit: int | None = None,
        **filters
    ) -> list[T]:
        """
        Get all entities matching field values.

        Args:
            order_by: Optional column expression(s) to sort by
            limit: Maximum rows to return
            **filters: Field name-value pairs to filter by
        """
        query = self._filtered(select(self.model), filters)
        if order_by is not None:
            if isinstance(order_by, (list, tuple)):
                query = query.order_by(*order_by)
            else:
                query = query.order_by(order_by)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create(self, **fields) -> T:
        """Add a new entity and flush so its generated ID is populated."""
        entity = self.model(**fields)
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def update(self, entity: T, **fields) -> T:
        """Set fields on an existing entity and flush."""
        for key, value in fields.items():
            setattr(entity, key, value)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def count(self, **filters) -> int:
        """Count entities matching field values."""
        query = self._filtered(select(func.count()).select_from(self.model), filters)
        result = await self.db.execute(query)
        return result.scalar() or 0
