"""
Repository base class.

Every repository wraps one AsyncSession and one model keyed by a string id.
Repositories only flush; the caller's session scope decides when to commit.
"""
from datetime import datetime
from typing import Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from database.models.base import Base


ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Shared lookups and writes for string-keyed models.

    Subclasses set `model`:

        class ReviewRepository(BaseRepository[Review]):
            model = Review
    """

    model: Type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, entity_id: str) -> Optional[ModelT]:
        """Row with this id, or None."""
        return await self.session.get(self.model, entity_id)

    async def get_all(self, limit: Optional[int] = None) -> Sequence[ModelT]:
        """Every row in id order, optionally capped at `limit`."""
        stmt = select(self.model).order_by(self.model.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def get_by_ids(self, entity_ids: List[str]) -> Sequence[ModelT]:
        """Rows for the given ids; unknown ids are ignored."""
        if not entity_ids:
            return []
        result = await self.session.execute(
            select(self.model).where(self.model.id.in_(entity_ids))
        )
        return result.scalars().all()

    async def exists(self, entity_id: str) -> bool:
        result = await self.session.execute(
            select(func.count()).select_from(self.model).where(self.model.id == entity_id)
        )
        return result.scalar_one() > 0

    async def add(self, entity: ModelT) -> ModelT:
        """Stage a new row and flush it."""
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def delete(self, entity_id: str) -> bool:
        """Delete by id. False when there was nothing to delete."""
        entity = await self.get(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.flush()
        return True

    @staticmethod
    def now() -> datetime:
        return datetime.now()
