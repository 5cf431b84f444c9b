"""Session-bound data access shared by the Expency repositories."""
from typing import ClassVar, Generic, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from expency.models.base import Entity

E = TypeVar("E", bound=Entity)


class Repository(Generic[E]):
    """Primary-key lookup and write helpers for one model.

    Every write commits immediately; there is no unit of work spanning
    several repositories.
    """

    model: ClassVar[type[Entity]]

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, id: UUID) -> E | None:
        """Fetch by primary key, deleted rows included."""
        return await self.db.get(self.model, id)

    async def add(self, obj: E) -> E:
        self.db.add(obj)
        return await self.save(obj)

    async def save(self, obj: E) -> E:
        """Commit pending changes and reload server-side values."""
        await self.db.commit()
        await self.db.refresh(obj)
        return obj
