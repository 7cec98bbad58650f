"""Base repository with the generic operations shared by every model."""
from typing import Generic, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Generic repository bound to one model and one session."""

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    async def create(self, obj: T) -> T:
        """Insert a new record and return it refreshed."""
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj
