from abc import ABC
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feedbuckets.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(ABC, Generic[ModelType]):
    """Base repository implementing the lookups shared by all repositories"""

    def __init__(self, db: AsyncSession, model: type[ModelType]):
        self.db = db
        self.model = model

    async def get_by_id(self, id: str) -> ModelType | None:
        """Get a single record by ID"""
        # Cast to Any for SQLAlchemy dynamic attribute access (id comes from CuidMixin)
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == id))
        return result.scalar_one_or_none()
