from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feedbuckets.infrastructure.persistence.models.user import User
from feedbuckets.infrastructure.persistence.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()
