from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from feedbuckets.infrastructure.persistence.models.feed import Feed
from feedbuckets.infrastructure.persistence.repositories.base import BaseRepository


class FeedRepository(BaseRepository[Feed]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Feed)

    async def count_feeds_with_errors(self, user_id: str) -> int:
        """Count the user's feeds whose last refreshes failed"""
        result = await self.db.execute(
            select(func.count(Feed.id)).where(
                Feed.user_id == user_id,
                Feed.parsing_error_count > 0,
            )
        )
        return result.scalar() or 0
