from datetime import UTC, datetime

from sqlalchemy import ColumnElement, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from feedbuckets.domain.enums import EntryStatus
from feedbuckets.infrastructure.persistence.models.entry import Entry
from feedbuckets.infrastructure.persistence.models.feed import Feed
from feedbuckets.infrastructure.persistence.repositories.base import BaseRepository
from feedbuckets.infrastructure.persistence.repositories.entry_query import (
    EntryQueryBuilder,
    to_utc,
)


class EntryRepository(BaseRepository[Entry]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Entry)

    def new_query(self, user_id: str) -> EntryQueryBuilder:
        """Start a chainable query over the user's entries"""
        return EntryQueryBuilder(self.db, user_id)

    def _unread_globally_visible(self, user_id: str) -> list[ColumnElement[bool]]:
        visible_feeds = select(Feed.id).where(
            Feed.user_id == user_id, Feed.hide_globally.is_(False)
        )
        return [
            Entry.user_id == user_id,
            Entry.status == EntryStatus.UNREAD.value,
            Entry.feed_id.in_(visible_feeds),
        ]

    async def _mark_read(self, conditions: list[ColumnElement[bool]]) -> int:
        result = await self.db.execute(
            update(Entry)
            .where(*conditions)
            .values(status=EntryStatus.READ.value, changed_at=datetime.now(UTC))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def mark_entries_read_in_range(
        self, user_id: str, after: datetime | None, before: datetime | None
    ) -> int:
        """
        Mark unread, globally visible entries published in ``[after, before)`` as read.

        A missing bound leaves that side open. Returns the number of entries changed.
        """
        conditions = self._unread_globally_visible(user_id)
        if after is not None:
            conditions.append(Entry.published_at >= to_utc(after))
        if before is not None:
            conditions.append(Entry.published_at < to_utc(before))
        return await self._mark_read(conditions)

    async def mark_globally_visible_feeds_read(self, user_id: str) -> int:
        """Mark every unread entry of the user's globally visible feeds as read"""
        return await self._mark_read(self._unread_globally_visible(user_id))
