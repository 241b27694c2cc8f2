"""
Chainable entry query builder.

Filters accumulate in call order and are only executed by
``count_entries()`` or ``get_entries()``:

    entries = await (
        EntryQueryBuilder(db, user.id)
        .with_status(EntryStatus.UNREAD)
        .with_globally_visible()
        .with_sorting(user.entry_order, user.entry_direction)
        .with_sorting("id", user.entry_direction)
        .after_published_date(window.after)
        .get_entries()
    )
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from feedbuckets.domain.enums import EntryStatus, SortDirection
from feedbuckets.infrastructure.persistence.models.entry import Entry
from feedbuckets.infrastructure.persistence.models.feed import Feed
from feedbuckets.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SORT_COLUMN = "published_at"

SORTABLE_COLUMNS: dict[str, Any] = {
    "id": Entry.id,
    "published_at": Entry.published_at,
    "created_at": Entry.created_at,
    "changed_at": Entry.changed_at,
    "status": Entry.status,
    "title": Entry.title,
    "author": Entry.author,
}


def to_utc(moment: datetime) -> datetime:
    # SQLite stores naive timestamps; every stored and bound value is UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class EntryQueryBuilder:
    """Builds count and fetch queries over one user's entries"""

    def __init__(self, db: AsyncSession, user_id: str):
        self.db = db
        self.user_id = user_id
        self._conditions: list[ColumnElement[bool]] = [Entry.user_id == user_id]
        self._order_by: list[Any] = []
        self._globally_visible = False

    def with_status(self, status: EntryStatus | str) -> "EntryQueryBuilder":
        self._conditions.append(Entry.status == EntryStatus(status).value)
        return self

    def with_globally_visible(self) -> "EntryQueryBuilder":
        """Exclude entries of feeds hidden from aggregate views"""
        self._globally_visible = True
        return self

    def with_sorting(self, column: str, direction: SortDirection | str) -> "EntryQueryBuilder":
        """Append a sort clause; clauses apply in call order"""
        sort_column = SORTABLE_COLUMNS.get(column)
        if sort_column is None:
            logger.warning(f"Unsupported sort column '{column}', using {DEFAULT_SORT_COLUMN}")
            sort_column = SORTABLE_COLUMNS[DEFAULT_SORT_COLUMN]

        if str(getattr(direction, "value", direction)).lower() == SortDirection.DESC.value:
            self._order_by.append(sort_column.desc())
        else:
            self._order_by.append(sort_column.asc())
        return self

    def after_published_date(self, moment: datetime) -> "EntryQueryBuilder":
        """Inclusive lower bound on the publication date"""
        self._conditions.append(Entry.published_at >= to_utc(moment))
        return self

    def before_published_date(self, moment: datetime) -> "EntryQueryBuilder":
        """Exclusive upper bound on the publication date"""
        self._conditions.append(Entry.published_at < to_utc(moment))
        return self

    def _apply_filters(self, stmt: Select) -> Select:
        if self._globally_visible:
            stmt = stmt.join(Feed, Entry.feed_id == Feed.id).where(Feed.hide_globally.is_(False))
        return stmt.where(*self._conditions)

    async def count_entries(self) -> int:
        stmt = self._apply_filters(select(func.count(Entry.id)).select_from(Entry))
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def get_entries(self) -> list[Entry]:
        stmt = self._apply_filters(select(Entry)).order_by(*self._order_by)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
