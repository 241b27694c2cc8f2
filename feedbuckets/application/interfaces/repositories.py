"""
Repository interfaces (ports) for the application layer.

The bucket use cases depend only on these protocols; the SQLAlchemy
repositories in the infrastructure layer satisfy them structurally.
Following Dependency Inversion Principle (DIP).
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from feedbuckets.domain.enums import EntryStatus, SortDirection
    from feedbuckets.infrastructure.persistence.models.entry import Entry


class IEntryQuery(Protocol):
    """Protocol for a chainable entry query (DIP)"""

    def with_status(self, status: EntryStatus | str) -> IEntryQuery:
        """Restrict to entries with the given read status"""
        ...

    def with_globally_visible(self) -> IEntryQuery:
        """Exclude entries of feeds hidden from aggregate views"""
        ...

    def with_sorting(self, column: str, direction: SortDirection | str) -> IEntryQuery:
        """Append a sort clause; clauses apply in call order"""
        ...

    def after_published_date(self, moment: datetime) -> IEntryQuery:
        """Inclusive lower publication bound"""
        ...

    def before_published_date(self, moment: datetime) -> IEntryQuery:
        """Exclusive upper publication bound"""
        ...

    async def count_entries(self) -> int:
        ...

    async def get_entries(self) -> list[Entry]:
        ...


class IEntryRepository(Protocol):
    """Protocol for entry repository (DIP)"""

    def new_query(self, user_id: str) -> IEntryQuery:
        """Start a query over the user's entries"""
        ...

    async def mark_entries_read_in_range(
        self, user_id: str, after: datetime | None, before: datetime | None
    ) -> int:
        """Mark unread globally visible entries in ``[after, before)`` as read"""
        ...

    async def mark_globally_visible_feeds_read(self, user_id: str) -> int:
        """Mark all unread entries of globally visible feeds as read"""
        ...


class IFeedRepository(Protocol):
    """Protocol for feed repository (DIP)"""

    async def count_feeds_with_errors(self, user_id: str) -> int:
        ...
