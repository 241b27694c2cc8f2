"""
Bucketed unread view use case.

Counts unread, globally visible entries for every bucket of the configured
scheme and fetches the entries of the selected bucket (or of all buckets).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from feedbuckets.domain.buckets import ALL_BUCKETS, BucketScheme
from feedbuckets.domain.enums import BucketSchemeName, EntryStatus
from feedbuckets.domain.value_objects import TimeWindow
from feedbuckets.shared import timezone
from feedbuckets.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from feedbuckets.application.interfaces.repositories import (
        IEntryQuery,
        IEntryRepository,
        IFeedRepository,
    )
    from feedbuckets.infrastructure.persistence.models.entry import Entry
    from feedbuckets.infrastructure.persistence.models.user import User

logger = get_logger(__name__)


@dataclass
class BucketSummary:
    """Count and, when fetched, entries of one bucket"""

    name: str
    window: TimeWindow
    count: int
    entries: list[Entry] | None = None

    @property
    def is_fetched(self) -> bool:
        return self.entries is not None


@dataclass
class BucketedView:
    """Result of the bucketed unread view"""

    scheme: BucketSchemeName
    reference: datetime
    selected: str
    buckets: list[BucketSummary] = field(default_factory=list)
    count_error_feeds: int = 0

    @property
    def counts(self) -> dict[str, int]:
        return {bucket.name: bucket.count for bucket in self.buckets}

    @property
    def entries(self) -> dict[str, list[Entry]]:
        """Entries per fetched bucket"""
        return {
            bucket.name: bucket.entries for bucket in self.buckets if bucket.entries is not None
        }

    @property
    def total_unread(self) -> int:
        return sum(bucket.count for bucket in self.buckets)


class BucketedViewService:
    """Read path of the bucketed view; never mutates entries"""

    def __init__(
        self,
        entry_repo: IEntryRepository,
        scheme: BucketScheme,
        feed_repo: IFeedRepository | None = None,
        clock: Callable[[str | None], datetime] = timezone.now,
    ) -> None:
        self.entry_repo = entry_repo
        self.scheme = scheme
        self.feed_repo = feed_repo
        self.clock = clock

    def resolve_selector(self, selector: str | None) -> str:
        """Missing selector means the scheme's default bucket; unknown ones mean all"""
        if selector is None:
            return self.scheme.default_bucket
        return self.scheme.resolve_selector(selector)

    async def get_bucketed_view(self, user: User, selector: str | None = None) -> BucketedView:
        """
        Build the bucketed view for a user.

        Counts are computed for every bucket; entries are fetched only for
        the selected bucket, or for every bucket when the selector is ``all``
        or unrecognised. Storage calls run one after another and the first
        failure propagates, so callers never see a partial view.

        Args:
            user: User whose timezone and sort preferences apply
            selector: Bucket name, ``all``, or None for the scheme default

        Returns:
            BucketedView with per-bucket counts and entries
        """
        selected = self.resolve_selector(selector)
        reference = self.clock(user.timezone)
        bucket_set = self.scheme.calculate(reference)

        view = BucketedView(scheme=bucket_set.scheme, reference=reference, selected=selected)

        for bucket in bucket_set:
            count = await self._unread_query(user.id, bucket.window).count_entries()
            summary = BucketSummary(name=bucket.name, window=bucket.window, count=count)

            if selected in (ALL_BUCKETS, bucket.name):
                summary.entries = await (
                    self._unread_query(user.id, bucket.window)
                    .with_sorting(user.entry_order, user.entry_direction)
                    .with_sorting("id", user.entry_direction)
                    .get_entries()
                )

            logger.debug(f"Bucket '{bucket.name}' for user {user.id}: {count} unread")
            view.buckets.append(summary)

        if self.feed_repo is not None:
            view.count_error_feeds = await self.feed_repo.count_feeds_with_errors(user.id)

        return view

    def _unread_query(self, user_id: str, window: TimeWindow) -> IEntryQuery:
        query = self.entry_repo.new_query(user_id)
        query.with_status(EntryStatus.UNREAD)
        query.with_globally_visible()
        if window.after is not None:
            query.after_published_date(window.after)
        if window.before is not None:
            query.before_published_date(window.before)
        return query
