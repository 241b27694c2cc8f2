"""
Range-scoped mark-as-read use case.

A concrete bucket is marked read through the range primitive using the
same scheme as the bucketed view. ``all`` (and any unrecognised selector)
goes through the storage's global primitive instead of an unbounded range.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from feedbuckets.domain.buckets import ALL_BUCKETS, BucketScheme
from feedbuckets.domain.value_objects import TimeWindow
from feedbuckets.shared import timezone
from feedbuckets.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from feedbuckets.application.interfaces.repositories import IEntryRepository
    from feedbuckets.infrastructure.persistence.models.user import User

logger = get_logger(__name__)


@dataclass(frozen=True)
class MarkReadResult:
    selector: str
    window: TimeWindow | None
    marked: int


class MarkBucketReadService:
    def __init__(
        self,
        entry_repo: IEntryRepository,
        scheme: BucketScheme,
        clock: Callable[[str | None], datetime] = timezone.now,
    ) -> None:
        self.entry_repo = entry_repo
        self.scheme = scheme
        self.clock = clock

    async def mark_bucket_read(self, user: User, selector: str) -> MarkReadResult:
        """
        Mark the unread entries of one bucket, or of everything, as read.

        Args:
            user: User whose entries are marked
            selector: Bucket name or ``all``; unrecognised values mean ``all``

        Returns:
            MarkReadResult with the applied selector and the number of entries changed
        """
        resolved = self.scheme.resolve_selector(selector)

        if resolved == ALL_BUCKETS:
            if selector != ALL_BUCKETS:
                logger.info(f"Unrecognised bucket '{selector}', marking all entries as read")
            marked = await self.entry_repo.mark_globally_visible_feeds_read(user.id)
            logger.info(f"Marked {marked} entries as read for user {user.id} (all)")
            return MarkReadResult(selector=ALL_BUCKETS, window=None, marked=marked)

        window = self.scheme.window_for(self.clock(user.timezone), resolved)
        marked = await self.entry_repo.mark_entries_read_in_range(
            user.id, window.after, window.before
        )
        logger.info(
            f"Marked {marked} entries as read for user {user.id} "
            f"(bucket={resolved}, after={window.after}, before={window.before})"
        )
        return MarkReadResult(selector=resolved, window=window, marked=marked)
