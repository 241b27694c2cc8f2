"""
Bucket schemes: partitioning the timeline into named publication windows.

A scheme turns a reference instant (already in the user's timezone) into a
``BucketSet``: an ordered, newest-first sequence of half-open windows that
covers the whole timeline with no gaps and no overlaps. Bucket ``i`` spans
``[boundary[i], boundary[i - 1])``; the newest bucket is unbounded towards
the future and the oldest one towards the past.

Two schemes are provided and they are not interchangeable:

- ``RollingWindowScheme``: fixed offsets from the reference instant
  (24h, 48h, 7 days, 30 days), measured in absolute time.
- ``CalendarScheme``: local midnight, local Sunday week start and local
  month start.

A deployment picks one scheme and uses it for both the view and the
mark-as-read path, so marking "today" as read touches exactly the entries
"today" displays.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime, time, timedelta
from typing import ClassVar

from feedbuckets.domain.enums import BucketSchemeName
from feedbuckets.domain.value_objects import TimeWindow

ALL_BUCKETS = "all"


@dataclass(frozen=True)
class Bucket:
    """A named publication window"""

    name: str
    window: TimeWindow

    def contains(self, moment: datetime) -> bool:
        return self.window.contains(moment)


@dataclass(frozen=True)
class BucketSet:
    """Ordered newest-first buckets computed for one reference instant"""

    scheme: BucketSchemeName
    reference: datetime
    buckets: tuple[Bucket, ...]

    def __iter__(self) -> Iterator[Bucket]:
        return iter(self.buckets)

    def __len__(self) -> int:
        return len(self.buckets)

    @property
    def names(self) -> list[str]:
        return [bucket.name for bucket in self.buckets]

    def get(self, name: str) -> Bucket | None:
        for bucket in self.buckets:
            if bucket.name == name:
                return bucket
        return None

    def locate(self, moment: datetime) -> Bucket:
        """Return the single bucket whose window contains the timestamp"""
        for bucket in self.buckets:
            if bucket.contains(moment):
                return bucket
        # Unreachable while the partition invariant holds
        raise LookupError(f"No bucket contains {moment.isoformat()}")


class BucketScheme(ABC):
    """Base class for partitioning schemes"""

    name: ClassVar[BucketSchemeName]
    bucket_names: ClassVar[tuple[str, ...]]
    default_bucket: ClassVar[str]

    @abstractmethod
    def boundaries(self, now: datetime) -> list[datetime]:
        """
        Boundary instants, newest first.

        Must return exactly ``len(bucket_names) - 1`` instants in
        non-increasing order.
        """

    def calculate(self, now: datetime) -> BucketSet:
        """Build the bucket set for a reference instant"""
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)

        edges = self.boundaries(now)
        if len(edges) != len(self.bucket_names) - 1:
            raise ValueError(
                f"{type(self).__name__} produced {len(edges)} boundaries "
                f"for {len(self.bucket_names)} buckets"
            )

        buckets = []
        for index, bucket_name in enumerate(self.bucket_names):
            after = edges[index] if index < len(edges) else None
            before = edges[index - 1] if index > 0 else None
            buckets.append(Bucket(bucket_name, TimeWindow(after=after, before=before)))

        return BucketSet(scheme=self.name, reference=now, buckets=tuple(buckets))

    def resolve_selector(self, selector: str | None) -> str:
        """
        Map a client selector onto the vocabulary.

        Unknown values resolve to ``all``; callers decide what ``all`` means.
        """
        if selector is None:
            return ALL_BUCKETS
        normalized = selector.strip().lower()
        if normalized in self.bucket_names:
            return normalized
        return ALL_BUCKETS

    def window_for(self, now: datetime, bucket_name: str) -> TimeWindow:
        """Window of a single bucket"""
        bucket = self.calculate(now).get(bucket_name)
        if bucket is None:
            raise KeyError(f"Unknown bucket '{bucket_name}' for scheme '{self.name.value}'")
        return bucket.window


class RollingWindowScheme(BucketScheme):
    name = BucketSchemeName.ROLLING
    bucket_names = ("today", "last2d", "last7d", "last30d", "earlier")
    default_bucket = "today"

    OFFSETS: ClassVar[tuple[timedelta, ...]] = (
        timedelta(hours=24),
        timedelta(hours=48),
        timedelta(days=7),
        timedelta(days=30),
    )

    def boundaries(self, now: datetime) -> list[datetime]:
        # Offsets are absolute durations, not wall-clock arithmetic
        instant = now.astimezone(UTC)
        return [(instant - offset).astimezone(now.tzinfo) for offset in self.OFFSETS]


class CalendarScheme(BucketScheme):
    name = BucketSchemeName.CALENDAR
    bucket_names = ("today", "yesterday", "week", "month", "earlier")
    default_bucket = "today"

    def boundaries(self, now: datetime) -> list[datetime]:
        today = now.date()
        # date.weekday() is Monday=0, weeks start on Sunday
        days_since_sunday = (today.weekday() + 1) % 7

        edges = [
            self._midnight(today, now),
            self._midnight(today - timedelta(days=1), now),
            self._midnight(today - timedelta(days=days_since_sunday), now),
            self._midnight(today.replace(day=1), now),
        ]

        # On Sundays and at the start of a month the calendar boundaries cross;
        # clamp so older buckets collapse to empty instead of overlapping.
        for index in range(1, len(edges)):
            edges[index] = min(edges[index], edges[index - 1], key=lambda d: d.timestamp())
        return edges

    @staticmethod
    def _midnight(day, now: datetime) -> datetime:
        return datetime.combine(day, time.min, tzinfo=now.tzinfo)


SCHEMES: dict[BucketSchemeName, BucketScheme] = {
    BucketSchemeName.ROLLING: RollingWindowScheme(),
    BucketSchemeName.CALENDAR: CalendarScheme(),
}


def get_scheme(name: str | BucketSchemeName) -> BucketScheme:
    """Look up a scheme by name"""
    try:
        return SCHEMES[BucketSchemeName(name)]
    except ValueError as e:
        raise ValueError(
            f"Unknown bucket scheme '{name}'. Must be one of: {', '.join(BucketSchemeName.values())}"
        ) from e
