"""In-memory entry storage for exercising the bucket use cases without a database"""

from dataclasses import dataclass
from datetime import UTC, datetime

import pytest

from feedbuckets.domain.enums import EntryStatus

REFERENCE_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


@dataclass
class FakeEntry:
    id: str
    published_at: datetime
    status: str = EntryStatus.UNREAD.value
    hidden: bool = False
    title: str = ""


@dataclass
class FakeUser:
    id: str = "user-1"
    timezone: str = "UTC"
    entry_order: str = "published_at"
    entry_direction: str = "asc"


class FakeEntryQuery:
    """Evaluates the chainable query contract against a list of FakeEntry"""

    def __init__(self, repo: "FakeEntryRepository"):
        self.repo = repo
        self.status: str | None = None
        self.globally_visible = False
        self.after: datetime | None = None
        self.before: datetime | None = None
        self.sorting: list[tuple[str, str]] = []

    def with_status(self, status):
        self.status = EntryStatus(status).value
        return self

    def with_globally_visible(self):
        self.globally_visible = True
        return self

    def with_sorting(self, column, direction):
        self.sorting.append((column, direction))
        return self

    def after_published_date(self, moment):
        self.after = moment
        return self

    def before_published_date(self, moment):
        self.before = moment
        return self

    def _matches(self, entry: FakeEntry) -> bool:
        if self.status is not None and entry.status != self.status:
            return False
        if self.globally_visible and entry.hidden:
            return False
        if self.after is not None and entry.published_at < self.after:
            return False
        if self.before is not None and entry.published_at >= self.before:
            return False
        return True

    async def count_entries(self) -> int:
        self.repo.calls.append(("count", self))
        self.repo.maybe_fail()
        return sum(1 for entry in self.repo.entries if self._matches(entry))

    async def get_entries(self) -> list[FakeEntry]:
        self.repo.calls.append(("fetch", self))
        self.repo.maybe_fail()
        matches = [entry for entry in self.repo.entries if self._matches(entry)]
        for column, direction in reversed(self.sorting):
            matches.sort(key=lambda e: getattr(e, column), reverse=direction == "desc")
        return matches


class FakeEntryRepository:
    def __init__(self, entries: list[FakeEntry] | None = None):
        self.entries = list(entries or [])
        self.calls: list[tuple] = []
        self.fail_after: int | None = None

    def maybe_fail(self):
        if self.fail_after is not None and len(self.calls) > self.fail_after:
            raise RuntimeError("storage unavailable")

    def new_query(self, user_id: str) -> FakeEntryQuery:
        return FakeEntryQuery(self)

    def _mark(self, predicate) -> int:
        self.maybe_fail()
        marked = 0
        for entry in self.entries:
            if entry.status == EntryStatus.UNREAD.value and not entry.hidden and predicate(entry):
                entry.status = EntryStatus.READ.value
                marked += 1
        return marked

    async def mark_entries_read_in_range(self, user_id, after, before) -> int:
        self.calls.append(("mark_range", after, before))
        return self._mark(
            lambda e: (after is None or e.published_at >= after)
            and (before is None or e.published_at < before)
        )

    async def mark_globally_visible_feeds_read(self, user_id) -> int:
        self.calls.append(("mark_all",))
        return self._mark(lambda e: True)

    def count_unread_visible(self) -> int:
        return sum(
            1
            for entry in self.entries
            if entry.status == EntryStatus.UNREAD.value and not entry.hidden
        )


@pytest.fixture
def fake_user():
    return FakeUser()


@pytest.fixture
def fixed_clock():
    return lambda tz_name: REFERENCE_NOW


@pytest.fixture
def entry_repo():
    """Entries spread over every rolling bucket, plus edge cases"""
    return FakeEntryRepository(
        [
            FakeEntry("e-future", datetime(2024, 6, 16, 9, 0, tzinfo=UTC)),
            FakeEntry("e-23h", datetime(2024, 6, 14, 13, 0, tzinfo=UTC)),
            FakeEntry("e-24h", datetime(2024, 6, 14, 12, 0, tzinfo=UTC)),  # boundary
            FakeEntry("e-25h", datetime(2024, 6, 14, 11, 0, tzinfo=UTC)),
            FakeEntry("e-3d", datetime(2024, 6, 12, 12, 0, tzinfo=UTC)),
            FakeEntry("e-10d", datetime(2024, 6, 5, 12, 0, tzinfo=UTC)),
            FakeEntry("e-60d", datetime(2024, 4, 16, 12, 0, tzinfo=UTC)),
            FakeEntry("e-read", datetime(2024, 6, 15, 11, 0, tzinfo=UTC), status="read"),
            FakeEntry("e-hidden", datetime(2024, 6, 15, 10, 0, tzinfo=UTC), hidden=True),
        ]
    )
