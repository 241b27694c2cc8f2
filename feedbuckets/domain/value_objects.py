from dataclasses import dataclass
from datetime import UTC, datetime


def _utc(moment: datetime) -> datetime:
    # Aware datetimes sharing a tzinfo compare on wall-clock time, so compare in UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


@dataclass(frozen=True)
class TimeWindow:
    """
    Value object for a half-open publication interval ``[after, before)``.

    ``after`` is inclusive and ``before`` is exclusive, so a timestamp that
    sits exactly on a shared boundary belongs to the newer window only.
    A missing bound means the window is unbounded on that side.
    """

    after: datetime | None = None
    before: datetime | None = None

    def __post_init__(self):
        for bound in (self.after, self.before):
            if bound is not None and bound.tzinfo is None:
                raise ValueError("Window bounds must be timezone-aware datetimes")

        if (
            self.after is not None
            and self.before is not None
            and _utc(self.after) > _utc(self.before)
        ):
            raise ValueError(f"Window start {self.after} is after window end {self.before}")

    @property
    def is_unbounded(self) -> bool:
        return self.after is None and self.before is None

    @property
    def is_empty(self) -> bool:
        return (
            self.after is not None
            and self.before is not None
            and _utc(self.after) == _utc(self.before)
        )

    def contains(self, moment: datetime) -> bool:
        """Check whether a timestamp falls inside the window (naive means UTC)"""
        moment = _utc(moment)
        if self.after is not None and moment < _utc(self.after):
            return False
        if self.before is not None and moment >= _utc(self.before):
            return False
        return True

    def as_utc(self) -> "TimeWindow":
        """Same window with both bounds normalized to UTC"""
        return TimeWindow(
            after=_utc(self.after) if self.after else None,
            before=_utc(self.before) if self.before else None,
        )
