"""Domain enumerations for the FeedBuckets application."""

from enum import Enum


class EntryStatus(str, Enum):
    """Entry read status"""

    UNREAD = "unread"
    READ = "read"
    REMOVED = "removed"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class SortDirection(str, Enum):
    """Sort direction for entry listings"""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [direction.value for direction in cls]


class BucketSchemeName(str, Enum):
    """Partitioning schemes for the bucketed unread view"""

    ROLLING = "rolling"
    CALENDAR = "calendar"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [scheme.value for scheme in cls]
