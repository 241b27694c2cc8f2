"""ORM models; importing this package registers every table on Base.metadata."""

from feedbuckets.infrastructure.persistence.models.entry import Entry
from feedbuckets.infrastructure.persistence.models.feed import Feed
from feedbuckets.infrastructure.persistence.models.user import User

__all__ = ["Entry", "Feed", "User"]
