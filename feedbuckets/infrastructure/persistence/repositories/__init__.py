""" Repository module for the persistence layer. """

from feedbuckets.infrastructure.persistence.repositories.base import BaseRepository
from feedbuckets.infrastructure.persistence.repositories.entry_query import EntryQueryBuilder
from feedbuckets.infrastructure.persistence.repositories.entry_repo import EntryRepository
from feedbuckets.infrastructure.persistence.repositories.feed_repo import FeedRepository
from feedbuckets.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "EntryQueryBuilder",
    "EntryRepository",
    "FeedRepository",
    "UserRepository",
]
