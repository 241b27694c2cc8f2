from collections.abc import Callable
from datetime import datetime

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from feedbuckets.application.use_cases.buckets.bucketed_view import BucketedViewService
from feedbuckets.application.use_cases.buckets.mark_bucket_read import MarkBucketReadService
from feedbuckets.domain.buckets import BucketScheme, get_scheme
from feedbuckets.domain.exceptions import UserNotFoundException
from feedbuckets.infrastructure.config.settings import get_settings
from feedbuckets.infrastructure.persistence.database import get_db, get_db_transactional
from feedbuckets.infrastructure.persistence.models.user import User
from feedbuckets.infrastructure.persistence.repositories import (
    EntryRepository,
    FeedRepository,
    UserRepository,
)
from feedbuckets.shared import timezone


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> User:
    """
    Resolve the requesting user from the identity header.

    Authentication happens upstream; this only loads the user record and
    its timezone and sort preferences. A missing or unknown user aborts the
    request before any bucket work starts.
    """
    user_id = request.headers.get(get_settings().user_header_name)
    if not user_id:
        raise UserNotFoundException(None)

    user = await UserRepository(db).get_by_id(user_id)
    if not user:
        raise UserNotFoundException(user_id)
    return user


def get_bucket_scheme() -> BucketScheme:
    """Deployment-wide bucket scheme shared by the view and mark-read paths"""
    return get_scheme(get_settings().bucket_scheme)


def get_clock() -> Callable[[str | None], datetime]:
    """Reference instant provider (overridable in tests)"""
    return timezone.now


async def get_bucketed_view_service(
    db: AsyncSession = Depends(get_db),
    scheme: BucketScheme = Depends(get_bucket_scheme),
    clock: Callable[[str | None], datetime] = Depends(get_clock),
) -> BucketedViewService:
    """Bucketed view service dependency (read-only session)"""
    return BucketedViewService(
        entry_repo=EntryRepository(db),
        scheme=scheme,
        feed_repo=FeedRepository(db),
        clock=clock,
    )


# Transactional dependencies for write operations
async def get_mark_bucket_read_service_transactional(
    db: AsyncSession = Depends(get_db_transactional),
    scheme: BucketScheme = Depends(get_bucket_scheme),
    clock: Callable[[str | None], datetime] = Depends(get_clock),
) -> MarkBucketReadService:
    """Mark-as-read service dependency with transaction management"""
    return MarkBucketReadService(entry_repo=EntryRepository(db), scheme=scheme, clock=clock)
