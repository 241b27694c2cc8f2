from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.params import Query

from feedbuckets.application.use_cases.buckets.bucketed_view import BucketedViewService
from feedbuckets.application.use_cases.buckets.mark_bucket_read import MarkBucketReadService
from feedbuckets.domain.buckets import ALL_BUCKETS
from feedbuckets.infrastructure.persistence.models.user import User
from feedbuckets.presentation.api.dependencies import (
    get_bucketed_view_service,
    get_current_user,
    get_mark_bucket_read_service_transactional,
)
from feedbuckets.presentation.api.v1.schemas.bucket import (
    BucketedViewResponse,
    MarkReadResponse,
)

router = APIRouter()


@router.get("/buckets", response_model=BucketedViewResponse)
async def get_bucketed_entries(
    user: Annotated[User, Depends(get_current_user)],
    service: Annotated[BucketedViewService, Depends(get_bucketed_view_service)],
    bucket: Annotated[
        str | None,
        Query(description="Bucket to list entries for, or 'all'"),
    ] = None,
) -> BucketedViewResponse:
    """
    Unread entries grouped into date buckets.

    Counts are returned for every bucket. Entries are returned for the
    selected bucket only, or for every bucket when `bucket` is `all` or
    not a known bucket name. Without `bucket` the scheme's default applies.
    """
    view = await service.get_bucketed_view(user, bucket)
    return BucketedViewResponse.from_view(view)


@router.put("/buckets/mark-read", response_model=MarkReadResponse)
async def mark_bucket_as_read(
    user: Annotated[User, Depends(get_current_user)],
    service: Annotated[
        MarkBucketReadService, Depends(get_mark_bucket_read_service_transactional)
    ],
    bucket: Annotated[
        str,
        Query(description="Bucket to mark as read, or 'all'"),
    ] = ALL_BUCKETS,
) -> MarkReadResponse:
    """Mark the unread entries of one bucket, or of every globally visible feed, as read"""
    result = await service.mark_bucket_read(user, bucket)
    return MarkReadResponse.from_result(result)
