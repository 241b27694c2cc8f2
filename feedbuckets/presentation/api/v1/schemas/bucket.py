from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from feedbuckets.application.use_cases.buckets.bucketed_view import (
        BucketedView,
        BucketSummary,
    )
    from feedbuckets.application.use_cases.buckets.mark_bucket_read import MarkReadResult


class EntryResponse(BaseModel):
    id: str
    feed_id: str
    title: str
    url: str
    author: str | None = None
    status: str
    published_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BucketResponse(BaseModel):
    name: str
    after: datetime | None = None
    before: datetime | None = None
    count: int
    entries: list[EntryResponse] | None = None

    @classmethod
    def from_summary(cls, summary: BucketSummary) -> BucketResponse:
        return cls(
            name=summary.name,
            after=summary.window.after,
            before=summary.window.before,
            count=summary.count,
            entries=(
                [EntryResponse.model_validate(entry) for entry in summary.entries]
                if summary.entries is not None
                else None
            ),
        )


class BucketedViewResponse(BaseModel):
    scheme: str
    reference: datetime
    selected: str
    buckets: list[BucketResponse]
    total_unread: int
    count_error_feeds: int

    @classmethod
    def from_view(cls, view: BucketedView) -> BucketedViewResponse:
        return cls(
            scheme=view.scheme.value,
            reference=view.reference,
            selected=view.selected,
            buckets=[BucketResponse.from_summary(summary) for summary in view.buckets],
            total_unread=view.total_unread,
            count_error_feeds=view.count_error_feeds,
        )


class MarkReadResponse(BaseModel):
    status: str = "OK"
    selector: str
    marked: int

    @classmethod
    def from_result(cls, result: MarkReadResult) -> MarkReadResponse:
        return cls(selector=result.selector, marked=result.marked)
