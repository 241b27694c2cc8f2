from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feedbuckets.domain.enums import EntryStatus
from feedbuckets.infrastructure.persistence.database import Base
from feedbuckets.infrastructure.persistence.models.feed import Feed
from feedbuckets.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    UserOwnedMixin,
)


class Entry(CuidMixin, UserOwnedMixin, TimestampMixin, Base):
    """
    Feed entry as seen by the bucketed view.

    Only ``published_at``, ``status`` and the owning feed's
    ``hide_globally`` flag matter to bucketing; the rest is display data.
    """

    __tablename__ = "entry"

    feed_id: Mapped[str] = mapped_column(
        String, ForeignKey("feed.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String, nullable=False, default="")
    url: Mapped[str] = mapped_column(String, nullable=False, default="")
    author: Mapped[str | None] = mapped_column(String)
    content: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=EntryStatus.UNREAD.value, index=True
    )
    published_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    changed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    feed: Mapped[Feed] = relationship(lazy="joined")

    __table_args__ = (
        Index("ix_entry_user_status_published", "user_id", "status", "published_at"),
    )
