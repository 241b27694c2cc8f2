from sqlalchemy import Boolean, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from feedbuckets.infrastructure.persistence.database import Base
from feedbuckets.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    UserOwnedMixin,
)


class Feed(CuidMixin, UserOwnedMixin, TimestampMixin, Base):
    """
    Subscribed feed.

    Feeds with ``hide_globally`` set are excluded from aggregate views
    (and from the bucketed view and its mark-as-read operations).
    """

    __tablename__ = "feed"

    title: Mapped[str] = mapped_column(String, nullable=False)
    feed_url: Mapped[str] = mapped_column(String, nullable=False)
    hide_globally: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    parsing_error_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("user_id", "feed_url", name="uq_user_feed_url"),
        Index("ix_feed_user_hidden", "user_id", "hide_globally"),
    )
