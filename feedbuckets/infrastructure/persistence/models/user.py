from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from feedbuckets.domain.enums import SortDirection
from feedbuckets.infrastructure.persistence.database import Base
from feedbuckets.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from feedbuckets.shared.timezone import DEFAULT_TIMEZONE


class User(CuidMixin, TimestampMixin, Base):
    """
    Feed reader account with its display preferences.

    ``timezone`` anchors the reference instant of every bucketed request;
    ``entry_order`` and ``entry_direction`` drive entry sorting.
    """

    __tablename__ = "user"

    username: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    timezone: Mapped[str] = mapped_column(String, nullable=False, default=DEFAULT_TIMEZONE)
    entry_order: Mapped[str] = mapped_column(String, nullable=False, default="published_at")
    entry_direction: Mapped[str] = mapped_column(
        String, nullable=False, default=SortDirection.ASC.value
    )
