"""
SQLAlchemy mixins for common model patterns.

These mixins provide reusable column definitions shared by the
user, feed and entry tables.
"""
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from feedbuckets.shared.utils.generators import generate_cuid


class CuidMixin:
    """
    Mixin for models using CUID as primary key.

    Provides:
        - id: String primary key with automatic CUID generation
    """

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class UserOwnedMixin:
    """
    Mixin for per-user models.

    Provides:
        - user_id: Foreign key to user table with cascade delete
    """

    @declared_attr
    def user_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("user.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class TimestampMixin:
    """
    Mixin for timestamp tracking.

    Provides:
        - created_at: Timestamp set on creation (server-side default)
        - updated_at: Timestamp updated on modification (server-side default + onupdate)
    """

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )
