"""
Creator application ORM model.

Records what a user submitted when asking to become a creator.

Dependencies: sqlalchemy, resourcehub.boundary.db.base
System role: Creator onboarding persistence
"""

import enum
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from resourcehub.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ApplicationStatus(str, enum.Enum):
    """Review state of a creator application."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CreatorApplicationModel(Base, UUIDMixin, TimestampMixin):
    """Creator application submitted by a user."""

    __tablename__ = "creator_applications"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    portfolio_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    experience: Mapped[str | None] = mapped_column(Text, nullable=True)
    application_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    plan: Mapped[str] = mapped_column(String(32), nullable=False, default="free")
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(ApplicationStatus, native_enum=False),
        nullable=False,
        default=ApplicationStatus.PENDING,
    )
