"""
Report ORM model.

User-filed complaints about resources, creators or anything else,
triaged by admins.

Dependencies: sqlalchemy, resourcehub.boundary.db.base
System role: Moderation queue persistence
"""

import enum
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from resourcehub.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ReportType(str, enum.Enum):
    """What a report is about."""

    RESOURCE = "resource"
    USER = "user"
    OTHER = "other"


class ReportStatus(str, enum.Enum):
    """Admin triage state."""

    PENDING = "pending"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class ReportModel(Base, UUIDMixin, TimestampMixin):
    """Report ORM model."""

    __tablename__ = "reports"

    user_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    type: Mapped[ReportType] = mapped_column(Enum(ReportType, native_enum=False), nullable=False)
    resource_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("resources.id", ondelete="SET NULL"),
        nullable=True,
    )
    creator_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    reason: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[ReportStatus] = mapped_column(
        Enum(ReportStatus, native_enum=False),
        nullable=False,
        default=ReportStatus.PENDING,
        index=True,
    )
