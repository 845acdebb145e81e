"""
Analytics event ORM model.

Append-only log of user activity used for dashboards.

Dependencies: sqlalchemy, resourcehub.boundary.db.base
System role: Activity tracking persistence
"""

import enum
from uuid import UUID

from sqlalchemy import ForeignKey, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from resourcehub.boundary.db.base import Base, TimestampMixin, UUIDMixin


class AnalyticsEventType(str, enum.Enum):
    """Tracked event names."""

    PAGE_VIEW = "page_view"
    RESOURCE_VIEW = "resource_view"
    RESOURCE_DOWNLOAD = "resource_download"
    RESOURCE_PURCHASE = "resource_purchase"
    SEARCH = "search"
    UPLOAD_RESOURCE = "upload_resource"
    CREATOR_APPLICATION = "creator_application"
    USER_REGISTRATION = "user_registration"
    USER_LOGIN = "user_login"
    UPDATE_PROFILE = "update_profile"
    UPDATE_SETTINGS = "update_settings"


class AnalyticsEventModel(Base, UUIDMixin, TimestampMixin):
    """Analytics event ORM model."""

    __tablename__ = "analytics_events"

    event_type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    user_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    resource_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("resources.id", ondelete="SET NULL"),
        nullable=True,
    )
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
