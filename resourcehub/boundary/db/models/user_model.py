"""
User ORM model.

Represents an account on the marketplace: customers, creators and admins.
Profile, preferences and creator onboarding state live on the same row.

Dependencies: sqlalchemy, resourcehub.boundary.db.base
System role: Account persistence for authentication and moderation
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resourcehub.boundary.db.base import Base, TimestampMixin, UUIDMixin


class UserRole(str, enum.Enum):
    """
    Account roles.

    USER: Browses and purchases resources
    CREATOR: Uploads resources once approved
    ADMIN: Moderates resources, creators and users
    """

    USER = "user"
    CREATOR = "creator"
    ADMIN = "admin"


class UserStatus(str, enum.Enum):
    """Account standing set by admins."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    PENDING = "pending"


class CreatorStatus(str, enum.Enum):
    """
    Creator approval states.

    PENDING: Application submitted, awaiting admin review
    APPROVED: May upload resources
    REJECTED: Application declined; uploads blocked
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        email: Unique login email, stored lower-cased
        password_hash: PBKDF2 hash string
        name: Display name
        avatar: Public avatar URL
        avatar_key: Storage key of the current avatar object
        role: UserRole enum
        status: UserStatus enum
        creator_status: CreatorStatus enum, None for non-creators
        plan: Creator plan name (free/basic/premium/professional)
        bio, website: Profile text
        social: Social links (twitter, instagram, facebook, linkedin)
        settings: Preference overrides merged over defaults at read time
        last_login: Last successful login (UTC)

    Relationships:
        resources: One-to-many with ResourceModel (cascade on user removal)
        purchases: One-to-many with PurchaseModel
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    avatar: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)
    avatar_key: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)

    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, native_enum=False),
        nullable=False,
        default=UserRole.USER,
    )
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus, native_enum=False),
        nullable=False,
        default=UserStatus.ACTIVE,
    )
    creator_status: Mapped[CreatorStatus | None] = mapped_column(
        Enum(CreatorStatus, native_enum=False),
        nullable=True,
        default=None,
    )
    plan: Mapped[str] = mapped_column(String(32), nullable=False, default="free")

    bio: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    website: Mapped[str | None] = mapped_column(String(512), nullable=True, default=None)
    social: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    settings: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    resources = relationship(
        "ResourceModel",
        back_populates="creator",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    purchases = relationship(
        "PurchaseModel",
        back_populates="user",
        foreign_keys="PurchaseModel.user_id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
