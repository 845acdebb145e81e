"""
Resource ORM model.

Represents a creator-uploaded downloadable item with price, category and
approval status. The file itself lives in object storage under file_key.

Dependencies: sqlalchemy, resourcehub.boundary.db.base
System role: Resource persistence for the catalog
"""

import enum
from decimal import Decimal
from uuid import UUID

from sqlalchemy import BigInteger, Boolean, Enum, ForeignKey, Integer, JSON, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resourcehub.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ResourceStatus(str, enum.Enum):
    """
    Resource moderation states.

    PENDING: Uploaded or edited, awaiting admin review
    APPROVED: Listed publicly and purchasable
    REJECTED: Declined by an admin
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ResourceModel(Base, UUIDMixin, TimestampMixin):
    """
    Resource ORM model.

    Attributes:
        title, description: Listing text
        price: Price in currency units (2 decimals)
        category: Category slug; None when its category was deleted
        creator_id: Owning user
        tags: List of tag strings
        thumbnail: Public thumbnail URL
        thumbnail_key: Storage key of the thumbnail object
        file_key: Storage key of the downloadable file
        file_name, file_type, file_size: Original file metadata
        status: ResourceStatus enum
        downloads, views: Counters
        featured: Highlighted by admins
    """

    __tablename__ = "resources"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    category: Mapped[str | None] = mapped_column(
        ForeignKey("categories.slug", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
        index=True,
    )
    creator_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    thumbnail: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)
    thumbnail_key: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)
    file_key: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)
    file_name: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    file_type: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    file_size: Mapped[int | None] = mapped_column(BigInteger, nullable=True, default=None)

    status: Mapped[ResourceStatus] = mapped_column(
        Enum(ResourceStatus, native_enum=False),
        nullable=False,
        default=ResourceStatus.PENDING,
        index=True,
    )
    downloads: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    creator = relationship("UserModel", back_populates="resources")
