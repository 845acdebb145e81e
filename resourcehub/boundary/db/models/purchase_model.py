"""
Purchase ORM model.

Records a user buying a resource. Title and creator are snapshotted so the
purchase history and creator revenue survive resource deletion.

Dependencies: sqlalchemy, resourcehub.boundary.db.base
System role: Sales persistence
"""

import enum
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resourcehub.boundary.db.base import Base, TimestampMixin, UUIDMixin


class PurchaseStatus(str, enum.Enum):
    """
    Purchase lifecycle states.

    PENDING: Created, payment not confirmed
    COMPLETED: Paid; grants download access
    FAILED: Payment failed
    REFUNDED: Reversed by an admin; no longer grants access
    """

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PurchaseModel(Base, UUIDMixin, TimestampMixin):
    """Purchase ORM model."""

    __tablename__ = "purchases"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    resource_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("resources.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    creator_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    resource_title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[PurchaseStatus] = mapped_column(
        Enum(PurchaseStatus, native_enum=False),
        nullable=False,
        default=PurchaseStatus.PENDING,
    )
    payment_method: Mapped[str] = mapped_column(String(64), nullable=False, default="card")
    payment_id: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    refunded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user = relationship("UserModel", back_populates="purchases", foreign_keys=[user_id])
