"""
Review ORM model.

Dependencies: sqlalchemy, resourcehub.boundary.db.base
System role: Resource rating persistence
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from resourcehub.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ReviewModel(Base, UUIDMixin, TimestampMixin):
    """
    A user's rating of a resource.

    Constraints:
        (resource_id, user_id): one review per user per resource
    """

    __tablename__ = "reviews"
    __table_args__ = (UniqueConstraint("resource_id", "user_id", name="uq_review_resource_user"),)

    resource_id: Mapped[UUID] = mapped_column(
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False, default="")
