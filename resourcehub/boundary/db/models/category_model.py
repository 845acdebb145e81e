"""
Category ORM model.

Groups resources for browsing. Resources reference categories by slug.

Dependencies: sqlalchemy, resourcehub.boundary.db.base
System role: Category persistence
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from resourcehub.boundary.db.base import Base, TimestampMixin, UUIDMixin


class CategoryModel(Base, UUIDMixin, TimestampMixin):
    """
    Category ORM model.

    Attributes:
        slug: Unique URL-safe key referenced by resources.category
        name: Display name
        description: Short blurb
        icon: Icon identifier used by clients
        count: Number of approved resources in the category
        featured: Highlighted on the landing page
    """

    __tablename__ = "categories"

    slug: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    icon: Mapped[str] = mapped_column(String(64), nullable=False, default="folder")
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
