"""
Category CRUD operations.

Dependencies: sqlalchemy, resourcehub.boundary.db.models
System role: Category persistence operations
"""

from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.boundary.db.CRUD.base_crud import BaseCRUD
from resourcehub.boundary.db.models.category_model import CategoryModel
from resourcehub.core.listing import CategorySort

_SORT_ORDER = {
    CategorySort.NAME_ASC: CategoryModel.name.asc(),
    CategorySort.NAME_DESC: CategoryModel.name.desc(),
    CategorySort.COUNT_ASC: CategoryModel.count.asc(),
    CategorySort.COUNT_DESC: CategoryModel.count.desc(),
}


class CategoryCRUD(BaseCRUD[CategoryModel]):
    """CRUD operations for CategoryModel keyed by slug."""

    def __init__(self) -> None:
        super().__init__(CategoryModel)

    async def get_by_slug(self, session: AsyncSession, slug: str) -> CategoryModel | None:
        stmt = select(CategoryModel).where(CategoryModel.slug == slug)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def slug_exists(self, session: AsyncSession, slug: str) -> bool:
        stmt = select(CategoryModel.id).where(CategoryModel.slug == slug)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_sorted(
        self,
        session: AsyncSession,
        sort: CategorySort = CategorySort.NAME_ASC,
        featured_only: bool = False,
    ) -> Sequence[CategoryModel]:
        """
        List categories in the requested order.

        Args:
            session: Async database session
            sort: Name or count, ascending or descending
            featured_only: Only return featured categories

        Returns:
            Sequence of CategoryModel
        """
        stmt = select(CategoryModel)
        if featured_only:
            stmt = stmt.where(CategoryModel.featured.is_(True))
        stmt = stmt.order_by(_SORT_ORDER[sort], CategoryModel.slug)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def set_count(self, session: AsyncSession, slug: str, count: int) -> None:
        """Store the approved-resource count for a category."""
        stmt = (
            update(CategoryModel)
            .where(CategoryModel.slug == slug)
            .values(count=count)
        )
        await session.execute(stmt)


category_crud = CategoryCRUD()
