"""
Review CRUD operations.

Dependencies: sqlalchemy, resourcehub.boundary.db.models
System role: Review persistence operations
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.boundary.db.CRUD.base_crud import BaseCRUD
from resourcehub.boundary.db.models.review_model import ReviewModel
from resourcehub.boundary.db.models.user_model import UserModel


class ReviewCRUD(BaseCRUD[ReviewModel]):
    """CRUD operations for ReviewModel."""

    def __init__(self) -> None:
        super().__init__(ReviewModel)

    async def get_for_user(
        self,
        session: AsyncSession,
        resource_id: UUID,
        user_id: UUID,
    ) -> ReviewModel | None:
        stmt = select(ReviewModel).where(
            ReviewModel.resource_id == resource_id,
            ReviewModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_resource(
        self,
        session: AsyncSession,
        resource_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[list[tuple[ReviewModel, str | None]], int]:
        """
        Reviews of a resource, newest first, with reviewer names.

        Returns:
            ([(review, user_name), ...], total)
        """
        stmt = (
            select(ReviewModel, UserModel.name)
            .outerjoin(UserModel, UserModel.id == ReviewModel.user_id)
            .where(ReviewModel.resource_id == resource_id)
            .order_by(ReviewModel.created_at.desc(), ReviewModel.id)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        rows = [(review, name) for review, name in result.all()]
        return rows, await self.count(session, ReviewModel.resource_id == resource_id)

    async def rating_summary(self, session: AsyncSession, resource_id: UUID) -> tuple[float | None, int]:
        """
        Average rating (1 decimal) and review count for a resource.

        Returns:
            (average or None when unreviewed, count)
        """
        stmt = select(func.avg(ReviewModel.rating), func.count(ReviewModel.id)).where(
            ReviewModel.resource_id == resource_id
        )
        average, count = (await session.execute(stmt)).one()
        if not count:
            return None, 0
        return round(float(average), 1), int(count)


review_crud = ReviewCRUD()
