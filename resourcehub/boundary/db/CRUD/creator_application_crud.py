"""
Creator application CRUD operations.

Dependencies: sqlalchemy, resourcehub.boundary.db.models
System role: Creator onboarding persistence operations
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.boundary.db.CRUD.base_crud import BaseCRUD
from resourcehub.boundary.db.models.creator_application_model import (
    ApplicationStatus,
    CreatorApplicationModel,
)


class CreatorApplicationCRUD(BaseCRUD[CreatorApplicationModel]):
    """CRUD operations for CreatorApplicationModel."""

    def __init__(self) -> None:
        super().__init__(CreatorApplicationModel)

    async def latest_pending(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> CreatorApplicationModel | None:
        """Most recent pending application of a user."""
        stmt = (
            select(CreatorApplicationModel)
            .where(
                CreatorApplicationModel.user_id == user_id,
                CreatorApplicationModel.status == ApplicationStatus.PENDING,
            )
            .order_by(CreatorApplicationModel.created_at.desc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


creator_application_crud = CreatorApplicationCRUD()
