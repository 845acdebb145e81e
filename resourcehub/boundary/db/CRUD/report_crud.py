"""
Report CRUD operations.

Dependencies: sqlalchemy, resourcehub.boundary.db.models
System role: Moderation queue persistence operations
"""

from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.boundary.db.CRUD.base_crud import BaseCRUD
from resourcehub.boundary.db.models.report_model import ReportModel, ReportStatus, ReportType


class ReportCRUD(BaseCRUD[ReportModel]):
    """CRUD operations for ReportModel."""

    def __init__(self) -> None:
        super().__init__(ReportModel)

    async def search(
        self,
        session: AsyncSession,
        status: ReportStatus | None = None,
        type: ReportType | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[Sequence[ReportModel], int]:
        """Reports filtered by status and type, newest first, with total."""
        criteria: list[Any] = []
        if status is not None:
            criteria.append(ReportModel.status == status)
        if type is not None:
            criteria.append(ReportModel.type == type)

        stmt = (
            select(ReportModel)
            .where(*criteria)
            .order_by(ReportModel.created_at.desc(), ReportModel.id)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all(), await self.count(session, *criteria)


report_crud = ReportCRUD()
