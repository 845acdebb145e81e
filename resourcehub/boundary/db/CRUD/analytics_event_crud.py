"""
Analytics event CRUD operations.

Dependencies: sqlalchemy, resourcehub.boundary.db.models
System role: Activity log persistence operations
"""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.boundary.db.CRUD.base_crud import BaseCRUD
from resourcehub.boundary.db.models.analytics_event_model import AnalyticsEventModel


class AnalyticsEventCRUD(BaseCRUD[AnalyticsEventModel]):
    """CRUD operations for AnalyticsEventModel."""

    def __init__(self) -> None:
        super().__init__(AnalyticsEventModel)

    async def list_in_range(
        self,
        session: AsyncSession,
        start: datetime,
        end: datetime,
        user_id: UUID | None = None,
        limit: int | None = None,
    ) -> Sequence[AnalyticsEventModel]:
        """
        Events with created_at in [start, end], newest first.

        Args:
            session: Async database session
            start, end: Window bounds
            user_id: Only this user's events
            limit: Maximum events to return

        Returns:
            Sequence of AnalyticsEventModel
        """
        criteria: list[Any] = [
            AnalyticsEventModel.created_at >= start,
            AnalyticsEventModel.created_at <= end,
        ]
        if user_id is not None:
            criteria.append(AnalyticsEventModel.user_id == user_id)
        stmt = select(AnalyticsEventModel).where(*criteria).order_by(
            AnalyticsEventModel.created_at.desc()
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


analytics_event_crud = AnalyticsEventCRUD()
