"""
Purchase CRUD operations.

Revenue is always the sum of completed purchase amounts; refunded and
failed purchases never count.

Dependencies: sqlalchemy, resourcehub.boundary.db.models
System role: Sales persistence operations
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.boundary.db.CRUD.base_crud import BaseCRUD
from resourcehub.boundary.db.models.purchase_model import PurchaseModel, PurchaseStatus
from resourcehub.boundary.db.models.resource_model import ResourceModel


class PurchaseCRUD(BaseCRUD[PurchaseModel]):
    """CRUD operations for PurchaseModel."""

    def __init__(self) -> None:
        super().__init__(PurchaseModel)

    async def get_completed(
        self,
        session: AsyncSession,
        user_id: UUID,
        resource_id: UUID,
    ) -> PurchaseModel | None:
        """The user's completed purchase of a resource, if any."""
        stmt = select(PurchaseModel).where(
            PurchaseModel.user_id == user_id,
            PurchaseModel.resource_id == resource_id,
            PurchaseModel.status == PurchaseStatus.COMPLETED,
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def list_for_user_with_resources(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> list[tuple[PurchaseModel, ResourceModel | None]]:
        """
        A user's purchases, newest first, with the purchased resource.

        The resource is None when it has since been deleted.
        """
        stmt = (
            select(PurchaseModel, ResourceModel)
            .outerjoin(ResourceModel, ResourceModel.id == PurchaseModel.resource_id)
            .where(PurchaseModel.user_id == user_id)
            .order_by(PurchaseModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return [(purchase, resource) for purchase, resource in result.all()]

    def _completed_criteria(
        self,
        creator_id: UUID | None,
        start: datetime | None,
        end: datetime | None,
    ) -> list[Any]:
        criteria: list[Any] = [PurchaseModel.status == PurchaseStatus.COMPLETED]
        if creator_id is not None:
            criteria.append(PurchaseModel.creator_id == creator_id)
        if start is not None:
            criteria.append(PurchaseModel.created_at >= start)
        if end is not None:
            criteria.append(PurchaseModel.created_at <= end)
        return criteria

    async def revenue(
        self,
        session: AsyncSession,
        creator_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> Decimal:
        """
        Sum of completed purchase amounts.

        Args:
            session: Async database session
            creator_id: Only count sales of this creator's resources
            start, end: Optional created_at bounds (inclusive)

        Returns:
            Gross revenue rounded to cents
        """
        stmt = select(func.coalesce(func.sum(PurchaseModel.amount), 0)).where(
            *self._completed_criteria(creator_id, start, end)
        )
        total = (await session.execute(stmt)).scalar_one()
        return Decimal(str(total)).quantize(Decimal("0.01"))

    async def list_completed(
        self,
        session: AsyncSession,
        creator_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> Sequence[PurchaseModel]:
        """Completed purchases in a window, newest first."""
        stmt = (
            select(PurchaseModel)
            .where(*self._completed_criteria(creator_id, start, end))
            .order_by(PurchaseModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


purchase_crud = PurchaseCRUD()
