"""
Purchase service orchestrator.

Records purchases, refunds them and answers whether a user may access a
resource's file.

Dependencies: resourcehub.boundary.db.CRUD
System role: Sales use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.application.services.analytics_service import AnalyticsService
from resourcehub.application.services.mappers import money, purchase_to_dict
from resourcehub.boundary.db.CRUD import purchase_crud, resource_crud
from resourcehub.boundary.db.base import utcnow
from resourcehub.boundary.db.models import (
    AnalyticsEventType,
    PurchaseStatus,
    ResourceModel,
    ResourceStatus,
    UserModel,
    UserRole,
)
from resourcehub.core.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


async def has_access(db: AsyncSession, resource: ResourceModel, user: UserModel | None) -> bool:
    """
    Whether a user may download a resource's file.

    Creators of the resource and admins always may. Anyone signed in may
    take free resources. Everyone else needs a completed purchase.
    """
    if user is None:
        return False
    if user.role == UserRole.ADMIN or resource.creator_id == user.id:
        return True
    if resource.status != ResourceStatus.APPROVED:
        return False
    if money(resource.price) == 0:
        return True
    return await purchase_crud.get_completed(db, user.id, resource.id) is not None


class PurchaseService:
    """Purchase service orchestrator."""

    def __init__(self, db: AsyncSession, analytics: AnalyticsService | None = None) -> None:
        self.db = db
        self.analytics = analytics or AnalyticsService(db)

    async def purchase(self, user: UserModel, resource_id: UUID, payment_method: str = "card") -> dict:
        """
        Buy a resource at its current price.

        Args:
            user: Buyer
            resource_id: Resource UUID
            payment_method: Recorded payment method label

        Returns:
            dict: Completed purchase

        Raises:
            NotFoundError: Resource missing or not approved
            ValidationError: Buyer is the resource's creator
            ConflictError: Buyer already owns the resource
        """
        resource = await resource_crud.get_by_id(self.db, resource_id)
        if resource is None or resource.status != ResourceStatus.APPROVED:
            raise NotFoundError("resource", resource_id)
        if resource.creator_id == user.id:
            raise ValidationError("You cannot purchase your own resource", field="resource_id")
        if await purchase_crud.get_completed(self.db, user.id, resource_id):
            raise ConflictError(
                "You already own this resource",
                {"resource_id": str(resource_id), "user_id": str(user.id)},
            )

        now = utcnow()
        try:
            purchase = await purchase_crud.create(
                self.db,
                user_id=user.id,
                resource_id=resource.id,
                creator_id=resource.creator_id,
                resource_title=resource.title,
                amount=money(resource.price),
                status=PurchaseStatus.COMPLETED,
                payment_method=payment_method,
                completed_at=now,
            )
        except Exception as e:
            logger.error(
                "Failed to record purchase",
                extra={"error": str(e), "resource_id": str(resource_id), "user_id": str(user.id)},
            )
            raise

        logger.info(
            "Resource purchased",
            extra={
                "purchase_id": str(purchase.id),
                "resource_id": str(resource_id),
                "amount": str(purchase.amount),
            },
        )
        await self.analytics.track_event(
            AnalyticsEventType.RESOURCE_PURCHASE,
            {"amount": str(money(resource.price)), "title": resource.title},
            user_id=user.id,
            resource_id=resource.id,
        )
        return purchase_to_dict(purchase)

    async def refund(self, purchase_id: UUID) -> dict:
        """
        Refund a completed purchase.

        Raises:
            NotFoundError: Unknown purchase
            ValidationError: Purchase is not completed
        """
        purchase = await purchase_crud.get_by_id(self.db, purchase_id)
        if purchase is None:
            raise NotFoundError("purchase", purchase_id)
        if purchase.status != PurchaseStatus.COMPLETED:
            raise ValidationError(
                f"Only completed purchases can be refunded (status: {purchase.status.value})",
                field="status",
            )

        purchase = await purchase_crud.update_by_id(
            self.db,
            purchase_id,
            status=PurchaseStatus.REFUNDED,
            refunded_at=utcnow(),
        )
        logger.info("Purchase refunded", extra={"purchase_id": str(purchase_id)})
        return purchase_to_dict(purchase)
