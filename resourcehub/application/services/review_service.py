"""
Review service orchestrator.

Dependencies: resourcehub.boundary.db.CRUD
System role: Resource rating use cases
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.application.services.mappers import review_to_dict
from resourcehub.application.services.purchase_service import has_access
from resourcehub.boundary.db.CRUD import resource_crud, review_crud
from resourcehub.boundary.db.models import ResourceStatus, UserModel, UserRole
from resourcehub.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class ReviewService:
    """Review service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_reviews(
        self,
        resource_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> dict:
        """Reviews of an approved resource, newest first."""
        resource = await resource_crud.get_by_id(self.db, resource_id)
        if resource is None or resource.status != ResourceStatus.APPROVED:
            raise NotFoundError("resource", resource_id)
        rows, total = await review_crud.list_for_resource(
            self.db, resource_id, limit=limit, offset=offset
        )
        average, _ = await review_crud.rating_summary(self.db, resource_id)
        return {
            "items": [review_to_dict(review, name) for review, name in rows],
            "total": total,
            "average_rating": average,
        }

    async def create_review(
        self,
        user: UserModel,
        resource_id: UUID,
        rating: int,
        comment: str = "",
    ) -> dict:
        """
        Review a resource the user owns (or that is free).

        Raises:
            ValidationError: Rating out of range or reviewing own resource
            NotFoundError: Resource missing or not approved
            PermissionDeniedError: Paid resource not purchased
            ConflictError: User already reviewed it
        """
        if not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(
                f"Rating must be an integer from {MIN_RATING} to {MAX_RATING}", field="rating"
            )

        resource = await resource_crud.get_by_id(self.db, resource_id)
        if resource is None or resource.status != ResourceStatus.APPROVED:
            raise NotFoundError("resource", resource_id)
        if resource.creator_id == user.id:
            raise ValidationError("You cannot review your own resource", field="resource_id")
        if not await has_access(self.db, resource, user):
            raise PermissionDeniedError(
                "Purchase this resource before reviewing it", user_id=str(user.id)
            )
        if await review_crud.get_for_user(self.db, resource_id, user.id):
            raise ConflictError(
                "You have already reviewed this resource",
                {"resource_id": str(resource_id), "user_id": str(user.id)},
            )

        try:
            review = await review_crud.create(
                self.db,
                resource_id=resource_id,
                user_id=user.id,
                rating=rating,
                comment=(comment or "").strip(),
            )
        except IntegrityError as e:
            raise ConflictError(
                "You have already reviewed this resource",
                {"resource_id": str(resource_id), "user_id": str(user.id)},
            ) from e

        logger.info(
            "Review created",
            extra={"review_id": str(review.id), "resource_id": str(resource_id), "rating": rating},
        )
        return review_to_dict(review, user.name)

    async def delete_review(self, user: UserModel, resource_id: UUID, review_id: UUID) -> None:
        """
        Delete a review. Allowed for its author and admins.

        Raises:
            NotFoundError: Unknown review for this resource
            PermissionDeniedError: Caller is neither author nor admin
        """
        review = await review_crud.get_by_id(self.db, review_id)
        if review is None or review.resource_id != resource_id:
            raise NotFoundError("review", review_id)
        if review.user_id != user.id and user.role != UserRole.ADMIN:
            raise PermissionDeniedError("You can only delete your own reviews", user_id=str(user.id))

        await review_crud.delete_by_id(self.db, review_id)
        logger.info("Review deleted", extra={"review_id": str(review_id), "deleted_by": str(user.id)})
