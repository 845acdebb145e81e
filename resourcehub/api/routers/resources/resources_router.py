"""
Public resource API endpoints.

Routes:
- GET /resources - Browse approved resources
- GET /resources/{id} - Resource detail
- POST /resources/{id}/purchase - Buy a resource
- GET /resources/{id}/download - Presigned download link
- GET /resources/{id}/reviews - List reviews
- POST /resources/{id}/reviews - Review a resource
- DELETE /resources/{id}/reviews/{review_id} - Delete a review

Dependencies: resourcehub.application.services, resourcehub.models
System role: Catalog HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from resourcehub.api.deps.dependencies import (
    get_current_user,
    get_optional_user,
    get_purchase_service,
    get_resource_service,
    get_review_service,
)
from resourcehub.api.routers.router_utils import handle_service_errors
from resourcehub.application.services import PurchaseService, ResourceService, ReviewService
from resourcehub.boundary.db.models import UserModel
from resourcehub.core.listing import ResourceSort
from resourcehub.models.common import PaginatedResponse
from resourcehub.models.purchase import PurchaseResponse
from resourcehub.models.resource import (
    DownloadResponse,
    ResourceDetailResponse,
    ResourceResponse,
)
from resourcehub.models.review import CreateReviewRequest, ReviewListResponse, ReviewResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resources", tags=["resources"])


@router.get("", response_model=PaginatedResponse[ResourceResponse])
@handle_service_errors
async def browse_resources(
    category: str | None = Query(None, description="Category slug"),
    featured: bool | None = Query(None),
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
    search: str | None = Query(None, max_length=200),
    sort: ResourceSort = Query(ResourceSort.NEWEST),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    user: UserModel | None = Depends(get_optional_user),
    resource_service: ResourceService = Depends(get_resource_service),
) -> PaginatedResponse[ResourceResponse]:
    """
    Browse approved resources with filters, sorting and pagination.

    Search matches title, description or creator name, case-insensitive.
    """
    page = await resource_service.browse_resources(
        category=category,
        featured=featured,
        min_price=min_price,
        max_price=max_price,
        search=search,
        sort=sort,
        limit=limit,
        offset=offset,
        user_id=user.id if user else None,
    )
    return PaginatedResponse[ResourceResponse](**page)


@router.get("/{resource_id}", response_model=ResourceDetailResponse)
@handle_service_errors
async def get_resource(
    resource_id: UUID,
    user: UserModel | None = Depends(get_optional_user),
    resource_service: ResourceService = Depends(get_resource_service),
) -> ResourceDetailResponse:
    """
    Resource detail with creator name and rating summary.

    Raises:
        HTTPException(404): Unknown, or not visible to the caller
    """
    return ResourceDetailResponse(**await resource_service.get_resource(resource_id, user))


@router.post("/{resource_id}/purchase", response_model=PurchaseResponse, status_code=201)
@handle_service_errors
async def purchase_resource(
    resource_id: UUID,
    user: UserModel = Depends(get_current_user),
    purchase_service: PurchaseService = Depends(get_purchase_service),
) -> PurchaseResponse:
    """
    Buy a resource at its current price.

    Raises:
        HTTPException(400): Buying your own resource
        HTTPException(404): Unknown or unapproved resource
        HTTPException(409): Already purchased
    """
    return PurchaseResponse(**await purchase_service.purchase(user, resource_id))


@router.get("/{resource_id}/download", response_model=DownloadResponse)
@handle_service_errors
async def download_resource(
    resource_id: UUID,
    user: UserModel = Depends(get_current_user),
    resource_service: ResourceService = Depends(get_resource_service),
) -> DownloadResponse:
    """
    Presigned download link for owners, purchasers and free resources.

    Raises:
        HTTPException(403): Paid resource not purchased
        HTTPException(404): Unknown resource or missing file
    """
    return DownloadResponse(**await resource_service.download_resource(resource_id, user))


@router.get("/{resource_id}/reviews", response_model=ReviewListResponse)
@handle_service_errors
async def list_reviews(
    resource_id: UUID,
    limit: int | None = Query(None, ge=1, le=100),
    offset: int = Query(0, ge=0),
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewListResponse:
    reviews = await review_service.list_reviews(resource_id, limit=limit, offset=offset)
    return ReviewListResponse(**reviews)


@router.post("/{resource_id}/reviews", response_model=ReviewResponse, status_code=201)
@handle_service_errors
async def create_review(
    resource_id: UUID,
    request: CreateReviewRequest,
    user: UserModel = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    """
    Review a purchased (or free) resource once.

    Raises:
        HTTPException(400): Rating outside 1-5
        HTTPException(403): Not purchased
        HTTPException(409): Already reviewed
    """
    review = await review_service.create_review(
        user, resource_id, rating=request.rating, comment=request.comment
    )
    return ReviewResponse(**review)


@router.delete("/{resource_id}/reviews/{review_id}", status_code=204)
@handle_service_errors
async def delete_review(
    resource_id: UUID,
    review_id: UUID,
    user: UserModel = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> Response:
    """Delete a review (author or admin)."""
    await review_service.delete_review(user, resource_id, review_id)
    return Response(status_code=204)
