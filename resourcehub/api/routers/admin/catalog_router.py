"""
Admin catalog endpoints.

Routes:
- GET /admin/resources - All resources, any status
- POST /admin/resources/{id}/approve - Approve
- POST /admin/resources/{id}/reject - Reject
- POST /admin/resources/{id}/feature - Feature or unfeature
- DELETE /admin/resources/{id} - Delete
- POST /admin/categories - Create category
- PUT /admin/categories/{id} - Update category
- DELETE /admin/categories/{id} - Delete category

Dependencies: resourcehub.application.services, resourcehub.models
System role: Catalog moderation HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from resourcehub.api.deps.dependencies import (
    get_category_service,
    get_resource_service,
    require_admin,
)
from resourcehub.api.routers.router_utils import handle_service_errors
from resourcehub.application.services import CategoryService, ResourceService
from resourcehub.boundary.db.models import ResourceStatus, UserModel
from resourcehub.core.listing import ResourceSort
from resourcehub.models.category import (
    CategoryResponse,
    CreateCategoryRequest,
    UpdateCategoryRequest,
)
from resourcehub.models.common import PaginatedResponse
from resourcehub.models.resource import FeatureRequest, ResourceResponse

router = APIRouter(tags=["admin"])


@router.get("/resources", response_model=PaginatedResponse[ResourceResponse])
@handle_service_errors
async def list_resources(
    status: ResourceStatus | None = Query(None),
    category: str | None = Query(None),
    search: str | None = Query(None, max_length=200),
    sort: ResourceSort = Query(ResourceSort.NEWEST),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    resource_service: ResourceService = Depends(get_resource_service),
) -> PaginatedResponse[ResourceResponse]:
    page = await resource_service.admin_list_resources(
        status=status,
        category=category,
        search=search,
        sort=sort,
        limit=limit,
        offset=offset,
    )
    return PaginatedResponse[ResourceResponse](**page)


@router.post("/resources/{resource_id}/approve", response_model=ResourceResponse)
@handle_service_errors
async def approve_resource(
    resource_id: UUID,
    resource_service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    """Approve a resource; it becomes publicly listed."""
    return ResourceResponse(
        **await resource_service.set_status(resource_id, ResourceStatus.APPROVED)
    )


@router.post("/resources/{resource_id}/reject", response_model=ResourceResponse)
@handle_service_errors
async def reject_resource(
    resource_id: UUID,
    resource_service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    return ResourceResponse(
        **await resource_service.set_status(resource_id, ResourceStatus.REJECTED)
    )


@router.post("/resources/{resource_id}/feature", response_model=ResourceResponse)
@handle_service_errors
async def feature_resource(
    resource_id: UUID,
    request: FeatureRequest,
    resource_service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    return ResourceResponse(**await resource_service.set_featured(resource_id, request.featured))


@router.delete("/resources/{resource_id}", status_code=204)
@handle_service_errors
async def delete_resource(
    resource_id: UUID,
    admin: UserModel = Depends(require_admin),
    resource_service: ResourceService = Depends(get_resource_service),
) -> Response:
    await resource_service.delete_resource(admin, resource_id)
    return Response(status_code=204)


@router.post("/categories", response_model=CategoryResponse, status_code=201)
@handle_service_errors
async def create_category(
    request: CreateCategoryRequest,
    category_service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """
    Create a category.

    Raises:
        HTTPException(400): Empty name or slug
        HTTPException(409): Slug already exists
    """
    category = await category_service.create_category(**request.model_dump())
    return CategoryResponse(**category)


@router.put("/categories/{category_id}", response_model=CategoryResponse)
@handle_service_errors
async def update_category(
    category_id: UUID,
    request: UpdateCategoryRequest,
    category_service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """
    Update a category. Renaming the slug moves its resources to the new slug.

    Raises:
        HTTPException(404): Unknown category
        HTTPException(409): New slug already exists
    """
    category = await category_service.update_category(
        category_id, **request.model_dump(exclude_none=True)
    )
    return CategoryResponse(**category)


@router.delete("/categories/{category_id}", status_code=204)
@handle_service_errors
async def delete_category(
    category_id: UUID,
    category_service: CategoryService = Depends(get_category_service),
) -> Response:
    """Delete a category. Its resources become uncategorized."""
    await category_service.delete_category(category_id)
    return Response(status_code=204)
