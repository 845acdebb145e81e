"""
Public category API endpoints.

Routes:
- GET /categories - List categories
- GET /categories/{slug} - Get category by slug

Dependencies: resourcehub.application.services, resourcehub.models
System role: Category browsing HTTP API
"""

from fastapi import APIRouter, Depends, Query

from resourcehub.api.deps.dependencies import get_category_service
from resourcehub.api.routers.router_utils import handle_service_errors
from resourcehub.application.services import CategoryService
from resourcehub.core.listing import CategorySort
from resourcehub.models.category import CategoryResponse

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
@handle_service_errors
async def list_categories(
    sort: CategorySort = Query(CategorySort.NAME_ASC),
    featured: bool = Query(False, description="Only featured categories"),
    category_service: CategoryService = Depends(get_category_service),
) -> list[CategoryResponse]:
    categories = await category_service.list_categories(sort=sort, featured_only=featured)
    return [CategoryResponse(**c) for c in categories]


@router.get("/{slug}", response_model=CategoryResponse)
@handle_service_errors
async def get_category(
    slug: str,
    category_service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """
    Get category by slug.

    Raises:
        HTTPException(404): Unknown slug
    """
    return CategoryResponse(**await category_service.get_category(slug))
