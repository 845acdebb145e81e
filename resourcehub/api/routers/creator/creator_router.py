"""
Creator API endpoints.

Routes:
- POST /creator/apply - Apply to become a creator (any signed-in user)
- GET /creator/dashboard - Headline numbers
- GET /creator/analytics - Activity within a period
- GET /creator/resources - Own resources
- POST /creator/uploads/presigned-url - Presigned upload for a file or thumbnail
- POST /creator/resources - Create a resource from an uploaded file
- PATCH /creator/resources/{id} - Edit own resource
- DELETE /creator/resources/{id} - Delete own resource

Dependencies: resourcehub.application.services, resourcehub.models
System role: Creator workspace HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel

from resourcehub.api.deps.dependencies import (
    get_analytics_service,
    get_creator_service,
    get_current_user,
    get_resource_service,
    require_creator,
)
from resourcehub.api.routers.router_utils import handle_service_errors
from resourcehub.application.services import AnalyticsService, CreatorService, ResourceService
from resourcehub.boundary.db.models import ResourceStatus, UserModel
from resourcehub.core.periods import Period
from resourcehub.models.analytics import CreatorAnalyticsResponse
from resourcehub.models.common import PresignedUploadResponse
from resourcehub.models.creator import (
    CreatorApplicationRequest,
    CreatorApplicationResponse,
    CreatorDashboardResponse,
)
from resourcehub.models.resource import (
    CreateResourceRequest,
    ResourceResponse,
    UpdateResourceRequest,
    UploadUrlRequest,
)
from resourcehub.models.user import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/creator", tags=["creator"])


class CreatorApplicationResult(BaseModel):
    application: CreatorApplicationResponse
    user: UserResponse


@router.post("/apply", response_model=CreatorApplicationResult, status_code=201)
@handle_service_errors
async def apply(
    request: CreatorApplicationRequest,
    user: UserModel = Depends(get_current_user),
    creator_service: CreatorService = Depends(get_creator_service),
) -> CreatorApplicationResult:
    """
    Apply to become a creator. Approval is pending until an admin reviews it.

    Raises:
        HTTPException(400): Unknown plan or admin applicant
        HTTPException(409): Already an approved creator
    """
    result = await creator_service.apply(
        user,
        portfolio_url=request.portfolio_url,
        experience=request.experience,
        application_text=request.application_text,
        plan=request.plan,
    )
    return CreatorApplicationResult(**result)


@router.get("/dashboard", response_model=CreatorDashboardResponse)
@handle_service_errors
async def dashboard(
    user: UserModel = Depends(require_creator),
    creator_service: CreatorService = Depends(get_creator_service),
) -> CreatorDashboardResponse:
    return CreatorDashboardResponse(**await creator_service.dashboard(user))


@router.get("/analytics", response_model=CreatorAnalyticsResponse)
@handle_service_errors
async def analytics(
    period: Period = Query(Period.MONTH),
    user: UserModel = Depends(require_creator),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
) -> CreatorAnalyticsResponse:
    """Views, downloads, sales and events for the creator within a period."""
    return CreatorAnalyticsResponse(**await analytics_service.creator_analytics(user.id, period))


@router.get("/resources", response_model=list[ResourceResponse])
@handle_service_errors
async def list_own_resources(
    status: ResourceStatus | None = Query(None),
    user: UserModel = Depends(require_creator),
    resource_service: ResourceService = Depends(get_resource_service),
) -> list[ResourceResponse]:
    resources = await resource_service.list_creator_resources(
        user.id, status=status, creator_name=user.name
    )
    return [ResourceResponse(**r) for r in resources]


@router.post("/uploads/presigned-url", response_model=PresignedUploadResponse)
@handle_service_errors
async def request_upload_url(
    request: UploadUrlRequest,
    user: UserModel = Depends(require_creator),
    resource_service: ResourceService = Depends(get_resource_service),
) -> PresignedUploadResponse:
    """
    Presigned PUT URL for a resource file or thumbnail.

    Raises:
        HTTPException(400): Disallowed extension or size
        HTTPException(403): Not an approved creator, or plan limit reached
        HTTPException(502): Storage failure
    """
    upload = await resource_service.request_upload_url(
        user,
        kind=request.kind,
        filename=request.filename,
        content_type=request.content_type,
        file_size=request.file_size,
    )
    return PresignedUploadResponse(**upload)


@router.post("/resources", response_model=ResourceResponse, status_code=201)
@handle_service_errors
async def create_resource(
    request: CreateResourceRequest,
    user: UserModel = Depends(require_creator),
    resource_service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    """
    Create a pending resource for an uploaded file.

    Raises:
        HTTPException(400): Invalid fields, unknown category or file not uploaded
        HTTPException(403): Not an approved creator, or plan limit reached
    """
    logger.info(
        "Creating resource",
        extra={"user_id": str(user.id), "title": request.title, "category": request.category},
    )
    resource = await resource_service.create_resource(
        user,
        title=request.title,
        description=request.description,
        price=request.price,
        category=request.category,
        file_key=request.file_key,
        file_name=request.file_name,
        file_size=request.file_size,
        file_type=request.file_type,
        tags=request.tags,
        thumbnail_key=request.thumbnail_key,
    )
    return ResourceResponse(**resource)


@router.patch("/resources/{resource_id}", response_model=ResourceResponse)
@handle_service_errors
async def update_resource(
    resource_id: UUID,
    request: UpdateResourceRequest,
    user: UserModel = Depends(require_creator),
    resource_service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    """
    Edit own resource. Approved resources return to pending review.

    Raises:
        HTTPException(403): Not the owner
        HTTPException(404): Unknown resource
    """
    resource = await resource_service.update_resource(
        user, resource_id, **request.model_dump(exclude_none=True)
    )
    return ResourceResponse(**resource)


@router.delete("/resources/{resource_id}", status_code=204)
@handle_service_errors
async def delete_resource(
    resource_id: UUID,
    user: UserModel = Depends(require_creator),
    resource_service: ResourceService = Depends(get_resource_service),
) -> Response:
    await resource_service.delete_resource(user, resource_id)
    return Response(status_code=204)
