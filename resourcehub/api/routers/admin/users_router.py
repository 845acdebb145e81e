"""
Admin user and creator management endpoints.

Routes:
- GET /admin/users - User directory
- PUT /admin/users/{id}/role - Change role
- PUT /admin/users/{id}/status - Activate or suspend
- DELETE /admin/users/{id} - Delete account and its resources
- GET /admin/creators - Creator directory with sales figures
- POST /admin/creators/{id}/approve - Approve creator
- POST /admin/creators/{id}/reject - Reject creator

Dependencies: resourcehub.application.services, resourcehub.models
System role: Account administration HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from resourcehub.api.deps.dependencies import get_creator_service, get_user_service, require_admin
from resourcehub.api.routers.router_utils import handle_service_errors
from resourcehub.application.services import CreatorService, UserService
from resourcehub.boundary.db.models import CreatorStatus, UserModel, UserRole, UserStatus
from resourcehub.core.listing import CreatorSort
from resourcehub.models.common import PaginatedResponse
from resourcehub.models.creator import CreatorSummaryResponse
from resourcehub.models.user import UpdateRoleRequest, UpdateStatusRequest, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])


@router.get("/users", response_model=PaginatedResponse[UserResponse])
@handle_service_errors
async def list_users(
    role: UserRole | None = Query(None),
    status: UserStatus | None = Query(None),
    search: str | None = Query(None, max_length=200),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    user_service: UserService = Depends(get_user_service),
) -> PaginatedResponse[UserResponse]:
    """Search users by name or email, filtered by role and status."""
    page = await user_service.list_users(
        role=role, status=status, search=search, limit=limit, offset=offset
    )
    return PaginatedResponse[UserResponse](**page)


@router.put("/users/{user_id}/role", response_model=UserResponse)
@handle_service_errors
async def change_role(
    user_id: UUID,
    request: UpdateRoleRequest,
    admin: UserModel = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Change a user's role.

    Raises:
        HTTPException(403): Admin changing their own role
        HTTPException(404): Unknown user
    """
    user = await user_service.change_role(admin, user_id, UserRole(request.role))
    return UserResponse(**user)


@router.put("/users/{user_id}/status", response_model=UserResponse)
@handle_service_errors
async def change_status(
    user_id: UUID,
    request: UpdateStatusRequest,
    admin: UserModel = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await user_service.change_status(admin, user_id, UserStatus(request.status))
    return UserResponse(**user)


@router.delete("/users/{user_id}", status_code=204)
@handle_service_errors
async def delete_user(
    user_id: UUID,
    admin: UserModel = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> Response:
    """
    Delete an account, its resources and its avatar.

    Raises:
        HTTPException(403): Admin deleting themselves
        HTTPException(404): Unknown user
    """
    await user_service.delete_user(admin, user_id)
    return Response(status_code=204)


@router.get("/creators", response_model=PaginatedResponse[CreatorSummaryResponse])
@handle_service_errors
async def list_creators(
    status: CreatorStatus | None = Query(None, description="Creator approval status"),
    search: str | None = Query(None, max_length=200),
    sort: CreatorSort = Query(CreatorSort.NEWEST),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    creator_service: CreatorService = Depends(get_creator_service),
) -> PaginatedResponse[CreatorSummaryResponse]:
    page = await creator_service.list_creators(
        creator_status=status, search=search, sort=sort, limit=limit, offset=offset
    )
    return PaginatedResponse[CreatorSummaryResponse](**page)


@router.post("/creators/{user_id}/approve", response_model=UserResponse)
@handle_service_errors
async def approve_creator(
    user_id: UUID,
    creator_service: CreatorService = Depends(get_creator_service),
) -> UserResponse:
    """
    Approve a creator and their pending application.

    Raises:
        HTTPException(400): User is not a creator
        HTTPException(404): Unknown user
    """
    return UserResponse(**await creator_service.approve(user_id))


@router.post("/creators/{user_id}/reject", response_model=UserResponse)
@handle_service_errors
async def reject_creator(
    user_id: UUID,
    creator_service: CreatorService = Depends(get_creator_service),
) -> UserResponse:
    return UserResponse(**await creator_service.reject(user_id))
