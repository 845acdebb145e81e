"""
Messaging API endpoints.

Routes:
- POST /messages - Send a message
- GET /messages - Inbox (or sent box with box=sent)
- GET /messages/unread-count - Unread inbox count
- POST /messages/{id}/read - Mark a received message read

Dependencies: resourcehub.application.services, resourcehub.models
System role: Messaging HTTP API
"""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from resourcehub.api.deps.dependencies import get_current_user, get_message_service
from resourcehub.api.routers.router_utils import handle_service_errors
from resourcehub.application.services import MessageService
from resourcehub.boundary.db.models import UserModel
from resourcehub.models.common import PaginatedResponse
from resourcehub.models.message import MessageResponse, SendMessageRequest, UnreadCountResponse

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", response_model=MessageResponse, status_code=201)
@handle_service_errors
async def send_message(
    request: SendMessageRequest,
    user: UserModel = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service),
) -> MessageResponse:
    """
    Send a message to another user.

    Raises:
        HTTPException(400): Empty/oversized content or self-message
        HTTPException(404): Unknown recipient
    """
    message = await message_service.send_message(user, request.recipient_id, request.content)
    return MessageResponse(**message)


@router.get("", response_model=PaginatedResponse[MessageResponse])
@handle_service_errors
async def list_messages(
    box: Literal["inbox", "sent"] = Query("inbox"),
    unread_only: bool = Query(False),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    user: UserModel = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service),
) -> PaginatedResponse[MessageResponse]:
    page = await message_service.list_messages(
        user,
        sent=box == "sent",
        unread_only=unread_only,
        limit=limit,
        offset=offset,
    )
    return PaginatedResponse[MessageResponse](**page)


@router.get("/unread-count", response_model=UnreadCountResponse)
@handle_service_errors
async def unread_count(
    user: UserModel = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service),
) -> UnreadCountResponse:
    return UnreadCountResponse(unread=await message_service.unread_count(user))


@router.post("/{message_id}/read", response_model=MessageResponse)
@handle_service_errors
async def mark_read(
    message_id: UUID,
    user: UserModel = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service),
) -> MessageResponse:
    """
    Mark a received message as read.

    Raises:
        HTTPException(403): Caller is not the recipient
        HTTPException(404): Unknown message
    """
    return MessageResponse(**await message_service.mark_read(user, message_id))
