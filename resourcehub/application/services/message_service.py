"""
Message service orchestrator.

Direct messages between users with inbox/sent views and read tracking.

Dependencies: resourcehub.boundary.db.CRUD
System role: Messaging use cases
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.application.services.mappers import message_to_dict
from resourcehub.boundary.db.CRUD import message_crud, user_crud
from resourcehub.boundary.db.models import UserModel
from resourcehub.configs import Settings, get_settings
from resourcehub.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from resourcehub.core.listing import Page

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 5000


class MessageService:
    """Message service orchestrator."""

    def __init__(self, db: AsyncSession, settings: Settings | None = None) -> None:
        self.db = db
        self.settings = settings or get_settings()

    async def send_message(self, sender: UserModel, recipient_id: UUID, content: str) -> dict:
        """
        Send a message to another user.

        Raises:
            ValidationError: Empty or oversized content, or messaging yourself
            NotFoundError: Unknown recipient
        """
        content = (content or "").strip()
        if not content:
            raise ValidationError("Message cannot be empty", field="content")
        if len(content) > MAX_MESSAGE_LENGTH:
            raise ValidationError(
                f"Message cannot exceed {MAX_MESSAGE_LENGTH} characters", field="content"
            )
        if recipient_id == sender.id:
            raise ValidationError("You cannot message yourself", field="recipient_id")

        recipient = await user_crud.get_by_id(self.db, recipient_id)
        if recipient is None:
            raise NotFoundError("user", recipient_id)

        message = await message_crud.create(
            self.db,
            sender_id=sender.id,
            recipient_id=recipient_id,
            content=content,
            read=False,
        )
        logger.info(
            "Message sent",
            extra={"message_id": str(message.id), "sender_id": str(sender.id), "recipient_id": str(recipient_id)},
        )
        return message_to_dict(message, sender.name, recipient.name)

    async def list_messages(
        self,
        user: UserModel,
        sent: bool = False,
        unread_only: bool = False,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict:
        """Inbox (or sent box), newest first."""
        market = self.settings.marketplace
        page = Page.clamp(limit, offset, market.page_size, market.max_page_size)
        rows, total = await message_crud.list_for_user(
            self.db,
            user.id,
            sent=sent,
            unread_only=unread_only,
            limit=page.limit,
            offset=page.offset,
        )
        return {
            "items": [message_to_dict(*row) for row in rows],
            "total": total,
            "limit": page.limit,
            "offset": page.offset,
            "has_more": page.offset + len(rows) < total,
        }

    async def mark_read(self, user: UserModel, message_id: UUID) -> dict:
        """
        Mark a received message as read.

        Raises:
            NotFoundError: Unknown message
            PermissionDeniedError: Caller is not the recipient
        """
        message = await message_crud.get_by_id(self.db, message_id)
        if message is None:
            raise NotFoundError("message", message_id)
        if message.recipient_id != user.id:
            raise PermissionDeniedError(
                "Only the recipient can mark a message as read", user_id=str(user.id)
            )

        if not message.read:
            message = await message_crud.update_by_id(self.db, message_id, read=True)
        names = await user_crud.get_names(self.db, {message.sender_id, message.recipient_id})
        return message_to_dict(message, names.get(message.sender_id), names.get(message.recipient_id))

    async def unread_count(self, user: UserModel) -> int:
        return await message_crud.unread_count(self.db, user.id)
