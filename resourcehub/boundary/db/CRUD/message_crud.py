"""
Message CRUD operations.

Dependencies: sqlalchemy, resourcehub.boundary.db.models
System role: Messaging persistence operations
"""

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from resourcehub.boundary.db.CRUD.base_crud import BaseCRUD
from resourcehub.boundary.db.models.message_model import MessageModel
from resourcehub.boundary.db.models.user_model import UserModel

MessageRow = tuple[MessageModel, str | None, str | None]


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        super().__init__(MessageModel)

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        sent: bool = False,
        unread_only: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[list[MessageRow], int]:
        """
        Inbox or sent box, newest first.

        Args:
            session: Async database session
            user_id: Owner of the box
            sent: Sent box instead of inbox
            unread_only: Only unread messages
            limit: Page size
            offset: Rows to skip

        Returns:
            ([(message, sender_name, recipient_name), ...], total)
        """
        sender = aliased(UserModel)
        recipient = aliased(UserModel)

        criteria: list[Any] = [
            (MessageModel.sender_id if sent else MessageModel.recipient_id) == user_id
        ]
        if unread_only:
            criteria.append(MessageModel.read.is_(False))

        stmt = (
            select(MessageModel, sender.name, recipient.name)
            .outerjoin(sender, sender.id == MessageModel.sender_id)
            .outerjoin(recipient, recipient.id == MessageModel.recipient_id)
            .where(*criteria)
            .order_by(MessageModel.created_at.desc(), MessageModel.id)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        rows = [(message, sender_name, recipient_name) for message, sender_name, recipient_name in result.all()]
        return rows, await self.count(session, *criteria)

    async def unread_count(self, session: AsyncSession, user_id: UUID) -> int:
        return await self.count(
            session,
            MessageModel.recipient_id == user_id,
            MessageModel.read.is_(False),
        )


message_crud = MessageCRUD()
