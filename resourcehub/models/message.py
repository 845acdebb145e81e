"""
Message schemas.

Dependencies: pydantic
System role: Messaging API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel


class SendMessageRequest(BaseModel):
    recipient_id: uuid.UUID
    content: str


class MessageResponse(BaseModel):
    id: uuid.UUID
    sender_id: uuid.UUID
    sender_name: str
    recipient_id: uuid.UUID
    recipient_name: str
    content: str
    read: bool
    created_at: datetime


class UnreadCountResponse(BaseModel):
    unread: int
