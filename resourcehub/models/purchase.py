"""
Purchase schemas.

Dependencies: pydantic
System role: Purchase API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class PurchaseResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    resource_id: uuid.UUID | None
    resource_title: str
    amount: float
    status: Literal["pending", "completed", "failed", "refunded"]
    payment_method: str
    payment_id: str | None
    created_at: datetime
    completed_at: datetime | None
    refunded_at: datetime | None


class PurchasedResourceSummary(BaseModel):
    """Resource fields shown in a purchase history row."""

    id: uuid.UUID
    title: str
    thumbnail: str | None
    category: str
    creator_name: str


class PurchaseHistoryResponse(PurchaseResponse):
    resource: PurchasedResourceSummary
