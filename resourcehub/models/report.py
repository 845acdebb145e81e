"""
Report schemas.

Dependencies: pydantic
System role: Report API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class CreateReportRequest(BaseModel):
    """
    Request schema for filing a report.

    resource reports need resource_id, user reports need creator_id.
    """

    type: Literal["resource", "user", "other"]
    resource_id: uuid.UUID | None = None
    creator_id: uuid.UUID | None = None
    reason: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=5000)


class ReportResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID | None
    type: Literal["resource", "user", "other"]
    resource_id: uuid.UUID | None
    creator_id: uuid.UUID | None
    reason: str
    description: str
    status: Literal["pending", "resolved", "dismissed"]
    created_at: datetime
    updated_at: datetime
