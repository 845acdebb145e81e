"""
Report API endpoints.

Routes:
- POST /reports - File a report

Dependencies: resourcehub.application.services, resourcehub.models
System role: Report intake HTTP API
"""

from fastapi import APIRouter, Depends

from resourcehub.api.deps.dependencies import get_current_user, get_report_service
from resourcehub.api.routers.router_utils import handle_service_errors
from resourcehub.application.services import ReportService
from resourcehub.boundary.db.models import ReportType, UserModel
from resourcehub.models.report import CreateReportRequest, ReportResponse

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("", response_model=ReportResponse, status_code=201)
@handle_service_errors
async def create_report(
    request: CreateReportRequest,
    user: UserModel = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service),
) -> ReportResponse:
    """
    File a report about a resource, a user or something else.

    Raises:
        HTTPException(400): Target id missing for the report type
        HTTPException(404): Target does not exist
    """
    report = await report_service.create_report(
        user,
        type=ReportType(request.type),
        reason=request.reason,
        description=request.description,
        resource_id=request.resource_id,
        creator_id=request.creator_id,
    )
    return ReportResponse(**report)
