"""
Admin moderation endpoints.

Routes:
- GET /admin/reports - Report queue
- POST /admin/reports/{id}/resolve - Resolve report
- POST /admin/reports/{id}/dismiss - Dismiss report
- POST /admin/purchases/{id}/refund - Refund a completed purchase
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from resourcehub.api.deps.dependencies import get_purchase_service, get_report_service
from resourcehub.api.routers.router_utils import handle_service_errors
from resourcehub.application.services import PurchaseService, ReportService
from resourcehub.boundary.db.models import ReportStatus, ReportType
from resourcehub.models.common import PaginatedResponse
from resourcehub.models.purchase import PurchaseResponse
from resourcehub.models.report import ReportResponse

router = APIRouter(tags=["admin"])


@router.get("/reports", response_model=PaginatedResponse[ReportResponse])
@handle_service_errors
async def list_reports(
    status: ReportStatus | None = Query(None),
    type: ReportType | None = Query(None),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    report_service: ReportService = Depends(get_report_service),
) -> PaginatedResponse[ReportResponse]:
    page = await report_service.list_reports(status=status, type=type, limit=limit, offset=offset)
    return PaginatedResponse[ReportResponse](**page)


@router.post("/reports/{report_id}/resolve", response_model=ReportResponse)
@handle_service_errors
async def resolve_report(
    report_id: UUID,
    report_service: ReportService = Depends(get_report_service),
) -> ReportResponse:
    return ReportResponse(**await report_service.resolve(report_id))


@router.post("/reports/{report_id}/dismiss", response_model=ReportResponse)
@handle_service_errors
async def dismiss_report(
    report_id: UUID,
    report_service: ReportService = Depends(get_report_service),
) -> ReportResponse:
    return ReportResponse(**await report_service.dismiss(report_id))


@router.post("/purchases/{purchase_id}/refund", response_model=PurchaseResponse)
@handle_service_errors
async def refund_purchase(
    purchase_id: UUID,
    purchase_service: PurchaseService = Depends(get_purchase_service),
) -> PurchaseResponse:
    """
    Refund a completed purchase. Access is revoked and revenue excludes it.

    Raises:
        HTTPException(400): Purchase is not completed
        HTTPException(404): Unknown purchase
    """
    return PurchaseResponse(**await purchase_service.refund(purchase_id))
