from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from fueltrack.database import get_db
from fueltrack.dependencies import get_current_user
from fueltrack.models.user import User
from fueltrack.schemas.report import ReportCreateRequest
from fueltrack.schemas.common import success_response, paginated_response
from fueltrack.services.report_service import report_service

router = APIRouter(prefix="/reports")


@router.get("", summary="List trip reports")
def list_reports(
    page:   int           = Query(1, ge=1),
    limit:  int           = Query(20, ge=1, le=100),
    tripId: Optional[str] = Query(None),
    db:     Session       = Depends(get_db),
    _:      User          = Depends(get_current_user),
):
    data, total = report_service.list_reports(db, page, limit, tripId)
    return paginated_response("Reports retrieved successfully", data, total, page, limit)


@router.post("", status_code=status.HTTP_201_CREATED, summary="File a report for a trip")
def create_report(
    body: ReportCreateRequest,
    db:   Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return success_response("Report created successfully", report_service.create_report(db, body, current_user.id))
