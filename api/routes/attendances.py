"""Check-in range and meal attendance summary routes"""

from fastapi import APIRouter, Depends, Query, Response
import logging
from typing import List, Optional

from api.dependencies import DateRange, get_checkin_repository, get_date_range
from app.config import settings
from domain.schemas.attendance_schemas import CheckInRecord, AttendanceSummary
from repositories.checkin_repository import CheckInRepository
from services import AttendanceService, ExportService, range_fetcher

router = APIRouter(prefix="/attendances", tags=["Attendance"])
logger = logging.getLogger("mealtrack.api.attendances")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("", response_model=List[CheckInRecord])
def list_checkins(
    window: DateRange = Depends(get_date_range),
    repository: CheckInRepository = Depends(get_checkin_repository),
):
    """
    Return the raw check-ins recorded between two dates, both inclusive.

    Raises:
        400: If a date is missing, malformed or 'from' is after 'to'
        503: If the check-in store cannot be read
    """
    records = range_fetcher.fetch_range(repository, window.from_date, window.to_date)
    logger.info(f"Returning {len(records)} check-ins for {window.from_date}..{window.to_date}")
    return records


@router.get("/summary", response_model=AttendanceSummary)
def get_summary(
    window: DateRange = Depends(get_date_range),
    filter: Optional[str] = Query(None, description="Roll number substring, case-insensitive"),
    repository: CheckInRepository = Depends(get_checkin_repository),
):
    """
    Per-person, per-day meal presence plus per-meal headcounts.

    Raises:
        400: If a date is missing, malformed or 'from' is after 'to'
        422: If a stored check-in has an unreadable time
        503: If the check-in store cannot be read
    """
    summary = AttendanceService.summarize(repository, window.from_date, window.to_date, filter)
    logger.info(
        f"Attendance summary for {window.from_date}..{window.to_date}: "
        f"{len(summary.rows)} rows, totals={summary.totals.model_dump(by_alias=True)}"
    )
    return summary


@router.get("/summary/export")
def export_summary(
    window: DateRange = Depends(get_date_range),
    filter: Optional[str] = Query(None, description="Roll number substring, case-insensitive"),
    repository: CheckInRepository = Depends(get_checkin_repository),
):
    """Download the presence rows as an .xlsx workbook."""
    summary = AttendanceService.summarize(repository, window.from_date, window.to_date, filter)
    content = ExportService.build_workbook(summary.rows, sheet_name=settings.export_sheet_name)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{settings.export_filename}"'
        },
    )
