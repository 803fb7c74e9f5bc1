"""
Reporting Routes
Read-only aggregates for the admin dashboard plus CSV / Excel export
"""
import io
from datetime import date
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from unileave.database import get_db
from unileave.schemas.report import (
    DepartmentStat,
    LeaveTypeCount,
    MonthlyTrend,
    StatusCount,
    TopRequester,
)
from unileave.services.report_service import ReportFilters, ReportService

router = APIRouter(tags=["Reports"])


def report_filters(
    start: Optional[date] = Query(None, alias="startDate"),
    end: Optional[date] = Query(None, alias="endDate"),
    department: Optional[str] = Query(None),
) -> ReportFilters:
    return ReportFilters(start=start, end=end, department=department or None)


@router.get("/leave-types", response_model=List[LeaveTypeCount])
def leave_types(filters: ReportFilters = Depends(report_filters), db: Session = Depends(get_db)):
    return ReportService(db).leave_type_distribution(filters)


@router.get("/status", response_model=List[StatusCount])
def status_breakdown(filters: ReportFilters = Depends(report_filters), db: Session = Depends(get_db)):
    return ReportService(db).status_distribution(filters)


@router.get("/monthly", response_model=List[MonthlyTrend])
def monthly(year: Optional[int] = Query(None), db: Session = Depends(get_db)):
    return ReportService(db).monthly_trend(year)


@router.get("/departments", response_model=List[DepartmentStat])
def departments(filters: ReportFilters = Depends(report_filters), db: Session = Depends(get_db)):
    return ReportService(db).department_stats(filters)


@router.get("/top-requesters", response_model=List[TopRequester])
def top_requesters(
    limit: int = Query(5, ge=1, le=100),
    filters: ReportFilters = Depends(report_filters),
    db: Session = Depends(get_db),
):
    return ReportService(db).top_requesters(filters, limit=limit)


@router.get("/export")
def export(
    format: Literal["csv", "xlsx"] = Query("csv"),
    filters: ReportFilters = Depends(report_filters),
    db: Session = Depends(get_db),
):
    """Download the filtered leave requests as an attachment"""
    service = ReportService(db)
    stamp = date.today().isoformat()

    if format == "xlsx":
        return StreamingResponse(
            io.BytesIO(service.export_xlsx(filters)),
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": f'attachment; filename="leave_report_{stamp}.xlsx"'},
        )

    return StreamingResponse(
        io.BytesIO(service.export_csv(filters).encode("utf-8-sig")),  # utf-8-sig for Excel CSV compatibility
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="leave_report_{stamp}.csv"'},
    )
