"""
Reporting Service (read-only)

Aggregates leave requests for the admin dashboards. Every report accepts the
same optional filters:

    start / end   inclusive bounds on a request's startDate
    department    exact department name

Empty data yields empty lists and zero aggregates.
"""
import calendar
import csv
import io
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from unileave.core.exceptions import ValidationError
from unileave.models.leave_request import LeaveRequest, LeaveStatus
from unileave.models.staff import Staff

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "Request ID",
    "Staff ID",
    "Staff Name",
    "Department",
    "Leave Type",
    "Start Date",
    "End Date",
    "Days",
    "Status",
    "Applied Date",
    "Approved By",
    "Decision Date",
    "Reason",
    "Rejection Reason",
]


@dataclass
class ReportFilters:
    start: Optional[date] = None
    end: Optional[date] = None
    department: Optional[str] = None

    def __post_init__(self):
        if self.start and self.end and self.start > self.end:
            raise ValidationError("start must be on or before end")


def _export_row(r: LeaveRequest) -> List[Any]:
    return [
        r.id,
        r.staff_id,
        r.staff_name or "",
        r.department or "",
        r.type,
        r.start_date.isoformat(),
        r.end_date.isoformat(),
        r.days,
        r.status,
        r.applied_date.isoformat() if r.applied_date else "",
        r.approved_by or "",
        r.approved_date.isoformat() if r.approved_date else "",
        r.reason or "",
        r.rejected_reason or "",
    ]


class ReportService:
    def __init__(self, db: Session):
        self.db = db

    def _requests(self, filters: Optional[ReportFilters] = None) -> List[LeaveRequest]:
        filters = filters or ReportFilters()
        query = self.db.query(LeaveRequest).options(joinedload(LeaveRequest.staff))
        if filters.start:
            query = query.filter(LeaveRequest.start_date >= filters.start)
        if filters.end:
            query = query.filter(LeaveRequest.start_date <= filters.end)
        if filters.department:
            query = query.join(Staff, LeaveRequest.staff_id == Staff.id).filter(
                Staff.department == filters.department
            )
        return query.order_by(LeaveRequest.start_date, LeaveRequest.id).all()

    def leave_type_distribution(self, filters: Optional[ReportFilters] = None) -> List[Dict[str, Any]]:
        counts: Dict[str, int] = defaultdict(int)
        for r in self._requests(filters):
            counts[r.type] += 1
        return [
            {"type": leave_type, "count": count}
            for leave_type, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
        ]

    def status_distribution(self, filters: Optional[ReportFilters] = None) -> List[Dict[str, Any]]:
        counts = {s.value: 0 for s in LeaveStatus}
        for r in self._requests(filters):
            if r.status in counts:
                counts[r.status] += 1
        return [{"status": status, "count": count} for status, count in counts.items()]

    def monthly_trend(self, year: Optional[int] = None) -> List[Dict[str, Any]]:
        """Twelve rows, one per calendar month of *year*, keyed on startDate."""
        year = year or date.today().year
        if year < 1900 or year > 9999:
            raise ValidationError(f"Invalid year: {year}")

        rows = [
            {
                "month": calendar.month_abbr[m],
                "month_number": m,
                "total": 0,
                "approved": 0,
                "rejected": 0,
                "pending": 0,
            }
            for m in range(1, 13)
        ]
        filters = ReportFilters(start=date(year, 1, 1), end=date(year, 12, 31))
        for r in self._requests(filters):
            row = rows[r.start_date.month - 1]
            row["total"] += 1
            key = r.status.lower()
            if key in row:
                row[key] += 1
        return rows

    def department_stats(self, filters: Optional[ReportFilters] = None) -> List[Dict[str, Any]]:
        filters = filters or ReportFilters()

        staff_query = self.db.query(Staff.department, func.count(Staff.id)).group_by(Staff.department)
        if filters.department:
            staff_query = staff_query.filter(Staff.department == filters.department)
        staff_counts = dict(staff_query.all())

        buckets: Dict[str, Dict[str, int]] = defaultdict(lambda: {"total": 0, "approved": 0, "days": 0})
        for r in self._requests(filters):
            bucket = buckets[r.department]
            bucket["total"] += 1
            bucket["days"] += r.days
            if r.status == LeaveStatus.APPROVED.value:
                bucket["approved"] += 1

        result = []
        for department in sorted(set(staff_counts) | set(buckets)):
            bucket = buckets.get(department, {"total": 0, "approved": 0, "days": 0})
            total = bucket["total"]
            result.append(
                {
                    "department": department,
                    "staff_count": staff_counts.get(department, 0),
                    "total_requests": total,
                    "approved_requests": bucket["approved"],
                    "average_days": round(bucket["days"] / total, 1) if total else 0.0,
                    "approval_rate": round(bucket["approved"] / total, 4) if total else 0.0,
                }
            )
        return result

    def top_requesters(self, filters: Optional[ReportFilters] = None, limit: int = 5) -> List[Dict[str, Any]]:
        if limit < 1:
            raise ValidationError("limit must be at least 1")

        totals: Dict[str, Dict[str, Any]] = {}
        for r in self._requests(filters):
            entry = totals.setdefault(
                r.staff_id,
                {
                    "staff_id": r.staff_id,
                    "name": r.staff_name,
                    "department": r.department,
                    "total_days": 0,
                    "request_count": 0,
                },
            )
            entry["total_days"] += r.days
            entry["request_count"] += 1

        ranked = sorted(totals.values(), key=lambda e: (-e["total_days"], -e["request_count"], e["staff_id"]))
        return ranked[:limit]

    # ──────────────────────────── Exports ────────────────────────────

    def export_csv(self, filters: Optional[ReportFilters] = None) -> str:
        requests = self._requests(filters)
        buf = io.StringIO()
        writer = csv.writer(buf)
        writer.writerow(EXPORT_COLUMNS)
        for r in requests:
            writer.writerow(_export_row(r))
        logger.info(f"[REPORT] CSV export with {len(requests)} row(s)")
        return buf.getvalue()

    def export_xlsx(self, filters: Optional[ReportFilters] = None) -> bytes:
        """Workbook with the request listing plus a summary sheet."""
        requests = self._requests(filters)
        wb = Workbook()

        ws = wb.active
        ws.title = "Leave Requests"
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill("solid", fgColor="1F4E78")
        ws.append(EXPORT_COLUMNS)
        for cell in ws[1]:
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")
        for r in requests:
            ws.append(_export_row(r))
        for idx, column in enumerate(EXPORT_COLUMNS, start=1):
            ws.column_dimensions[get_column_letter(idx)].width = max(12, len(column) + 4)

        summary = wb.create_sheet("Summary")
        summary.append(["Status", "Requests"])
        for row in self.status_distribution(filters):
            summary.append([row["status"], row["count"]])
        summary.append([])
        summary.append(["Leave Type", "Requests"])
        for row in self.leave_type_distribution(filters):
            summary.append([row["type"], row["count"]])
        summary["A1"].font = Font(bold=True)

        out = io.BytesIO()
        wb.save(out)
        logger.info(f"[REPORT] Excel export with {len(requests)} row(s)")
        return out.getvalue()
