"""
Reporting Schemas - read-only aggregates for dashboards
"""
from typing import Optional

from unileave.schemas.common import CamelModel


class LeaveTypeCount(CamelModel):
    type: str
    count: int


class StatusCount(CamelModel):
    status: str
    count: int


class MonthlyTrend(CamelModel):
    month: str
    month_number: int
    total: int
    approved: int
    rejected: int
    pending: int


class DepartmentStat(CamelModel):
    department: str
    staff_count: int
    total_requests: int
    approved_requests: int
    average_days: float
    approval_rate: float


class TopRequester(CamelModel):
    staff_id: str
    name: Optional[str] = None
    department: Optional[str] = None
    total_days: int
    request_count: int
