"""
Leave Request Pydantic Schemas - API Request/Response Models
"""
from datetime import date
from typing import Optional

from unileave.models.leave_request import LeaveType
from unileave.schemas.common import CamelModel


class LeaveRequestCreate(CamelModel):
    staff_id: str
    type: LeaveType
    start_date: date
    end_date: date
    days: int
    reason: str


class LeaveStatusUpdate(CamelModel):
    status: str
    approved_by: Optional[str] = None
    rejected_reason: Optional[str] = None


class LeaveRequestResponse(CamelModel):
    id: int
    staff_id: str
    staff_name: Optional[str] = None
    department: Optional[str] = None
    type: str
    start_date: date
    end_date: date
    days: int
    reason: Optional[str] = None
    status: str
    applied_date: date
    approved_by: Optional[str] = None
    approved_date: Optional[date] = None
    rejected_reason: Optional[str] = None


class LeaveStats(CamelModel):
    total_applications: int
    pending_approval: int
    approved_this_month: int
    processing_time: str
