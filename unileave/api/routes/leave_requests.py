"""
Leave Request Endpoints
Apply, list, approve/reject and the dashboard aggregate
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from unileave.database import get_db
from unileave.schemas.leave import (
    LeaveRequestCreate,
    LeaveRequestResponse,
    LeaveStats,
    LeaveStatusUpdate,
)
from unileave.services.leave_service import LeaveService

router = APIRouter(tags=["Leave Requests"])


@router.get("/leave-requests", response_model=List[LeaveRequestResponse])
def list_leave_requests(
    staff_id: Optional[str] = Query(None, alias="staffId"),
    db: Session = Depends(get_db),
):
    """All requests, or one staff member's when staffId is given. Newest first."""
    return LeaveService(db).list_leave_requests(staff_id)


@router.get("/leave-requests/{request_id}", response_model=LeaveRequestResponse)
def get_leave_request(request_id: int, db: Session = Depends(get_db)):
    return LeaveService(db).get_leave_request(request_id)


@router.post("/leave-requests", response_model=LeaveRequestResponse, status_code=status.HTTP_201_CREATED)
def create_leave_request(body: LeaveRequestCreate, db: Session = Depends(get_db)):
    return LeaveService(db).create_leave_request(
        staff_id=body.staff_id,
        type=body.type,
        start_date=body.start_date,
        end_date=body.end_date,
        days=body.days,
        reason=body.reason,
    )


@router.put("/leave-requests/{request_id}/status", response_model=LeaveRequestResponse)
def update_leave_status(request_id: int, body: LeaveStatusUpdate, db: Session = Depends(get_db)):
    """Approve or reject a pending request"""
    return LeaveService(db).update_status(
        request_id,
        body.status,
        approved_by=body.approved_by,
        rejected_reason=body.rejected_reason,
    )


@router.get("/leave-stats", response_model=LeaveStats)
def get_leave_stats(db: Session = Depends(get_db)):
    return LeaveService(db).get_leave_stats()
