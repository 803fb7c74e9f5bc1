"""
Staff Endpoints
Staff records, balances and password changes
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from unileave.core.exceptions import NotFoundError
from unileave.database import get_db
from unileave.schemas.common import SuccessResponse
from unileave.schemas.staff import PasswordChange, StaffCreate, StaffResponse, StaffStats, StaffUpdate
from unileave.services.staff_service import StaffService

router = APIRouter(tags=["Staff"])


@router.get("", response_model=List[StaffResponse])
def list_staff(db: Session = Depends(get_db)):
    return StaffService(db).get_all_staff()


@router.get("/{staff_id}", response_model=StaffResponse)
def get_staff(staff_id: str, db: Session = Depends(get_db)):
    staff = StaffService(db).get_staff_by_id(staff_id)
    if staff is None:
        raise NotFoundError(f"Staff {staff_id} not found")
    return staff


@router.get("/{staff_id}/stats", response_model=StaffStats)
def get_staff_stats(staff_id: str, db: Session = Depends(get_db)):
    """Total, used, pending and remaining leave days"""
    return StaffService(db).get_staff_stats(staff_id)


@router.post("", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
def create_staff(staff_in: StaffCreate, response: Response, db: Session = Depends(get_db)):
    """
    Create a staff member.

    Re-posting an existing id or email returns the stored record with 200
    instead of creating a duplicate.
    """
    staff, created = StaffService(db).create_staff(staff_in.model_dump())
    if not created:
        response.status_code = status.HTTP_200_OK
    return staff


@router.put("/{staff_id}", response_model=StaffResponse)
def update_staff(staff_id: str, changes: StaffUpdate, db: Session = Depends(get_db)):
    return StaffService(db).update_staff(staff_id, changes.model_dump(exclude_unset=True))


@router.put("/{staff_id}/password", response_model=SuccessResponse)
def change_password(staff_id: str, body: PasswordChange, db: Session = Depends(get_db)):
    StaffService(db).change_password(staff_id, body.current_password, body.new_password)
    return SuccessResponse(message="Password updated successfully")


@router.delete("/{staff_id}", response_model=SuccessResponse)
def delete_staff(staff_id: str, db: Session = Depends(get_db)):
    """Delete a staff member together with their leave requests, notifications and settings"""
    if not StaffService(db).delete_staff(staff_id):
        raise NotFoundError(f"Staff {staff_id} not found")
    return SuccessResponse(message="Staff member deleted successfully")
