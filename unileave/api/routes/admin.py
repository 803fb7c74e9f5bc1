"""
Admin Routes - institution-wide leave and security policy
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from unileave.database import get_db
from unileave.schemas.admin import AdminPasswordChange, AdminSettingsResponse, AdminSettingsUpdate
from unileave.schemas.common import SuccessResponse
from unileave.services.admin_settings_service import AdminSettingsService

router = APIRouter(tags=["Admin"])


@router.get("/settings", response_model=AdminSettingsResponse)
def get_admin_settings(db: Session = Depends(get_db)):
    return AdminSettingsService(db).get_settings()


@router.post("/settings", response_model=AdminSettingsResponse)
def save_admin_settings(changes: AdminSettingsUpdate, db: Session = Depends(get_db)):
    """Save any subset of the policy values; omitted keys keep their current value"""
    return AdminSettingsService(db).save_settings(changes.model_dump(exclude_none=True))


@router.post("/settings/reset", response_model=AdminSettingsResponse)
def reset_admin_settings(db: Session = Depends(get_db)):
    return AdminSettingsService(db).reset_settings()


@router.post("/settings/password", response_model=SuccessResponse)
def change_admin_password(body: AdminPasswordChange, db: Session = Depends(get_db)):
    AdminSettingsService(db).update_admin_password(body.current_password, body.new_password)
    return SuccessResponse(message="Admin password updated successfully")
