"""
Settings Routes - per-staff notification preferences
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from unileave.core.exceptions import ValidationError
from unileave.database import get_db
from unileave.schemas.notification import NotificationSettings
from unileave.services.settings_service import SettingsService

router = APIRouter(tags=["Settings"])


@router.get("", response_model=NotificationSettings)
def get_settings(
    staff_id: Optional[str] = Query(None, alias="staffId"),
    db: Session = Depends(get_db),
):
    """Stored preferences, or the defaults (everything on) if never saved"""
    if not staff_id:
        raise ValidationError("staffId is required")
    return SettingsService(db).get_settings(staff_id)


@router.post("", response_model=NotificationSettings)
def save_settings(prefs: NotificationSettings, db: Session = Depends(get_db)):
    return SettingsService(db).save_settings(prefs.model_dump())
