"""
Per-staff notification preferences (settings table), upserted by staffId.
"""
import logging
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from unileave.core.exceptions import NotFoundError, StorageError, ValidationError
from unileave.models.notification import StaffSettings
from unileave.models.staff import Staff

logger = logging.getLogger(__name__)

TOGGLES = ("email_notifications", "push_notifications", "leave_updates", "system_alerts")


def _as_dict(staff_id: str, prefs: StaffSettings = None) -> Dict[str, Any]:
    result = {"staff_id": staff_id}
    for toggle in TOGGLES:
        result[toggle] = True if prefs is None else bool(getattr(prefs, toggle))
    return result


class SettingsService:
    def __init__(self, db: Session):
        self.db = db

    def get_settings(self, staff_id: str) -> Dict[str, Any]:
        """Stored preferences, or the all-on defaults when none were saved."""
        if not staff_id:
            raise ValidationError("staffId is required")
        return _as_dict(staff_id, self.db.get(StaffSettings, staff_id))

    def save_settings(self, data: Dict[str, Any]) -> Dict[str, Any]:
        staff_id = data.get("staff_id")
        if not staff_id:
            raise ValidationError("staffId is required")
        if self.db.get(Staff, staff_id) is None:
            raise NotFoundError(f"Staff {staff_id} not found")

        prefs = self.db.get(StaffSettings, staff_id)
        if prefs is None:
            prefs = StaffSettings(staff_id=staff_id)
            self.db.add(prefs)

        for toggle in TOGGLES:
            if data.get(toggle) is not None:
                setattr(prefs, toggle, bool(data[toggle]))
            elif getattr(prefs, toggle) is None:
                setattr(prefs, toggle, True)

        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Failed to save settings") from exc

        logger.info(f"[SETTINGS] Preferences saved for staff {staff_id}")
        return _as_dict(staff_id, prefs)
