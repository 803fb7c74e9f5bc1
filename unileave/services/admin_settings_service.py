"""
Admin Settings Service
Global institution policy stored as key/value rows in admin_settings.

Values are stored as text and coerced back to the type of their default on
read. The admin password lives in the same table under ADMIN_PASSWORD_KEY as
a salted hash and survives a reset.
"""
import logging
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from unileave.core.config import settings
from unileave.core.exceptions import AuthenticationError, StorageError, ValidationError
from unileave.core.security import password_hasher
from unileave.models.admin_setting import AdminSetting

logger = logging.getLogger(__name__)

ADMIN_PASSWORD_KEY = "adminPassword"

DEFAULT_ADMIN_SETTINGS: Dict[str, Any] = {
    "institution_name": settings.INSTITUTION_NAME,
    "system_email": settings.SYSTEM_EMAIL,
    "max_leave_days": 25,
    "min_advance_notice": 7,
    "fiscal_year_start": "january",
    "max_carry_over_days": 5,
    "auto_approval": False,
    "email_notifications": True,
    "min_password_length": 8,
    "password_expiry": 90,
    "session_timeout": 30,
    "max_login_attempts": 5,
}

# Lowest accepted value for each numeric policy
SETTING_MINIMUMS: Dict[str, int] = {
    "max_leave_days": 1,
    "min_advance_notice": 0,
    "max_carry_over_days": 0,
    "min_password_length": 1,
    "password_expiry": 0,
    "session_timeout": 1,
    "max_login_attempts": 1,
}


def _coerce(default: Any, raw: str) -> Any:
    # bool first: bool is a subclass of int
    if isinstance(default, bool):
        return raw.strip().lower() in ("true", "1", "yes", "on")
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"[ADMIN] Ignoring non-numeric stored value {raw!r}")
            return default
    return raw


def _serialize(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class AdminSettingsService:
    """Read and write the institution-wide policy knobs."""

    def __init__(self, db: Session):
        self.db = db

    def get_settings(self) -> Dict[str, Any]:
        """Stored values merged over the defaults."""
        result = dict(DEFAULT_ADMIN_SETTINGS)
        for row in self.db.query(AdminSetting).all():
            if row.key in result:
                result[row.key] = _coerce(DEFAULT_ADMIN_SETTINGS[row.key], row.value)
        return result

    def get(self, key: str) -> Any:
        return self.get_settings()[key]

    def save_settings(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Upsert the given keys. Unknown keys are rejected."""
        unknown = [k for k in changes if k not in DEFAULT_ADMIN_SETTINGS]
        if unknown:
            raise ValidationError(f"Unknown admin setting(s): {', '.join(sorted(unknown))}")

        for key, minimum in SETTING_MINIMUMS.items():
            value = changes.get(key)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
                raise ValidationError(f"{key} must be a whole number of at least {minimum}")

        try:
            for key, value in changes.items():
                if value is None:
                    continue
                row = self.db.get(AdminSetting, key)
                if row is None:
                    self.db.add(AdminSetting(key=key, value=_serialize(value)))
                else:
                    row.value = _serialize(value)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"[ADMIN] Failed saving settings: {exc}")
            raise StorageError("Failed to save admin settings") from exc

        logger.info(f"[ADMIN] Settings updated: {', '.join(sorted(changes))}")
        return self.get_settings()

    def reset_settings(self) -> Dict[str, Any]:
        """Drop every stored policy value; the admin password is kept."""
        try:
            deleted = (
                self.db.query(AdminSetting)
                .filter(AdminSetting.key != ADMIN_PASSWORD_KEY)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Failed to reset admin settings") from exc

        logger.info(f"[ADMIN] Settings reset to defaults ({deleted} stored value(s) removed)")
        return self.get_settings()

    # ─────────────────────── Admin password ───────────────────────

    def _admin_password_row(self) -> AdminSetting:
        """The stored hash, seeded from DEFAULT_ADMIN_PASSWORD on first use."""
        row = self.db.get(AdminSetting, ADMIN_PASSWORD_KEY)
        if row is not None:
            return row

        row = AdminSetting(key=ADMIN_PASSWORD_KEY, value=password_hasher.hash(settings.DEFAULT_ADMIN_PASSWORD))
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Failed to initialise admin password") from exc

        logger.info("[ADMIN] Stored hashed default admin password")
        return row

    def verify_admin_password(self, plain: str) -> bool:
        return password_hasher.verify(plain, self._admin_password_row().value)

    def update_admin_password(self, current_password: str, new_password: str) -> None:
        if not self.verify_admin_password(current_password):
            raise AuthenticationError("Current admin password is incorrect")

        min_length = self.get("min_password_length")
        if not new_password or len(new_password) < min_length:
            raise ValidationError(f"Password must be at least {min_length} characters")

        row = self._admin_password_row()
        row.value = password_hasher.hash(new_password)
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Failed to update admin password") from exc

        logger.info("[ADMIN] Admin password changed")
