"""
Staff Ledger Service
CRUD over staff records plus balance bookkeeping.

Balance rules:
  usedLeave      = Σ days of Approved requests
  pendingLeave   = Σ days of Pending requests
  remainingLeave = totalLeave - usedLeave - pendingLeave

recompute_balance is called by every lifecycle mutation inside the caller's
transaction, so the stored counters never drift from the requests.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from unileave.core.exceptions import AuthenticationError, NotFoundError, StorageError, ValidationError
from unileave.core.security import password_hasher
from unileave.models.leave_request import LeaveRequest, LeaveStatus
from unileave.models.notification import Notification, StaffSettings
from unileave.models.staff import Staff
from unileave.services.admin_settings_service import AdminSettingsService

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "department", "position")

UPDATABLE_FIELDS = (
    "name",
    "email",
    "department",
    "position",
    "phone",
    "total_leave",
    "annual_leave",
    "sick_leave",
    "maternity_leave",
    "paternity_leave",
    "emergency_leave",
)

ENTITLEMENT_FIELDS = ("annual_leave", "sick_leave", "maternity_leave", "paternity_leave", "emergency_leave")


def generate_staff_id() -> str:
    return f"staff-{uuid.uuid4().hex[:12]}"


def _is_number(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class StaffService:
    """Staff records and their leave balances."""

    def __init__(self, db: Session):
        self.db = db

    # ──────────────────────────── Reads ────────────────────────────

    def get_staff_by_id(self, staff_id: str) -> Optional[Staff]:
        if not staff_id:
            return None
        return self.db.get(Staff, staff_id)

    def get_all_staff(self) -> List[Staff]:
        return self.db.query(Staff).order_by(Staff.name, Staff.id).all()

    def get_staff_by_email(self, email: str) -> Optional[Staff]:
        if not email:
            return None
        return self.db.query(Staff).filter(func.lower(Staff.email) == email.strip().lower()).first()

    def get_staff_stats(self, staff_id: str) -> Dict[str, int]:
        staff = self.get_staff_by_id(staff_id)
        if staff is None:
            raise NotFoundError(f"Staff {staff_id} not found")
        return {
            "total_leave": staff.total_leave,
            "used_leave": staff.used_leave,
            "pending_leave": staff.pending_leave,
            "remaining_leave": staff.remaining_leave,
        }

    # ──────────────────────────── Create ────────────────────────────

    def _validate_new_staff(self, data: Dict[str, Any]) -> None:
        missing = [f for f in REQUIRED_FIELDS if not str(data.get(f) or "").strip()]
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")
        if "@" not in data["email"]:
            raise ValidationError("A valid email address is required")

        total = data.get("total_leave")
        if not _is_number(total):
            raise ValidationError("totalLeave is required and must be a whole number")
        if total < 0:
            raise ValidationError("totalLeave cannot be negative")

        for field in ENTITLEMENT_FIELDS:
            value = data.get(field)
            if value is not None and (not _is_number(value) or value < 0):
                raise ValidationError(f"{field} must be a non-negative whole number")

    def _check_password(self, password: str) -> None:
        min_length = AdminSettingsService(self.db).get("min_password_length")
        if len(password) < min_length:
            raise ValidationError(f"Password must be at least {min_length} characters")

    def create_staff(self, data: Dict[str, Any]) -> Tuple[Staff, bool]:
        """
        Create a staff record.

        Idempotent by id and by email: when a matching record already exists it
        is returned unchanged and nothing is inserted.

        Returns:
            (staff, created)
        """
        self._validate_new_staff(data)

        staff_id = (data.get("id") or "").strip() or None
        if staff_id:
            existing = self.get_staff_by_id(staff_id)
            if existing is not None:
                logger.info(f"[STAFF] Staff {staff_id} already exists; returning existing record")
                return existing, False

        existing = self.get_staff_by_email(data["email"])
        if existing is not None:
            logger.info(f"[STAFF] Email {data['email']} already registered to {existing.id}; returning existing record")
            return existing, False

        password = data.get("password")
        if password:
            self._check_password(password)

        staff = Staff(
            id=staff_id or generate_staff_id(),
            name=data["name"].strip(),
            email=data["email"].strip(),
            department=data["department"].strip(),
            position=data["position"].strip(),
            phone=data.get("phone"),
            password_hash=password_hasher.hash(password) if password else None,
            total_leave=data["total_leave"],
            used_leave=0,
            pending_leave=0,
        )
        for field in ENTITLEMENT_FIELDS:
            setattr(staff, field, data.get(field))

        self.db.add(staff)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent insert of the same id/email
            self.db.rollback()
            existing = self.get_staff_by_id(staff.id) or self.get_staff_by_email(data["email"])
            if existing is not None:
                return existing, False
            raise StorageError("Failed to create staff member") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Failed to create staff member") from exc

        self.db.refresh(staff)
        logger.info(f"[STAFF] Created staff {staff.id} ({staff.email})")
        return staff, True

    # ──────────────────────────── Update ────────────────────────────

    def update_staff(self, staff_id: str, changes: Dict[str, Any]) -> Staff:
        staff = self.get_staff_by_id(staff_id)
        if staff is None:
            raise NotFoundError(f"Staff {staff_id} not found")

        changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS and v is not None}

        for field in REQUIRED_FIELDS:
            if field in changes and not str(changes[field]).strip():
                raise ValidationError(f"{field} cannot be empty")

        if "email" in changes:
            owner = self.get_staff_by_email(changes["email"])
            if owner is not None and owner.id != staff.id:
                raise ValidationError("Email already in use")

        if "total_leave" in changes and (not _is_number(changes["total_leave"]) or changes["total_leave"] < 0):
            raise ValidationError("totalLeave must be a non-negative whole number")
        if "total_leave" in changes:
            self.recompute_balance(staff)
            committed = staff.used_leave + staff.pending_leave
            if changes["total_leave"] < committed:
                raise ValidationError(
                    f"totalLeave cannot be below the {committed} day(s) already used or pending"
                )

        for field, value in changes.items():
            setattr(staff, field, value.strip() if isinstance(value, str) else value)

        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Failed to update staff member") from exc

        self.db.refresh(staff)
        logger.info(f"[STAFF] Updated staff {staff.id}: {', '.join(sorted(changes)) or 'no changes'}")
        return staff

    def change_password(self, staff_id: str, current_password: str, new_password: str) -> None:
        staff = self.get_staff_by_id(staff_id)
        if staff is None:
            raise NotFoundError(f"Staff {staff_id} not found")
        if staff.password_hash and not password_hasher.verify(current_password, staff.password_hash):
            raise AuthenticationError("Current password is incorrect")
        if not new_password:
            raise ValidationError("New password is required")
        self._check_password(new_password)

        staff.password_hash = password_hasher.hash(new_password)
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Failed to update password") from exc
        logger.info(f"[STAFF] Password changed for staff {staff_id}")

    # ──────────────────────────── Delete ────────────────────────────

    def delete_staff(self, staff_id: str) -> bool:
        """
        Delete a staff member with all their leave requests, notifications and
        settings in one transaction. Returns False when the id is unknown.
        """
        staff = self.get_staff_by_id(staff_id)
        if staff is None:
            return False

        try:
            counts = {
                "leave_requests": self.db.query(LeaveRequest).filter(LeaveRequest.staff_id == staff_id).count(),
                "notifications": self.db.query(Notification).filter(Notification.staff_id == staff_id).count(),
                "settings": self.db.query(StaffSettings).filter(StaffSettings.staff_id == staff_id).count(),
            }
            # ORM cascade removes the dependents in the same flush
            self.db.delete(staff)
            self.db.flush()
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"[STAFF] Delete of staff {staff_id} rolled back: {exc}")
            raise StorageError(f"Failed to delete staff {staff_id}") from exc

        logger.info(
            f"[STAFF] Deleted staff {staff_id} with {counts['leave_requests']} leave request(s), "
            f"{counts['notifications']} notification(s), {counts['settings']} settings row(s)"
        )
        return True

    # ──────────────────────────── Balance ────────────────────────────

    def recompute_balance(self, staff: Staff) -> Staff:
        """Refresh usedLeave/pendingLeave from the requests. Does not commit."""
        self.db.flush()
        rows = (
            self.db.query(LeaveRequest.status, func.coalesce(func.sum(LeaveRequest.days), 0))
            .filter(LeaveRequest.staff_id == staff.id)
            .group_by(LeaveRequest.status)
            .all()
        )
        totals = {status: int(days) for status, days in rows}
        staff.used_leave = totals.get(LeaveStatus.APPROVED.value, 0)
        staff.pending_leave = totals.get(LeaveStatus.PENDING.value, 0)
        return staff
