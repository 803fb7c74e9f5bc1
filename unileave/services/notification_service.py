"""
Notification Service

Responsibilities:
  • notify          - insert an unread notification for a staff member
  • mark_read       - toggle a single notification
  • mark_all_read   - bulk update for one staff member
  • remove / clear  - hard deletes
  • describe        - read-time title/link/relative time, never stored

Lifecycle notices (type "leave") honour the staff member's leaveUpdates
preference; everything else is always delivered.
"""
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from unileave.core.exceptions import NotFoundError, StorageError, ValidationError
from unileave.models.notification import Notification, NotificationType, StaffSettings
from unileave.models.staff import Staff

logger = logging.getLogger(__name__)

# ── Read-time display fields ─────────────────────────────────────────────────

TYPE_TITLES = {
    NotificationType.LEAVE.value: "Leave Update",
    NotificationType.SYSTEM.value: "System Notice",
    NotificationType.ALERT.value: "Alert",
}

TYPE_LINKS = {
    NotificationType.LEAVE.value: "/history",
    NotificationType.SYSTEM.value: "/about",
    NotificationType.ALERT.value: None,
}

# Matched against the fixed sentence LeaveService writes, never the free-text reason
LEAVE_TITLES = (
    ("has been rejected", "Leave Request Rejected"),
    ("has been approved", "Leave Request Approved"),
    ("has been submitted", "Leave Request Submitted"),
    ("balance", "Leave Balance Updated"),
)

REASON_MARKER = " reason:"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def relative_time(moment: datetime, now: Optional[datetime] = None) -> str:
    """Human readable age of *moment*, e.g. '2 minutes ago'."""
    now = now or datetime.utcnow()
    seconds = int((now - moment).total_seconds())
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return _plural(seconds // 60, "minute")
    if seconds < 86400:
        return _plural(seconds // 3600, "hour")
    days = seconds // 86400
    if days < 7:
        return _plural(days, "day")
    if days < 30:
        return _plural(days // 7, "week")
    return moment.strftime("%Y-%m-%d")


def describe(notification: Notification, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Notification as a dict including the derived display fields."""
    title = TYPE_TITLES.get(notification.type, "Notification")
    if notification.type == NotificationType.LEAVE.value:
        lowered = (notification.message or "").lower().split(REASON_MARKER, 1)[0]
        for keyword, leave_title in LEAVE_TITLES:
            if keyword in lowered:
                title = leave_title
                break

    return {
        "id": notification.id,
        "staff_id": notification.staff_id,
        "type": notification.type,
        "message": notification.message,
        "created_at": notification.created_at,
        "read": bool(notification.read),
        "related_request_id": notification.related_request_id,
        "title": title,
        "time": relative_time(notification.created_at, now),
        "unread": not notification.read,
        "link": TYPE_LINKS.get(notification.type),
    }


class NotificationService:
    """Create, list, mark and delete notifications."""

    def __init__(self, db: Session):
        self.db = db

    # ──────────────────────────── Emit ────────────────────────────

    def _wants_leave_updates(self, staff_id: str) -> bool:
        prefs = self.db.get(StaffSettings, staff_id)
        return prefs is None or bool(prefs.leave_updates)

    def notify(
        self,
        staff_id: str,
        type: str,
        message: str,
        related_request_id: Optional[int] = None,
        commit: bool = True,
    ) -> Optional[Notification]:
        """
        Insert an unread notification.

        Args:
            staff_id:           Recipient.
            type:               leave / system / alert.
            message:            Body text.
            related_request_id: Leave request the notice is about, if any.
            commit:             False when the caller owns the transaction.

        Returns:
            The new Notification, or None when the recipient opted out of
            leave updates.
        """
        type_value = type.value if isinstance(type, NotificationType) else str(type or "")
        if type_value not in TYPE_TITLES:
            raise ValidationError(f"Invalid notification type: {type_value!r}")
        if not message or not message.strip():
            raise ValidationError("Notification message is required")
        if self.db.get(Staff, staff_id) is None:
            raise NotFoundError(f"Staff {staff_id} not found")

        if type_value == NotificationType.LEAVE.value and not self._wants_leave_updates(staff_id):
            logger.info(f"[NOTIFY] Staff {staff_id} opted out of leave updates; skipped")
            return None

        notification = Notification(
            id=str(uuid.uuid4()),
            staff_id=staff_id,
            type=type_value,
            message=message.strip(),
            created_at=datetime.utcnow(),
            read=False,
            related_request_id=related_request_id,
        )
        self.db.add(notification)

        if commit:
            try:
                self.db.commit()
            except SQLAlchemyError as exc:
                self.db.rollback()
                raise StorageError("Failed to create notification") from exc
            self.db.refresh(notification)

        logger.info(f"[NOTIFY] {type_value} notification queued for staff {staff_id}")
        return notification

    # ──────────────────────────── Read ────────────────────────────

    def list_for_staff(self, staff_id: str) -> List[Notification]:
        return (
            self.db.query(Notification)
            .filter(Notification.staff_id == staff_id)
            .order_by(Notification.created_at.desc(), Notification.id)
            .all()
        )

    def unread_count(self, staff_id: str) -> int:
        return (
            self.db.query(Notification)
            .filter(Notification.staff_id == staff_id, Notification.read.is_(False))
            .count()
        )

    # ──────────────────────────── Update / delete ────────────────────────────

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError(f"Failed to {action}") from exc

    def mark_read(self, notification_id: str, read: bool = True) -> bool:
        notification = self.db.get(Notification, notification_id)
        if notification is None:
            return False
        notification.read = read
        self._commit("update notification")
        return True

    def mark_all_read(self, staff_id: str) -> int:
        updated = (
            self.db.query(Notification)
            .filter(Notification.staff_id == staff_id, Notification.read.is_(False))
            .update({Notification.read: True}, synchronize_session=False)
        )
        self._commit("update notifications")
        logger.info(f"[NOTIFY] Marked {updated} notification(s) read for staff {staff_id}")
        return updated

    def remove(self, notification_id: str) -> bool:
        notification = self.db.get(Notification, notification_id)
        if notification is None:
            return False
        self.db.delete(notification)
        self._commit("delete notification")
        return True

    def clear_all(self, staff_id: str) -> int:
        deleted = (
            self.db.query(Notification)
            .filter(Notification.staff_id == staff_id)
            .delete(synchronize_session=False)
        )
        self._commit("clear notifications")
        return deleted
