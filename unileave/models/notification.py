"""
Notification and per-staff notification preference models.

Display fields (title, link, relative time) are derived at read time by
NotificationService.describe and are never stored.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from unileave.db.base import Base


class NotificationType(str, Enum):
    LEAVE = "leave"
    SYSTEM = "system"
    ALERT = "alert"


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(64), primary_key=True)
    staff_id = Column(
        "staffId",
        String(64),
        ForeignKey("staff.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(String(20), nullable=False, default=NotificationType.SYSTEM.value)
    message = Column(Text, nullable=False)
    created_at = Column("createdAt", DateTime, nullable=False, default=datetime.utcnow)
    read = Column(Boolean, nullable=False, default=False)

    # Leave request that produced this notice, if any
    related_request_id = Column("relatedRequestId", Integer, nullable=True)

    staff = relationship("Staff", back_populates="notifications")

    def __repr__(self) -> str:
        return f"<Notification id={self.id} staff_id={self.staff_id} type={self.type} read={self.read}>"


class StaffSettings(Base):
    """Notification toggles, one row per staff member (upserted)."""

    __tablename__ = "settings"

    staff_id = Column(
        "staffId",
        String(64),
        ForeignKey("staff.id", ondelete="CASCADE"),
        primary_key=True,
    )
    email_notifications = Column("emailNotifications", Boolean, nullable=False, default=True)
    push_notifications = Column("pushNotifications", Boolean, nullable=False, default=True)
    leave_updates = Column("leaveUpdates", Boolean, nullable=False, default=True)
    system_alerts = Column("systemAlerts", Boolean, nullable=False, default=True)

    staff = relationship("Staff", back_populates="settings")

    def __repr__(self) -> str:
        return f"<StaffSettings staff_id={self.staff_id}>"
