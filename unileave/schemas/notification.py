"""
Notification & Preference Schemas
"""
from datetime import datetime
from typing import Optional

from unileave.models.notification import NotificationType
from unileave.schemas.common import CamelModel


class NotificationCreate(CamelModel):
    staff_id: str
    type: NotificationType = NotificationType.SYSTEM
    message: str
    related_request_id: Optional[int] = None


class NotificationResponse(CamelModel):
    id: str
    staff_id: str
    type: str
    message: str
    created_at: datetime
    read: bool
    related_request_id: Optional[int] = None
    # Derived at read time
    title: str
    time: str
    unread: bool
    link: Optional[str] = None


class NotificationReadUpdate(CamelModel):
    read: bool = True


class NotificationSettings(CamelModel):
    staff_id: str
    email_notifications: bool = True
    push_notifications: bool = True
    leave_updates: bool = True
    system_alerts: bool = True
