# Import all models in dependency order so relationships resolve
from unileave.models.staff import Staff
from unileave.models.leave_request import LeaveRequest, LeaveStatus, LeaveType
from unileave.models.notification import Notification, NotificationType, StaffSettings
from unileave.models.admin_setting import AdminSetting

__all__ = [
    "Staff",
    "LeaveRequest",
    "LeaveStatus",
    "LeaveType",
    "Notification",
    "NotificationType",
    "StaffSettings",
    "AdminSetting",
]
