from unileave.services.admin_settings_service import AdminSettingsService
from unileave.services.auth_service import AuthService
from unileave.services.leave_service import LeaveService
from unileave.services.notification_service import NotificationService
from unileave.services.report_service import ReportFilters, ReportService
from unileave.services.settings_service import SettingsService
from unileave.services.staff_service import StaffService

__all__ = [
    "AdminSettingsService",
    "AuthService",
    "LeaveService",
    "NotificationService",
    "ReportFilters",
    "ReportService",
    "SettingsService",
    "StaffService",
]
