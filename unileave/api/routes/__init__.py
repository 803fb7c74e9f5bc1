from unileave.api.routes.auth import router as auth_router
from unileave.api.routes.staff import router as staff_router
from unileave.api.routes.leave_requests import router as leave_requests_router
from unileave.api.routes.settings import router as settings_router
from unileave.api.routes.notifications import router as notifications_router
from unileave.api.routes.admin import router as admin_router
from unileave.api.routes.reports import router as reports_router

__all__ = [
    "auth_router",
    "staff_router",
    "leave_requests_router",
    "settings_router",
    "notifications_router",
    "admin_router",
    "reports_router",
]
