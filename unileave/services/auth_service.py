"""
Authentication Service
Verifies staff and admin credentials and issues access tokens
"""
import logging
from datetime import timedelta
from typing import Any, Dict

from sqlalchemy.orm import Session

from unileave.core.config import settings
from unileave.core.exceptions import AuthenticationError, ValidationError
from unileave.core.security import create_access_token, verify_password
from unileave.services.admin_settings_service import AdminSettingsService
from unileave.services.staff_service import StaffService

logger = logging.getLogger(__name__)

ROLES = ("staff", "admin")


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def login(self, email: str, password: str, role: str = "staff") -> Dict[str, Any]:
        """
        Authenticate a staff member or the administrator.

        Args:
            email: Login email, matched case-insensitively
            password: Plain text password
            role: "staff" checks the staff member's own password,
                  "admin" checks the shared admin password

        Returns:
            {success, user: {id, name, email, role, department}, access_token}
        """
        if role not in ROLES:
            raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")
        if not email or not password:
            raise AuthenticationError("Email and password are required")

        staff = StaffService(self.db).get_staff_by_email(email)
        if staff is None:
            logger.warning(f"[AUTH] Login failed for unknown email {email}")
            raise AuthenticationError("Invalid email or password")

        if role == "admin":
            valid = AdminSettingsService(self.db).verify_admin_password(password)
        else:
            valid = verify_password(password, staff.password_hash)

        if not valid:
            logger.warning(f"[AUTH] Login failed for {email} as {role}")
            raise AuthenticationError("Invalid email or password")

        access_token = create_access_token(
            data={"sub": staff.id, "email": staff.email, "role": role},
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )

        logger.info(f"[AUTH] {email} logged in as {role}")
        return {
            "success": True,
            "user": {
                "id": staff.id,
                "name": staff.name,
                "email": staff.email,
                "role": role,
                "department": staff.department,
            },
            "access_token": access_token,
            "token_type": "bearer",
        }
