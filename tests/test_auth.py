import pytest

from unileave.core.exceptions import AuthenticationError, ValidationError
from unileave.core.security import decode_access_token
from unileave.services.admin_settings_service import AdminSettingsService
from unileave.services.auth_service import AuthService


def test_staff_login(db, make_staff):
    staff = make_staff(email="musa@uni.edu.ng", password="password123")
    result = AuthService(db).login("MUSA@uni.edu.ng", "password123", "staff")

    assert result["success"] is True
    assert result["user"] == {
        "id": staff.id,
        "name": staff.name,
        "email": staff.email,
        "role": "staff",
        "department": staff.department,
    }
    claims = decode_access_token(result["access_token"])
    assert claims["sub"] == staff.id
    assert claims["role"] == "staff"


def test_staff_login_wrong_password(db, make_staff):
    make_staff(email="musa@uni.edu.ng", password="password123")
    with pytest.raises(AuthenticationError):
        AuthService(db).login("musa@uni.edu.ng", "nope-nope", "staff")


def test_staff_without_password_cannot_login(db, make_staff):
    make_staff(email="nopass@uni.edu.ng", password=None)
    with pytest.raises(AuthenticationError):
        AuthService(db).login("nopass@uni.edu.ng", "anything", "staff")


def test_admin_login_uses_admin_password(db, make_staff):
    make_staff(id="admin-1", email="admin@uni.edu.ng", password="password123")
    service = AuthService(db)

    result = service.login("admin@uni.edu.ng", "admin123", "admin")
    assert result["user"]["role"] == "admin"

    # Staff password is not the admin password
    with pytest.raises(AuthenticationError):
        service.login("admin@uni.edu.ng", "password123", "admin")

    AdminSettingsService(db).update_admin_password("admin123", "registry-2026")
    assert service.login("admin@uni.edu.ng", "registry-2026", "admin")["success"] is True


def test_admin_login_requires_staff_record(db):
    with pytest.raises(AuthenticationError):
        AuthService(db).login("outsider@uni.edu.ng", "admin123", "admin")


def test_invalid_role(db):
    with pytest.raises(ValidationError):
        AuthService(db).login("a@uni.edu.ng", "x", "superuser")


def test_decode_rejects_tampered_token():
    assert decode_access_token("not-a-token") is None
