import pytest

from unileave.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from unileave.models.admin_setting import AdminSetting
from unileave.services.admin_settings_service import ADMIN_PASSWORD_KEY, DEFAULT_ADMIN_SETTINGS, AdminSettingsService
from unileave.services.settings_service import SettingsService


def test_preferences_default_to_enabled(db, make_staff):
    staff = make_staff()
    prefs = SettingsService(db).get_settings(staff.id)
    assert prefs == {
        "staff_id": staff.id,
        "email_notifications": True,
        "push_notifications": True,
        "leave_updates": True,
        "system_alerts": True,
    }


def test_preferences_round_trip(db, make_staff):
    staff = make_staff()
    saved = {
        "staff_id": staff.id,
        "email_notifications": False,
        "push_notifications": True,
        "leave_updates": False,
        "system_alerts": True,
    }
    service = SettingsService(db)
    service.save_settings(saved)
    assert service.get_settings(staff.id) == saved

    # Upsert, not a second row
    service.save_settings({**saved, "system_alerts": False})
    assert service.get_settings(staff.id)["system_alerts"] is False


def test_preferences_for_unknown_staff(db):
    with pytest.raises(NotFoundError):
        SettingsService(db).save_settings({"staff_id": "ghost", "leave_updates": False})
    with pytest.raises(ValidationError):
        SettingsService(db).get_settings("")


def test_admin_defaults(db):
    assert AdminSettingsService(db).get_settings() == DEFAULT_ADMIN_SETTINGS


def test_admin_partial_save_keeps_types(db):
    service = AdminSettingsService(db)
    result = service.save_settings({"max_leave_days": 40, "auto_approval": True})
    assert result["max_leave_days"] == 40
    assert result["auto_approval"] is True
    assert result["session_timeout"] == DEFAULT_ADMIN_SETTINGS["session_timeout"]
    assert service.get("max_leave_days") == 40


def test_admin_rejects_unknown_keys(db):
    with pytest.raises(ValidationError):
        AdminSettingsService(db).save_settings({"holiday_mode": True})


@pytest.mark.parametrize(
    "changes",
    [
        {"max_leave_days": 0},
        {"max_leave_days": -3},
        {"min_password_length": 0},
        {"max_login_attempts": 0},
        {"password_expiry": -1},
        {"max_carry_over_days": "five"},
    ],
)
def test_admin_rejects_out_of_range_values(db, changes):
    service = AdminSettingsService(db)
    with pytest.raises(ValidationError):
        service.save_settings(changes)
    assert service.get_settings() == DEFAULT_ADMIN_SETTINGS


def test_admin_reset_keeps_password(db):
    service = AdminSettingsService(db)
    service.update_admin_password("admin123", "new-admin-pass")
    service.save_settings({"max_leave_days": 12})

    assert service.reset_settings() == DEFAULT_ADMIN_SETTINGS
    assert service.verify_admin_password("new-admin-pass") is True


def test_admin_password_change(db):
    service = AdminSettingsService(db)
    assert service.verify_admin_password("admin123") is True

    with pytest.raises(AuthenticationError):
        service.update_admin_password("wrong", "whatever-123")
    with pytest.raises(ValidationError):
        service.update_admin_password("admin123", "short")

    service.update_admin_password("admin123", "registry-2026")
    assert service.verify_admin_password("registry-2026") is True
    assert service.verify_admin_password("admin123") is False


def test_default_admin_password_is_stored_hashed(db):
    service = AdminSettingsService(db)
    assert db.get(AdminSetting, ADMIN_PASSWORD_KEY) is None

    assert service.verify_admin_password("not-the-password") is False
    assert service.verify_admin_password("") is False

    row = db.get(AdminSetting, ADMIN_PASSWORD_KEY)
    assert row is not None
    assert row.value != "admin123"
    assert row.value.startswith("$pbkdf2-sha256$")
    assert service.verify_admin_password("admin123") is True
