from datetime import date

import pytest
from sqlalchemy.exc import SQLAlchemyError

from unileave.core.exceptions import AuthenticationError, NotFoundError, StorageError, ValidationError
from unileave.core.security import password_hasher
from unileave.models.leave_request import LeaveRequest, LeaveStatus
from unileave.models.notification import Notification, StaffSettings
from unileave.models.staff import Staff
from unileave.services.leave_service import LeaveService
from unileave.services.notification_service import NotificationService
from unileave.services.settings_service import SettingsService
from unileave.services.staff_service import StaffService


def _apply(db, staff_id, days=3):
    return LeaveService(db).create_leave_request(
        staff_id, "Annual Leave", date(2026, 11, 2), date(2026, 11, 4), days, "Family trip"
    )


def test_create_staff_starts_with_zero_balance(db):
    staff, created = StaffService(db).create_staff({
        "id": "staff-a",
        "name": "Amina Bello",
        "email": "amina.bello@uni.edu.ng",
        "department": "Physics",
        "position": "Lecturer",
        "total_leave": 30,
        "used_leave": 12,
        "pending_leave": 4,
    })
    assert created is True
    assert staff.used_leave == 0
    assert staff.pending_leave == 0
    assert staff.remaining_leave == 30


def test_create_staff_generates_id_and_hashes_password(db):
    staff, _ = StaffService(db).create_staff({
        "name": "Tunde Okoro",
        "email": "tunde@uni.edu.ng",
        "department": "Chemistry",
        "position": "Professor",
        "total_leave": 35,
        "password": "s3cret-pass",
    })
    assert staff.id.startswith("staff-")
    assert staff.password_hash != "s3cret-pass"
    assert password_hasher.verify("s3cret-pass", staff.password_hash)


def test_duplicate_id_returns_existing_record(db, make_staff):
    original = make_staff(id="staff-dup", name="First Name", total_leave=30)
    again, created = StaffService(db).create_staff({
        "id": "staff-dup",
        "name": "Other Name",
        "email": "other@uni.edu.ng",
        "department": "Biology",
        "position": "Lecturer",
        "total_leave": 10,
    })
    assert created is False
    assert again.id == original.id
    assert again.name == "First Name"
    assert again.total_leave == 30
    assert db.query(Staff).count() == 1


def test_duplicate_email_is_case_insensitive(db, make_staff):
    make_staff(email="jane@uni.edu.ng")
    again, created = StaffService(db).create_staff({
        "name": "Jane",
        "email": "JANE@uni.edu.ng",
        "department": "Maths",
        "position": "Lecturer",
        "total_leave": 20,
    })
    assert created is False
    assert db.query(Staff).count() == 1


@pytest.mark.parametrize("missing", ["name", "email", "department", "position"])
def test_create_staff_requires_fields(db, missing):
    data = {
        "name": "X",
        "email": "x@uni.edu.ng",
        "department": "D",
        "position": "P",
        "total_leave": 10,
    }
    data[missing] = ""
    with pytest.raises(ValidationError):
        StaffService(db).create_staff(data)


def test_create_staff_rejects_negative_total(db):
    with pytest.raises(ValidationError):
        StaffService(db).create_staff({
            "name": "X", "email": "x@uni.edu.ng", "department": "D", "position": "P", "total_leave": -1,
        })


def test_create_staff_enforces_min_password_length(db):
    with pytest.raises(ValidationError):
        StaffService(db).create_staff({
            "name": "X", "email": "x@uni.edu.ng", "department": "D", "position": "P",
            "total_leave": 10, "password": "short",
        })


def test_get_all_staff_sorted_by_name(db, make_staff):
    make_staff(name="Zainab")
    make_staff(name="Bola")
    make_staff(name="Musa")
    assert [s.name for s in StaffService(db).get_all_staff()] == ["Bola", "Musa", "Zainab"]


def test_get_staff_stats_for_missing_id_raises(db):
    with pytest.raises(NotFoundError):
        StaffService(db).get_staff_stats("missing-id")


def test_stats_track_pending_and_approved(db, make_staff):
    staff = make_staff(total_leave=20)
    first = _apply(db, staff.id, days=5)
    _apply(db, staff.id, days=3)
    LeaveService(db).update_status(first.id, "Approved", approved_by="admin-1")

    stats = StaffService(db).get_staff_stats(staff.id)
    assert stats == {"total_leave": 20, "used_leave": 5, "pending_leave": 3, "remaining_leave": 12}


def test_update_staff_changes_fields(db, make_staff):
    staff = make_staff()
    updated = StaffService(db).update_staff(staff.id, {"position": "Senior Lecturer", "total_leave": 40})
    assert updated.position == "Senior Lecturer"
    assert updated.total_leave == 40
    assert updated.remaining_leave == 40


def test_update_staff_cannot_shrink_total_below_committed_days(db, make_staff):
    staff = make_staff(total_leave=20)
    leave = _apply(db, staff.id, days=10)
    LeaveService(db).update_status(leave.id, "Approved", approved_by="admin-1")

    with pytest.raises(ValidationError):
        StaffService(db).update_staff(staff.id, {"total_leave": 4})

    stats = StaffService(db).get_staff_stats(staff.id)
    assert stats == {"total_leave": 20, "used_leave": 10, "pending_leave": 0, "remaining_leave": 10}

    updated = StaffService(db).update_staff(staff.id, {"total_leave": 10})
    assert updated.remaining_leave == 0


def test_update_staff_rejects_taken_email(db, make_staff):
    make_staff(email="taken@uni.edu.ng")
    other = make_staff()
    with pytest.raises(ValidationError):
        StaffService(db).update_staff(other.id, {"email": "Taken@uni.edu.ng"})


def test_update_missing_staff_raises(db):
    with pytest.raises(NotFoundError):
        StaffService(db).update_staff("nobody", {"name": "X"})


def test_change_password(db, make_staff):
    staff = make_staff(password="password123")
    service = StaffService(db)
    service.change_password(staff.id, "password123", "new-password-1")
    assert password_hasher.verify("new-password-1", service.get_staff_by_id(staff.id).password_hash)

    with pytest.raises(AuthenticationError):
        service.change_password(staff.id, "password123", "another-password")


def test_delete_staff_cascades(db, make_staff):
    staff = make_staff()
    keep = make_staff()
    _apply(db, staff.id)
    _apply(db, keep.id)
    NotificationService(db).notify(staff.id, "system", "Welcome aboard")
    SettingsService(db).save_settings({"staff_id": staff.id, "leave_updates": False})

    assert StaffService(db).delete_staff(staff.id) is True

    assert db.get(Staff, staff.id) is None
    assert db.query(LeaveRequest).filter(LeaveRequest.staff_id == staff.id).count() == 0
    assert db.query(Notification).filter(Notification.staff_id == staff.id).count() == 0
    assert db.get(StaffSettings, staff.id) is None
    # Other staff untouched
    assert db.query(LeaveRequest).filter(LeaveRequest.staff_id == keep.id).count() == 1


def test_delete_unknown_staff_returns_false(db):
    assert StaffService(db).delete_staff("nobody") is False


def test_delete_staff_rolls_back_on_commit_failure(db, make_staff, monkeypatch):
    staff = make_staff()
    _apply(db, staff.id)
    NotificationService(db).notify(staff.id, "system", "Welcome aboard")

    def failing_commit():
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(db, "commit", failing_commit)

    with pytest.raises(StorageError):
        StaffService(db).delete_staff(staff.id)

    monkeypatch.undo()
    db.expire_all()
    assert db.get(Staff, staff.id) is not None
    assert db.query(LeaveRequest).filter(LeaveRequest.staff_id == staff.id).count() == 1
    assert db.query(Notification).filter(Notification.staff_id == staff.id).count() >= 1


def test_recompute_balance_ignores_rejected(db, make_staff):
    staff = make_staff(total_leave=30)
    rejected = _apply(db, staff.id, days=4)
    LeaveService(db).update_status(rejected.id, LeaveStatus.REJECTED, rejected_reason="Exams period")

    refreshed = StaffService(db).recompute_balance(db.get(Staff, staff.id))
    assert refreshed.used_leave == 0
    assert refreshed.pending_leave == 0


def _staff_with_history(db, make_staff):
    """s1 with 3 leave requests, 2 notifications and 1 settings row."""
    staff = make_staff(id="s1", total_leave=20)
    # Leave updates off so submissions do not add notifications of their own
    SettingsService(db).save_settings({"staff_id": "s1", "leave_updates": False})
    for _ in range(3):
        _apply(db, "s1", days=2)
    NotificationService(db).notify("s1", "system", "Welcome aboard")
    NotificationService(db).notify("s1", "alert", "Update your phone number")
    return staff


def _dependent_rows(db, staff_id):
    return (
        db.query(LeaveRequest).filter(LeaveRequest.staff_id == staff_id).count(),
        db.query(Notification).filter(Notification.staff_id == staff_id).count(),
        db.query(StaffSettings).filter(StaffSettings.staff_id == staff_id).count(),
    )


def test_delete_removes_all_seven_rows(db, make_staff):
    _staff_with_history(db, make_staff)
    assert _dependent_rows(db, "s1") == (3, 2, 1)

    assert StaffService(db).delete_staff("s1") is True
    assert _dependent_rows(db, "s1") == (0, 0, 0)
    assert LeaveService(db).list_leave_requests("s1") == []
    assert NotificationService(db).list_for_staff("s1") == []


def test_failed_delete_leaves_all_seven_rows(db, make_staff, monkeypatch):
    _staff_with_history(db, make_staff)

    def failing_commit():
        raise SQLAlchemyError("simulated failure")

    monkeypatch.setattr(db, "commit", failing_commit)
    with pytest.raises(StorageError):
        StaffService(db).delete_staff("s1")
    monkeypatch.undo()

    db.expire_all()
    assert db.get(Staff, "s1") is not None
    assert _dependent_rows(db, "s1") == (3, 2, 1)


def test_approve_scenario_for_s1(db, make_staff):
    make_staff(id="s1", total_leave=20)
    leave = _apply(db, "s1", days=5)
    assert leave.status == "Pending"

    LeaveService(db).update_status(leave.id, "Approved", "admin-1")
    record = LeaveService(db).get_leave_request(leave.id)
    assert record.status == "Approved"
    assert record.approved_by == "admin-1"
    assert record.approved_date == date.today()
