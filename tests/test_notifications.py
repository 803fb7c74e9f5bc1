from datetime import date, datetime, timedelta

import pytest

from unileave.core.exceptions import NotFoundError, ValidationError
from unileave.models.notification import Notification
from unileave.services.leave_service import LeaveService
from unileave.services.notification_service import NotificationService, describe, relative_time
from unileave.services.settings_service import SettingsService


def test_notify_creates_unread(db, make_staff):
    staff = make_staff()
    note = NotificationService(db).notify(staff.id, "system", "Portal maintenance on Friday")
    assert note.read is False
    assert note.created_at is not None
    assert NotificationService(db).unread_count(staff.id) == 1


def test_notify_validates_input(db, make_staff):
    staff = make_staff()
    service = NotificationService(db)
    with pytest.raises(ValidationError):
        service.notify(staff.id, "reminder", "Hello")
    with pytest.raises(ValidationError):
        service.notify(staff.id, "system", "  ")
    with pytest.raises(NotFoundError):
        service.notify("ghost", "system", "Hello")


def test_leave_updates_preference_only_mutes_leave_type(db, make_staff):
    staff = make_staff()
    SettingsService(db).save_settings({"staff_id": staff.id, "leave_updates": False})
    service = NotificationService(db)
    assert service.notify(staff.id, "leave", "Your leave was approved") is None
    assert service.notify(staff.id, "alert", "Balance running low") is not None


def test_mark_read_and_mark_all(db, make_staff):
    staff = make_staff()
    service = NotificationService(db)
    first = service.notify(staff.id, "system", "One")
    service.notify(staff.id, "system", "Two")
    service.notify(staff.id, "alert", "Three")

    assert service.mark_read(first.id) is True
    assert service.unread_count(staff.id) == 2
    assert service.mark_read(first.id, read=False) is True
    assert service.unread_count(staff.id) == 3

    assert service.mark_all_read(staff.id) == 3
    assert service.unread_count(staff.id) == 0
    assert service.mark_read("missing") is False


def test_remove_and_clear(db, make_staff):
    staff = make_staff()
    service = NotificationService(db)
    note = service.notify(staff.id, "system", "One")
    service.notify(staff.id, "system", "Two")

    assert service.remove(note.id) is True
    assert service.remove(note.id) is False
    assert service.clear_all(staff.id) == 1
    assert db.query(Notification).count() == 0


def test_list_newest_first(db, make_staff):
    staff = make_staff()
    service = NotificationService(db)
    old = service.notify(staff.id, "system", "Old")
    old.created_at = datetime.utcnow() - timedelta(hours=2)
    db.commit()
    new = service.notify(staff.id, "system", "New")

    assert [n.id for n in service.list_for_staff(staff.id)] == [new.id, old.id]


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=10), "just now"),
        (timedelta(minutes=1), "1 minute ago"),
        (timedelta(minutes=2), "2 minutes ago"),
        (timedelta(hours=5), "5 hours ago"),
        (timedelta(days=1), "1 day ago"),
        (timedelta(days=14), "2 weeks ago"),
    ],
)
def test_relative_time(delta, expected):
    now = datetime(2026, 10, 19, 12, 0, 0)
    assert relative_time(now - delta, now) == expected


def test_relative_time_falls_back_to_date():
    now = datetime(2026, 10, 19, 12, 0, 0)
    assert relative_time(datetime(2026, 6, 1, 9, 30), now) == "2026-06-01"


def test_describe_derives_display_fields():
    now = datetime(2026, 10, 19, 12, 0, 0)
    note = Notification(
        id="n-1",
        staff_id="staff-1",
        type="leave",
        message="Your Annual Leave request for 5 day(s) has been approved.",
        created_at=now - timedelta(minutes=2),
        read=False,
    )
    shown = describe(note, now)
    assert shown["title"] == "Leave Request Approved"
    assert shown["time"] == "2 minutes ago"
    assert shown["unread"] is True
    assert shown["link"] == "/history"

    note.type = "alert"
    note.read = True
    shown = describe(note, now)
    assert shown["title"] == "Alert"
    assert shown["unread"] is False
    assert shown["link"] is None


def test_rejection_title_ignores_wording_of_the_reason(db, make_staff):
    staff = make_staff()
    leave = LeaveService(db).create_leave_request(
        staff.id, "Annual Leave", date(2026, 11, 2), date(2026, 11, 4), 3, "Conference"
    )
    LeaveService(db).update_status(
        leave.id, "Rejected", rejected_reason="Not approved by head of department"
    )
    notes = NotificationService(db).list_for_staff(staff.id)
    decision = next(n for n in notes if "head of department" in n.message)
    assert describe(decision)["title"] == "Leave Request Rejected"


def test_submitted_title_is_not_mistaken_for_approval():
    note = Notification(
        id="n-2",
        staff_id="staff-1",
        type="leave",
        message="Your Sick Leave request for 2 day(s) has been submitted and is awaiting approval.",
        created_at=datetime(2026, 10, 19, 12, 0, 0),
        read=False,
    )
    assert describe(note)["title"] == "Leave Request Submitted"
