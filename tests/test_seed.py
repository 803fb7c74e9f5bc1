from unileave.db.seed import DEMO_PASSWORD, seed_demo_data
from unileave.models.leave_request import LeaveRequest
from unileave.models.staff import Staff
from unileave.services.auth_service import AuthService


def test_seed_populates_empty_database(db):
    assert seed_demo_data(db) is True
    assert db.query(Staff).count() == 6
    assert db.query(LeaveRequest).count() == 5

    jane = db.get(Staff, "staff-2")
    assert jane.used_leave == 3
    assert jane.pending_leave == 3
    assert jane.remaining_leave == 24

    assert AuthService(db).login("john.doe@fulafia.edu.ng", DEMO_PASSWORD)["user"]["id"] == "staff-1"


def test_seed_skips_when_staff_exist(db, make_staff):
    make_staff()
    assert seed_demo_data(db) is False
    assert db.query(LeaveRequest).count() == 0
