"""
Demo data for a fresh database (SEED_DEMO_DATA=true).

Only runs when the staff table is empty. Balances are recomputed from the
inserted requests rather than stored directly.
"""
import logging
from datetime import date

from sqlalchemy.orm import Session

from unileave.core.security import get_password_hash
from unileave.models.leave_request import LeaveRequest
from unileave.models.staff import Staff
from unileave.services.staff_service import StaffService

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

DEMO_STAFF = [
    # id, name, email, department, position, totalLeave
    ("staff-1", "John Doe", "john.doe@fulafia.edu.ng", "Computer Science", "Lecturer", 30),
    ("staff-2", "Jane Smith", "jane.smith@fulafia.edu.ng", "Mathematics", "Senior Lecturer", 30),
    ("staff-3", "Mike Johnson", "mike.johnson@fulafia.edu.ng", "Physics", "Professor", 35),
    ("staff-4", "Sarah Wilson", "sarah.wilson@fulafia.edu.ng", "Chemistry", "Associate Professor", 32),
    ("staff-5", "David Brown", "david.brown@fulafia.edu.ng", "Biology", "Lecturer", 30),
    ("admin-1", "Admin User", "admin@fulafia.edu.ng", "Human Resources", "HR Manager", 25),
]

DEMO_REQUESTS = [
    # staffId, type, start, end, days, reason, status, applied, approvedBy, decided
    ("staff-1", "Annual Leave", date(2024, 2, 15), date(2024, 2, 19), 5, "Family vacation",
     "Approved", date(2024, 2, 1), "admin-1", date(2024, 2, 2)),
    ("staff-2", "Sick Leave", date(2024, 1, 20), date(2024, 1, 22), 3, "Medical appointment",
     "Approved", date(2024, 1, 19), "admin-1", date(2024, 1, 19)),
    ("staff-2", "Personal Leave", date(2024, 3, 10), date(2024, 3, 12), 3, "Personal matters",
     "Pending", date(2024, 3, 1), None, None),
    ("staff-3", "Annual Leave", date(2024, 1, 5), date(2024, 1, 15), 10, "Holiday break",
     "Approved", date(2023, 12, 20), "admin-1", date(2023, 12, 21)),
    ("staff-4", "Study Leave", date(2024, 4, 1), date(2024, 4, 3), 3, "Conference attendance",
     "Pending", date(2024, 3, 15), None, None),
]


def seed_demo_data(db: Session) -> bool:
    """Insert the demo staff and requests. Returns False if data already exists."""
    if db.query(Staff).count() > 0:
        logger.info("[SEED] Staff table not empty; skipping demo data")
        return False

    password_hash = get_password_hash(DEMO_PASSWORD)
    for staff_id, name, email, department, position, total in DEMO_STAFF:
        db.add(
            Staff(
                id=staff_id,
                name=name,
                email=email,
                department=department,
                position=position,
                password_hash=password_hash,
                total_leave=total,
                used_leave=0,
                pending_leave=0,
            )
        )
    db.flush()

    for staff_id, type_, start, end, days, reason, status, applied, approved_by, decided in DEMO_REQUESTS:
        db.add(
            LeaveRequest(
                staff_id=staff_id,
                type=type_,
                start_date=start,
                end_date=end,
                days=days,
                reason=reason,
                status=status,
                applied_date=applied,
                approved_by=approved_by,
                approved_date=decided,
            )
        )

    service = StaffService(db)
    for staff in db.query(Staff).all():
        service.recompute_balance(staff)

    db.commit()
    logger.info(f"[SEED] Inserted {len(DEMO_STAFF)} staff and {len(DEMO_REQUESTS)} leave requests")
    return True
