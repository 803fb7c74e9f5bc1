"""
Leave Request Model

A dated request for time off. Lifecycle:

    Pending -> Approved
    Pending -> Rejected

Approved and Rejected are terminal. approvedDate holds the decision date for
both outcomes.
"""

from enum import Enum

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from unileave.db.base import Base


class LeaveType(str, Enum):
    ANNUAL = "Annual Leave"
    SICK = "Sick Leave"
    PERSONAL = "Personal Leave"
    MATERNITY = "Maternity Leave"
    PATERNITY = "Paternity Leave"
    EMERGENCY = "Emergency Leave"
    STUDY = "Study Leave"
    RESEARCH = "Research Leave"


class LeaveStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


# Statuses an admin may move a Pending request into
DECISION_STATUSES = (LeaveStatus.APPROVED, LeaveStatus.REJECTED)


class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    # Primary Key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Foreign Keys
    staff_id = Column(
        "staffId",
        String(64),
        ForeignKey("staff.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Leave Details
    type = Column(String(50), nullable=False)
    start_date = Column("startDate", Date, nullable=False)
    end_date = Column("endDate", Date, nullable=False)
    days = Column(Integer, nullable=False)
    reason = Column(Text, nullable=True)

    # Approval
    status = Column(String(20), nullable=False, default=LeaveStatus.PENDING.value, index=True)
    applied_date = Column("appliedDate", Date, nullable=False)
    approved_by = Column("approvedBy", String(64), nullable=True)
    approved_date = Column("approvedDate", Date, nullable=True)
    rejected_reason = Column("rejectedReason", Text, nullable=True)

    # Relationships
    staff = relationship("Staff", back_populates="leave_requests")

    @property
    def staff_name(self):
        return self.staff.name if self.staff else None

    @property
    def department(self):
        return self.staff.department if self.staff else None

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.PENDING.value

    def __repr__(self) -> str:
        return f"<LeaveRequest id={self.id} staff_id={self.staff_id} type={self.type} status={self.status}>"
