"""
Staff Model

A university employee with a login identity and a leave entitlement.

usedLeave / pendingLeave are derived from the staff member's leave requests and
are recomputed by the services whenever a request is created or decided.

Owns (ON DELETE CASCADE):
- LeaveRequest
- Notification
- StaffSettings
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from unileave.db.base import Base


class Staff(Base):
    __tablename__ = "staff"

    # Primary key - opaque string id ("staff-1", "admin-1", ...)
    id = Column(String(64), primary_key=True)

    # Identity
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    department = Column(String(255), nullable=False, index=True)
    position = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    password_hash = Column("password", String(255), nullable=True)

    # Balance (days)
    total_leave = Column("totalLeave", Integer, nullable=False, default=0)
    used_leave = Column("usedLeave", Integer, nullable=False, default=0)
    pending_leave = Column("pendingLeave", Integer, nullable=False, default=0)

    # Itemized entitlements, recorded at creation only
    annual_leave = Column("annualLeave", Integer, nullable=True)
    sick_leave = Column("sickLeave", Integer, nullable=True)
    maternity_leave = Column("maternityLeave", Integer, nullable=True)
    paternity_leave = Column("paternityLeave", Integer, nullable=True)
    emergency_leave = Column("emergencyLeave", Integer, nullable=True)

    # Relationships
    leave_requests = relationship(
        "LeaveRequest",
        back_populates="staff",
        cascade="all, delete-orphan",
    )
    notifications = relationship(
        "Notification",
        back_populates="staff",
        cascade="all, delete-orphan",
    )
    settings = relationship(
        "StaffSettings",
        back_populates="staff",
        cascade="all, delete-orphan",
        uselist=False,
    )

    @property
    def remaining_leave(self) -> int:
        """Days still available once approved and pending days are taken out."""
        return (self.total_leave or 0) - (self.used_leave or 0) - (self.pending_leave or 0)

    def __repr__(self) -> str:
        return f"<Staff id={self.id} email={self.email} dept={self.department}>"
