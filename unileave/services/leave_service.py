"""
Leave Request Lifecycle

    create_leave_request  -> Pending (balance reserved as pendingLeave)
    update_status         -> Approved | Rejected (terminal)

Every mutation recomputes the owner's balance and queues a "leave"
notification inside the same transaction; a failure anywhere rolls the whole
unit back.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from unileave.core.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from unileave.models.leave_request import DECISION_STATUSES, LeaveRequest, LeaveStatus, LeaveType
from unileave.models.notification import NotificationType
from unileave.services.admin_settings_service import AdminSettingsService
from unileave.services.notification_service import NotificationService
from unileave.services.staff_service import StaffService

logger = logging.getLogger(__name__)

VALID_TYPES = {t.value for t in LeaveType}
DECISION_VALUES = {s.value for s in DECISION_STATUSES}


def _value(enum_or_str: Any) -> str:
    return enum_or_str.value if hasattr(enum_or_str, "value") else str(enum_or_str or "")


class LeaveService:
    def __init__(self, db: Session):
        self.db = db
        self.staff_service = StaffService(db)
        self.notifications = NotificationService(db)

    # ──────────────────────────── Create ────────────────────────────

    def create_leave_request(
        self,
        staff_id: str,
        type: str,
        start_date: date,
        end_date: date,
        days: int,
        reason: str,
    ) -> LeaveRequest:
        type_value = _value(type)

        if not staff_id or not type_value or start_date is None or end_date is None:
            raise ValidationError("staffId, type, startDate and endDate are required")
        if not reason or not reason.strip():
            raise ValidationError("A reason is required")
        if type_value not in VALID_TYPES:
            raise ValidationError(f"Invalid leave type: {type_value!r}")
        if not isinstance(days, int) or isinstance(days, bool) or days < 1:
            raise ValidationError("days must be a whole number of at least 1")
        if start_date > end_date:
            raise ValidationError("startDate must be on or before endDate")

        staff = self.staff_service.get_staff_by_id(staff_id)
        if staff is None:
            raise ValidationError(f"Staff {staff_id} does not exist")

        max_days = AdminSettingsService(self.db).get("max_leave_days")
        if days > max_days:
            raise ValidationError(f"A single request cannot exceed {max_days} days")

        available = staff.remaining_leave
        if days > available:
            raise ValidationError(
                f"Insufficient leave balance: requested {days} day(s), {available} remaining"
            )

        leave = LeaveRequest(
            staff_id=staff_id,
            type=type_value,
            start_date=start_date,
            end_date=end_date,
            days=days,
            reason=reason.strip(),
            status=LeaveStatus.PENDING.value,
            applied_date=date.today(),
        )

        try:
            self.db.add(leave)
            self.staff_service.recompute_balance(staff)
            self.notifications.notify(
                staff_id,
                NotificationType.LEAVE,
                f"Your {type_value} request for {days} day(s) has been submitted and is awaiting approval.",
                related_request_id=leave.id,
                commit=False,
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"[LEAVE] Failed to create request for staff {staff_id}: {exc}")
            raise StorageError("Failed to create leave request") from exc

        self.db.refresh(leave)
        logger.info(f"[LEAVE] Request {leave.id} created for staff {staff_id}: {type_value}, {days} day(s)")
        return leave

    # ──────────────────────────── Read ────────────────────────────

    def get_leave_request(self, request_id: int) -> LeaveRequest:
        leave = self.db.get(LeaveRequest, request_id)
        if leave is None:
            raise NotFoundError(f"Leave request {request_id} not found")
        return leave

    def list_leave_requests(self, staff_id: Optional[str] = None) -> List[LeaveRequest]:
        query = self.db.query(LeaveRequest).options(joinedload(LeaveRequest.staff))
        if staff_id:
            query = query.filter(LeaveRequest.staff_id == staff_id)
        return query.order_by(LeaveRequest.applied_date.desc(), LeaveRequest.id.asc()).all()

    # ──────────────────────────── Decide ────────────────────────────

    def update_status(
        self,
        request_id: int,
        new_status: str,
        approved_by: Optional[str] = None,
        rejected_reason: Optional[str] = None,
    ) -> LeaveRequest:
        """
        Approve or reject a Pending request.

        The write is a conditional UPDATE guarded on status = 'Pending', so of
        two concurrent decisions only one can match a row.

        Raises:
            ValidationError: new_status is not Approved or Rejected.
            NotFoundError: no such request.
            InvalidTransitionError: the request was already decided.
        """
        status_value = _value(new_status)
        if status_value not in DECISION_VALUES:
            raise ValidationError(f"Status must be one of: {', '.join(sorted(DECISION_VALUES))}")

        today = date.today()
        values: Dict[Any, Any] = {
            LeaveRequest.status: status_value,
            LeaveRequest.approved_date: today,
        }
        if status_value == LeaveStatus.APPROVED.value:
            values[LeaveRequest.approved_by] = approved_by
        else:
            values[LeaveRequest.rejected_reason] = rejected_reason

        try:
            matched = (
                self.db.query(LeaveRequest)
                .filter(LeaveRequest.id == request_id, LeaveRequest.status == LeaveStatus.PENDING.value)
                .update(values, synchronize_session=False)
            )
            if matched == 0:
                self.db.rollback()
                current = self.db.get(LeaveRequest, request_id)
                if current is None:
                    raise NotFoundError(f"Leave request {request_id} not found")
                raise InvalidTransitionError(
                    f"Leave request {request_id} is already {current.status} and cannot be changed"
                )

            leave = self.db.get(LeaveRequest, request_id)
            self.db.refresh(leave)
            self.staff_service.recompute_balance(leave.staff)

            if status_value == LeaveStatus.APPROVED.value:
                message = (
                    f"Your {leave.type} request for {leave.days} day(s) "
                    f"({leave.start_date} to {leave.end_date}) has been approved."
                )
            else:
                message = f"Your {leave.type} request for {leave.days} day(s) has been rejected."
                if rejected_reason:
                    message += f" Reason: {rejected_reason}"
            self.notifications.notify(
                leave.staff_id,
                NotificationType.LEAVE,
                message,
                related_request_id=leave.id,
                commit=False,
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"[LEAVE] Failed to update request {request_id}: {exc}")
            raise StorageError(f"Failed to update leave request {request_id}") from exc

        self.db.refresh(leave)
        logger.info(f"[LEAVE] Request {request_id} {status_value.lower()} by {approved_by or 'admin'}")
        return leave

    # ──────────────────────────── Stats ────────────────────────────

    def get_leave_stats(self) -> Dict[str, Any]:
        requests = self.db.query(LeaveRequest).all()
        today = date.today()

        pending = sum(1 for r in requests if r.status == LeaveStatus.PENDING.value)
        approved_this_month = sum(
            1
            for r in requests
            if r.status == LeaveStatus.APPROVED.value
            and r.approved_date is not None
            and r.approved_date.year == today.year
            and r.approved_date.month == today.month
        )

        decided = [r for r in requests if r.approved_date is not None and r.applied_date is not None]
        if decided:
            mean_days = sum((r.approved_date - r.applied_date).days for r in decided) / len(decided)
            processing_time = f"{round(mean_days)} days"
        else:
            processing_time = "N/A"

        return {
            "total_applications": len(requests),
            "pending_approval": pending,
            "approved_this_month": approved_this_month,
            "processing_time": processing_time,
        }
