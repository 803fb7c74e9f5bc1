"""
Notification Endpoints
Per-staff inbox: list, create, mark read, delete
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from unileave.core.exceptions import NotFoundError, ValidationError
from unileave.database import get_db
from unileave.schemas.common import SuccessResponse
from unileave.schemas.notification import (
    NotificationCreate,
    NotificationReadUpdate,
    NotificationResponse,
)
from unileave.services.notification_service import NotificationService, describe

router = APIRouter(tags=["Notifications"])


def _require_staff_id(staff_id: Optional[str]) -> str:
    if not staff_id:
        raise ValidationError("staffId is required")
    return staff_id


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    staff_id: Optional[str] = Query(None, alias="staffId"),
    db: Session = Depends(get_db),
):
    """Newest first, with title, link and relative time filled in"""
    service = NotificationService(db)
    return [describe(n) for n in service.list_for_staff(_require_staff_id(staff_id))]


@router.get("/unread-count")
def unread_count(
    staff_id: Optional[str] = Query(None, alias="staffId"),
    db: Session = Depends(get_db),
):
    return {"unread": NotificationService(db).unread_count(_require_staff_id(staff_id))}


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
def create_notification(body: NotificationCreate, db: Session = Depends(get_db)):
    notification = NotificationService(db).notify(
        body.staff_id,
        body.type,
        body.message,
        related_request_id=body.related_request_id,
    )
    if notification is None:
        raise ValidationError("Recipient has turned off leave updates")
    return describe(notification)


@router.put("/read-all")
def mark_all_read(
    staff_id: Optional[str] = Query(None, alias="staffId"),
    db: Session = Depends(get_db),
):
    updated = NotificationService(db).mark_all_read(_require_staff_id(staff_id))
    return {"success": True, "updated": updated}


@router.put("/{notification_id}/read", response_model=SuccessResponse)
def mark_read(
    notification_id: str,
    body: Optional[NotificationReadUpdate] = None,
    db: Session = Depends(get_db),
):
    read = body.read if body is not None else True
    if not NotificationService(db).mark_read(notification_id, read):
        raise NotFoundError(f"Notification {notification_id} not found")
    return SuccessResponse(message="Notification updated")


@router.delete("/clear")
def clear_notifications(
    staff_id: Optional[str] = Query(None, alias="staffId"),
    db: Session = Depends(get_db),
):
    deleted = NotificationService(db).clear_all(_require_staff_id(staff_id))
    return {"success": True, "deleted": deleted}


@router.delete("/{notification_id}", response_model=SuccessResponse)
def delete_notification(notification_id: str, db: Session = Depends(get_db)):
    if not NotificationService(db).remove(notification_id):
        raise NotFoundError(f"Notification {notification_id} not found")
    return SuccessResponse(message="Notification deleted")
