# taskbridge/routers/notification.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from taskbridge.database import get_db
from taskbridge.models import user as user_model
from taskbridge.schemas import notification as notification_schema
from taskbridge.services.notification_service import NotificationService
from taskbridge.utils.auth import get_current_user

router = APIRouter()


@router.get("/", response_model=List[notification_schema.NotificationOut])
def get_user_notifications(
    unread_only: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    """Get notifications for the current user, newest first"""
    return NotificationService.list_for_user(db, current_user, unread_only)


@router.get("/unread-count", response_model=notification_schema.UnreadCount)
def get_unread_count(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return {"unread_count": NotificationService.unread_count(db, current_user)}


@router.put("/read-all", response_model=notification_schema.MarkAllRead)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    updated = NotificationService.mark_all_read(db, current_user)
    return {"message": f"Marked {updated} notifications as read", "updated_count": updated}


@router.put("/{notification_id}/read", response_model=notification_schema.NotificationOut)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return NotificationService.mark_read(db, notification_id, current_user)
