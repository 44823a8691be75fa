from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from unisport.database import get_db
from unisport.crud import notification as crud
from unisport.models.user import User
from unisport.schemas.notification import NotificationsListResponse
from unisport.services.auth import get_current_user

router = APIRouter()


@router.get("/", response_model=NotificationsListResponse)
def read_notifications(
    skip: int = 0,
    limit: int = 50,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {
        "notifications": crud.get_user_notifications(
            db, current_user.id, skip=skip, limit=limit
        ),
        "unread_count": crud.get_unread_notifications_count(db, current_user.id),
    }


@router.put("/{notification_id}/read")
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not crud.mark_notification_as_read(db, notification_id, current_user.id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"message": "Notification marked as read"}
