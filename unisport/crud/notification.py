from sqlalchemy.orm import Session
from sqlalchemy import and_
from typing import List, Optional
from unisport.models.notification import Notification
from unisport.schemas.notification import NotificationCreate


def create_notification(db: Session, notification: NotificationCreate) -> Notification:
    db_notification = Notification(
        user_id=notification.user_id,
        title=notification.title,
        message=notification.message,
        type=notification.type,
        data=notification.data,
    )
    db.add(db_notification)
    db.commit()
    db.refresh(db_notification)
    return db_notification


def get_user_notifications(
    db: Session, user_id: int, skip: int = 0, limit: int = 100
) -> List[Notification]:
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_unread_notifications_count(db: Session, user_id: int) -> int:
    return (
        db.query(Notification)
        .filter(and_(Notification.user_id == user_id, Notification.is_read == False))
        .count()
    )


def get_notification(
    db: Session, notification_id: int, user_id: int
) -> Optional[Notification]:
    return (
        db.query(Notification)
        .filter(
            and_(Notification.id == notification_id, Notification.user_id == user_id)
        )
        .first()
    )


def mark_notification_as_read(db: Session, notification_id: int, user_id: int) -> bool:
    notification = get_notification(db, notification_id, user_id)
    if not notification:
        return False

    notification.is_read = True
    db.commit()
    return True
