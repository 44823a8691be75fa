from sqlalchemy.orm import Session
import logging

from unisport.crud import notification as notification_crud
from unisport.models.booking import Booking
from unisport.schemas.notification import NotificationCreate

logger = logging.getLogger(__name__)

BOOKING_MESSAGES = {
    "created": (
        "Booking received",
        "Your booking {code} for {date} {start}-{end} has been created.",
    ),
    "confirmed": (
        "Booking confirmed",
        "Your booking {code} for {date} {start}-{end} is confirmed.",
    ),
    "cancelled": (
        "Booking cancelled",
        "Your booking {code} for {date} {start}-{end} has been cancelled.",
    ),
}


def notify_booking_event(db: Session, booking: Booking, event: str) -> bool:
    """
    Stores an in-app notification for the owner of a booking.

    Guest bookings have nobody to notify. Failures are logged and never
    propagate to the booking operation that triggered them.
    """
    if not booking.user_id:
        return False

    title, template = BOOKING_MESSAGES[event]
    message = template.format(
        code=booking.booking_code,
        date=booking.date.isoformat(),
        start=booking.start_time,
        end=booking.end_time,
    )
    try:
        notification_crud.create_notification(
            db,
            NotificationCreate(
                user_id=booking.user_id,
                title=title,
                message=message,
                type=f"booking_{event}",
                data={"booking_id": booking.id, "booking_code": booking.booking_code},
            ),
        )
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating {event} notification for booking {booking.id}: {e}")
        return False
