from sqlalchemy.orm import Session, joinedload
from datetime import date
from typing import Iterable, List, Optional

from unisport.models.booking import Booking, BookingStatus


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return (
        db.query(Booking)
        .options(joinedload(Booking.court))
        .filter(Booking.id == booking_id)
        .first()
    )


def get_bookings(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    status: Optional[BookingStatus] = None,
    booking_date: Optional[date] = None,
    court_id: Optional[int] = None,
) -> List[Booking]:
    query = db.query(Booking)

    if status:
        query = query.filter(Booking.status == status)
    if booking_date:
        query = query.filter(Booking.date == booking_date)
    if court_id:
        query = query.filter(Booking.court_id == court_id)

    return (
        query.order_by(Booking.created_at.desc(), Booking.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_user_bookings(db: Session, user_id: int) -> List[Booking]:
    return (
        db.query(Booking)
        .filter(Booking.user_id == user_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .all()
    )


def get_bookings_for_courts(
    db: Session,
    court_ids: Iterable[int],
    booking_date: date,
    statuses: Iterable[BookingStatus],
    exclude_booking_id: Optional[int] = None,
) -> List[Booking]:
    """Bookings on any of the given courts for one exact date."""
    query = (
        db.query(Booking)
        .filter(Booking.court_id.in_(list(court_ids)))
        .filter(Booking.date == booking_date)
        .filter(Booking.status.in_(list(statuses)))
    )
    if exclude_booking_id is not None:
        query = query.filter(Booking.id != exclude_booking_id)

    return query.order_by(Booking.start_time).all()


def add_booking(db: Session, **fields) -> Booking:
    """Stages a booking row; the INSERT is sent when the caller commits."""
    db_booking = Booking(**fields)
    db.add(db_booking)
    return db_booking
