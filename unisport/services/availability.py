"""
Court availability: related-court resolution and time-slot conflict checks.

Courts linked through a CourtMapping occupy overlapping physical space, so a
booking on any court of the relation blocks the same hours on all of them.
"""

import logging
import os
from datetime import date, datetime
from typing import List, Optional, Set

from sqlalchemy.orm import Session

from unisport.crud import booking as booking_crud
from unisport.crud.court_mapping import get_mappings_for_court
from unisport.models.booking import ACTIVE_BOOKING_STATUSES, BookingStatus
from unisport.models.court import Court
from unisport.utils.time_slots import hour_to_time_string, parse_hour, slots_overlap

logger = logging.getLogger(__name__)

OPENING_HOUR = int(os.getenv("OPENING_HOUR", "6"))
CLOSING_HOUR = int(os.getenv("CLOSING_HOUR", "22"))

# Completed bookings still occupy their slot on the daily grid
GRID_BLOCKING_STATUSES = ACTIVE_BOOKING_STATUSES + (BookingStatus.COMPLETED,)


def get_related_courts(db: Session, court_id: int) -> Set[int]:
    """
    Returns the ids of every court sharing physical space with court_id:
    the court itself plus every directly mapped parent or child.
    """
    related_court_ids = {court_id}
    for mapping in get_mappings_for_court(db, court_id):
        related_court_ids.add(mapping.parent_court_id)
        related_court_ids.add(mapping.child_court_id)
    return related_court_ids


def lock_courts(db: Session, court_ids: Set[int]) -> List[Court]:
    """
    Takes row locks (SELECT ... FOR UPDATE) on the given courts in id order
    so concurrent bookings on the same relation serialize on the check and
    insert. Locks are released when the caller commits or rolls back.
    """
    return (
        db.query(Court)
        .filter(Court.id.in_(sorted(court_ids)))
        .order_by(Court.id)
        .with_for_update(nowait=False)
        .populate_existing()
        .all()
    )


def check_availability(
    db: Session,
    court_id: int,
    booking_date: date,
    start_time: str,
    end_time: str,
    exclude_booking_id: Optional[int] = None,
) -> bool:
    """
    Checks whether [start_time, end_time) is free on court_id and every
    related court for booking_date.

    Only pending and confirmed bookings conflict. Times are compared as whole
    hours, so "09:30" is treated as "09:00".

    Args:
        db: Database session
        court_id: Court being requested
        booking_date: Exact calendar date
        start_time: "HH:MM", must be earlier than end_time
        end_time: "HH:MM"
        exclude_booking_id: Booking to ignore, used when rescheduling it

    Returns:
        bool: True if no existing booking overlaps the requested range
    """
    related_court_ids = get_related_courts(db, court_id)
    existing_bookings = booking_crud.get_bookings_for_courts(
        db,
        related_court_ids,
        booking_date,
        ACTIVE_BOOKING_STATUSES,
        exclude_booking_id=exclude_booking_id,
    )

    new_start = parse_hour(start_time)
    new_end = parse_hour(end_time)

    for booking in existing_bookings:
        booking_start = parse_hour(booking.start_time)
        booking_end = parse_hour(booking.end_time)
        if slots_overlap(booking_start, booking_end, new_start, new_end):
            logger.info(
                f"Slot {start_time}-{end_time} on court {court_id} ({booking_date}) "
                f"conflicts with booking {booking.id} on court {booking.court_id}"
            )
            return False

    return True


def _is_past_slot(hour: int, booking_date: date, now: datetime) -> bool:
    if booking_date < now.date():
        return True
    if booking_date > now.date():
        return False
    if hour + 1 <= now.hour:
        return True
    # A slot that started more than half an hour ago can no longer be booked
    return hour <= now.hour and now.minute >= 30


def get_daily_availability(
    db: Session, court_id: int, booking_date: date, now: Optional[datetime] = None
) -> dict:
    """
    Builds the hourly slot grid of a court between OPENING_HOUR and
    CLOSING_HOUR, marking slots held by bookings on any related court.
    """
    now = now or datetime.now()
    related_court_ids = get_related_courts(db, court_id)
    bookings = booking_crud.get_bookings_for_courts(
        db, related_court_ids, booking_date, GRID_BLOCKING_STATUSES
    )

    slots = []
    for hour in range(OPENING_HOUR, CLOSING_HOUR):
        conflicting_booking = next(
            (
                booking
                for booking in bookings
                if parse_hour(booking.start_time) <= hour < parse_hour(booking.end_time)
            ),
            None,
        )
        is_past = _is_past_slot(hour, booking_date, now)

        slots.append(
            {
                "start_time": hour_to_time_string(hour),
                "end_time": hour_to_time_string(hour + 1),
                "is_available": conflicting_booking is None and not is_past,
                "booking_id": conflicting_booking.id if conflicting_booking else None,
                "booking_status": (
                    conflicting_booking.status.value if conflicting_booking else None
                ),
                "conflicting_court_id": (
                    conflicting_booking.court_id if conflicting_booking else None
                ),
            }
        )

    return {
        "court_id": court_id,
        "date": booking_date,
        "related_court_ids": sorted(related_court_ids),
        "slots": slots,
    }
