"""
Booking creation and lifecycle.

Every slot is checked and inserted while holding row locks on all courts
related to the target court, and the insert is backed by a partial unique
index, so two concurrent requests cannot both book the same space.
"""

import logging
import os
import secrets
import time
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from unisport.crud import booking as booking_crud
from unisport.crud import court as court_crud
from unisport.exceptions import ConflictError, InvalidRequestError, NotFoundError
from unisport.models.booking import Booking, BookingStatus, PaymentStatus
from unisport.models.court import Court, CourtStatus
from unisport.schemas.booking import BookingCreate, BookingUpdate
from unisport.services.availability import (
    check_availability,
    get_related_courts,
    lock_courts,
)
from unisport.utils.booking_status import (
    is_terminal,
    validate_booking_transition,
    validate_payment_transition,
)
from unisport.utils.notification_utils import notify_booking_event
from unisport.utils.time_slots import (
    duration_hours,
    normalize_time,
    parse_selected_times,
)

logger = logging.getLogger(__name__)

MIN_BOOKING_AMOUNT = Decimal(os.getenv("MIN_BOOKING_AMOUNT", "0"))

SCHEDULE_FIELDS = ("court_id", "date", "start_time", "end_time")


def generate_booking_code() -> str:
    return f"BK{int(time.time() * 1000)}{secrets.token_hex(3).upper()}"


def compute_total_amount(hourly_rate, start_time: str, end_time: str) -> Decimal:
    """Whole-hour billing: hourly_rate x (end hour - start hour)."""
    amount = Decimal(str(hourly_rate)) * duration_hours(start_time, end_time)
    return max(MIN_BOOKING_AMOUNT, amount.quantize(Decimal("0.01")))


def resolve_requested_slots(booking: BookingCreate) -> List[Tuple[str, str]]:
    """
    Returns the (start, end) pairs of a request, from selected_times when
    given, else from start_time/end_time. Each pair must span at least one
    whole hour.
    """
    if booking.selected_times:
        slots = parse_selected_times(booking.selected_times)
    elif booking.start_time and booking.end_time:
        slots = [(normalize_time(booking.start_time), normalize_time(booking.end_time))]
    else:
        raise InvalidRequestError(
            "Either start_time and end_time or selected_times is required"
        )

    for start_time, end_time in slots:
        if duration_hours(start_time, end_time) <= 0:
            raise InvalidRequestError(
                f"Start time {start_time} must be before end time {end_time}"
            )
    return slots


def _get_bookable_court(db: Session, court_id: int) -> Court:
    court = court_crud.get_court(db, court_id)
    if not court:
        raise NotFoundError(f"Court {court_id} not found")
    if court.status != CourtStatus.AVAILABLE:
        raise InvalidRequestError(
            f"Court {court_id} is not bookable (status: {court.status.value})"
        )
    return court


def _lock_and_check(
    db: Session,
    court_id: int,
    booking_date,
    start_time: str,
    end_time: str,
    exclude_booking_id: Optional[int] = None,
) -> None:
    """
    Locks the court relation, re-reads the court status and checks the slot.
    Rolls back and raises when the slot cannot be taken.
    """
    locked_courts = lock_courts(db, get_related_courts(db, court_id))
    target = next((court for court in locked_courts if court.id == court_id), None)
    if target is None or target.status != CourtStatus.AVAILABLE:
        db.rollback()
        raise InvalidRequestError(f"Court {court_id} is not bookable")

    if not check_availability(
        db,
        court_id,
        booking_date,
        start_time,
        end_time,
        exclude_booking_id=exclude_booking_id,
    ):
        db.rollback()
        raise ConflictError(
            f"Time slot {start_time}-{end_time} on {booking_date} is already taken"
        )


def _commit_or_conflict(db: Session, start_time: str, end_time: str) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Booking insert rejected by unique index: {e.orig}")
        raise ConflictError(f"Time slot {start_time}-{end_time} is already taken")


def create_booking(
    db: Session, booking: BookingCreate, user_id: Optional[int] = None
) -> List[Booking]:
    """
    Creates one booking per requested slot.

    Slots are processed in order and each one is committed on its own: when a
    later slot conflicts, the earlier ones stay booked and the error is
    raised.

    Raises:
        NotFoundError: the court does not exist
        InvalidRequestError: the court is not bookable or a slot is malformed
        ConflictError: a slot overlaps an existing booking
    """
    court = _get_bookable_court(db, booking.court_id)
    slots = resolve_requested_slots(booking)
    payment_method = booking.payment_method or "cash"

    created: List[Booking] = []
    for start_time, end_time in slots:
        try:
            _lock_and_check(db, court.id, booking.date, start_time, end_time)
            db_booking = booking_crud.add_booking(
                db,
                court_id=court.id,
                user_id=user_id,
                date=booking.date,
                start_time=start_time,
                end_time=end_time,
                total_amount=compute_total_amount(
                    court.hourly_rate, start_time, end_time
                ),
                status=BookingStatus.CONFIRMED,
                payment_status=PaymentStatus.UNPAID,
                payment_method=payment_method,
                renter_name=booking.renter_name,
                renter_email=(
                    booking.renter_email.strip() if booking.renter_email else None
                ),
                renter_phone=booking.renter_phone,
                notes=booking.notes or None,
                booking_code=generate_booking_code(),
            )
            _commit_or_conflict(db, start_time, end_time)
        except ConflictError:
            if created:
                logger.warning(
                    f"Multi-slot booking on court {court.id} partially created: "
                    f"{[b.booking_code for b in created]} kept, "
                    f"{start_time}-{end_time} rejected"
                )
            raise

        db.refresh(db_booking)
        logger.info(
            f"Booking {db_booking.booking_code} created: court={court.id} "
            f"date={booking.date} {start_time}-{end_time} "
            f"total={db_booking.total_amount} user={user_id}"
        )
        created.append(db_booking)

        notify_booking_event(db, db_booking, "created")

    return created


def update_booking(db: Session, booking_id: int, changes: BookingUpdate) -> Booking:
    """
    Applies an admin update. Court, date and times can only change while the
    booking is pending; the new slot is re-checked, ignoring the booking
    itself, and the total is recomputed.
    """
    db_booking = booking_crud.get_booking(db, booking_id)
    if not db_booking:
        raise NotFoundError(f"Booking {booking_id} not found")

    update_data = changes.model_dump(exclude_unset=True)
    for field in ("court_id", "date", "start_time", "end_time", "status", "payment_status"):
        if field in update_data and update_data[field] is None:
            del update_data[field]
    for field in ("start_time", "end_time"):
        if field in update_data:
            update_data[field] = normalize_time(update_data[field])

    reschedule = any(
        field in update_data and update_data[field] != getattr(db_booking, field)
        for field in SCHEDULE_FIELDS
    )
    if reschedule and db_booking.status != BookingStatus.PENDING:
        raise InvalidRequestError(
            "Court, date and time can only be changed on pending bookings"
        )

    previous_status = db_booking.status
    if "status" in update_data:
        validate_booking_transition(db_booking.status, update_data["status"])
    if "payment_status" in update_data:
        validate_payment_transition(
            db_booking.payment_status, update_data["payment_status"]
        )

    if reschedule:
        court_id = update_data.get("court_id", db_booking.court_id)
        booking_date = update_data.get("date", db_booking.date)
        start_time = update_data.get("start_time", db_booking.start_time)
        end_time = update_data.get("end_time", db_booking.end_time)

        court = _get_bookable_court(db, court_id)
        if duration_hours(start_time, end_time) <= 0:
            raise InvalidRequestError(
                f"Start time {start_time} must be before end time {end_time}"
            )
        _lock_and_check(
            db, court_id, booking_date, start_time, end_time, exclude_booking_id=booking_id
        )
        update_data["total_amount"] = compute_total_amount(
            court.hourly_rate, start_time, end_time
        )

    for field, value in update_data.items():
        setattr(db_booking, field, value)

    _commit_or_conflict(db, db_booking.start_time, db_booking.end_time)
    db.refresh(db_booking)

    if db_booking.status != previous_status:
        logger.info(
            f"Booking {db_booking.booking_code} status "
            f"{previous_status.value} -> {db_booking.status.value}"
        )
        if db_booking.status == BookingStatus.CONFIRMED:
            notify_booking_event(db, db_booking, "confirmed")
        elif db_booking.status == BookingStatus.CANCELLED:
            notify_booking_event(db, db_booking, "cancelled")

    return db_booking


def cancel_booking(db: Session, booking_id: int) -> Booking:
    """Cancels a booking. The row is kept; completed bookings cannot be cancelled."""
    db_booking = booking_crud.get_booking(db, booking_id)
    if not db_booking:
        raise NotFoundError(f"Booking {booking_id} not found")

    if db_booking.status == BookingStatus.CANCELLED:
        return db_booking
    if is_terminal(db_booking.status):
        raise InvalidRequestError(
            f"{db_booking.status.value.capitalize()} bookings cannot be cancelled"
        )

    db_booking.status = BookingStatus.CANCELLED
    db.commit()
    db.refresh(db_booking)
    logger.info(f"Booking {db_booking.booking_code} cancelled")

    notify_booking_event(db, db_booking, "cancelled")
    return db_booking
