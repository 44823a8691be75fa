"""
Tests for booking status transitions, updates and cancellation
"""
from datetime import date

import pytest

from unisport.exceptions import ConflictError, InvalidRequestError, NotFoundError
from unisport.models.booking import Booking, BookingStatus, PaymentStatus
from unisport.schemas.booking import BookingUpdate
from unisport.services.booking import cancel_booking, update_booking
from unisport.utils.booking_status import (
    is_terminal,
    validate_booking_transition,
    validate_payment_transition,
)

BOOKING_DATE = date(2024, 6, 1)


def test_terminal_statuses():
    assert is_terminal(BookingStatus.COMPLETED)
    assert is_terminal(BookingStatus.CANCELLED)
    assert not is_terminal(BookingStatus.PENDING)
    assert not is_terminal(BookingStatus.CONFIRMED)


def test_every_status_has_a_transition_entry():
    for status in BookingStatus:
        is_terminal(status)
    for status in PaymentStatus:
        validate_payment_transition(status, status)


def test_illegal_transitions_are_rejected():
    with pytest.raises(InvalidRequestError):
        validate_booking_transition(BookingStatus.CANCELLED, BookingStatus.CONFIRMED)
    with pytest.raises(InvalidRequestError):
        validate_booking_transition(BookingStatus.CONFIRMED, BookingStatus.PENDING)
    with pytest.raises(InvalidRequestError):
        validate_payment_transition(PaymentStatus.UNPAID, PaymentStatus.REFUNDED)


def test_cancel_keeps_the_row(db, make_court, make_booking):
    make_court(3)
    booking = make_booking(3, "09:00", "10:00")

    cancelled = cancel_booking(db, booking.id)

    assert cancelled.status == BookingStatus.CANCELLED
    assert db.query(Booking).count() == 1


def test_cancelled_slot_can_be_booked_again(db, make_court, make_booking):
    make_court(3)
    booking = make_booking(3, "09:00", "10:00")
    cancel_booking(db, booking.id)

    make_booking(3, "09:00", "10:00")

    assert db.query(Booking).count() == 2


def test_completed_booking_cannot_be_cancelled(db, make_court, make_booking):
    make_court(3)
    booking = make_booking(3, "09:00", "10:00", status=BookingStatus.COMPLETED)

    with pytest.raises(InvalidRequestError):
        cancel_booking(db, booking.id)


def test_cancel_missing_booking(db):
    with pytest.raises(NotFoundError):
        cancel_booking(db, 42)


def test_update_status_and_payment(db, make_court, make_booking):
    make_court(3)
    booking = make_booking(3, "09:00", "10:00")

    updated = update_booking(
        db,
        booking.id,
        BookingUpdate(status=BookingStatus.COMPLETED, payment_status=PaymentStatus.PAID),
    )

    assert updated.status == BookingStatus.COMPLETED
    assert updated.payment_status == PaymentStatus.PAID


def test_update_rejects_reopening_cancelled_booking(db, make_court, make_booking):
    make_court(3)
    booking = make_booking(3, "09:00", "10:00", status=BookingStatus.CANCELLED)

    with pytest.raises(InvalidRequestError):
        update_booking(db, booking.id, BookingUpdate(status=BookingStatus.CONFIRMED))


def test_confirmed_booking_cannot_be_rescheduled(db, make_court, make_booking):
    make_court(3)
    booking = make_booking(3, "09:00", "10:00")

    with pytest.raises(InvalidRequestError):
        update_booking(
            db, booking.id, BookingUpdate(start_time="11:00", end_time="12:00")
        )


def test_pending_booking_can_be_rescheduled(db, make_court, make_booking):
    make_court(3, hourly_rate="100000")
    booking = make_booking(3, "09:00", "10:00", status=BookingStatus.PENDING)

    updated = update_booking(
        db, booking.id, BookingUpdate(start_time="09:00", end_time="11:00")
    )

    assert updated.end_time == "11:00"
    assert float(updated.total_amount) == 200000.0


def test_reschedule_onto_taken_slot_conflicts(db, make_court, make_booking):
    make_court(3)
    make_booking(3, "11:00", "12:00")
    booking = make_booking(3, "09:00", "10:00", status=BookingStatus.PENDING)

    with pytest.raises(ConflictError):
        update_booking(
            db, booking.id, BookingUpdate(start_time="10:00", end_time="12:00")
        )


def test_renter_fields_can_change_on_confirmed_booking(db, make_court, make_booking):
    make_court(3)
    booking = make_booking(3, "09:00", "10:00")

    updated = update_booking(
        db, booking.id, BookingUpdate(renter_name="New Name", notes="Bring rackets")
    )

    assert updated.renter_name == "New Name"
    assert updated.notes == "Bring rackets"


def test_reschedule_lost_race_is_a_conflict(db, make_court, make_booking, monkeypatch):
    make_court(3)
    make_booking(3, "09:00", "10:00")
    booking = make_booking(3, "11:00", "12:00", status=BookingStatus.PENDING)
    monkeypatch.setattr(
        "unisport.services.booking.check_availability", lambda *args, **kwargs: True
    )

    with pytest.raises(ConflictError):
        update_booking(
            db, booking.id, BookingUpdate(start_time="09:00", end_time="10:00")
        )

    db.refresh(booking)
    assert booking.start_time == "11:00"
    assert db.query(Booking).filter(Booking.start_time == "09:00").count() == 1


def test_cancel_message_names_the_status(db, make_court, make_booking):
    make_court(3)
    booking = make_booking(3, "09:00", "10:00", status=BookingStatus.COMPLETED)

    with pytest.raises(InvalidRequestError) as exc_info:
        cancel_booking(db, booking.id)

    assert exc_info.value.detail == "Completed bookings cannot be cancelled"
