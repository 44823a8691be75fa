"""
Tests for creating bookings: preconditions, pricing and multi-slot requests
"""
from datetime import date
from decimal import Decimal

import pytest

from unisport.exceptions import ConflictError, InvalidRequestError, NotFoundError
from unisport.models.booking import Booking, BookingStatus, PaymentStatus
from unisport.models.court import CourtStatus
from unisport.models.notification import Notification
from unisport.schemas.booking import BookingCreate
from unisport.services.booking import compute_total_amount, create_booking

BOOKING_DATE = date(2024, 6, 1)


def booking_request(court_id, start_time="09:00", end_time="10:00", **extra):
    data = {
        "court_id": court_id,
        "date": BOOKING_DATE,
        "start_time": start_time,
        "end_time": end_time,
        "renter_name": "Nguyen Van A",
        "renter_phone": "0912345678",
        "renter_email": "renter@example.com",
    }
    data.update(extra)
    return BookingCreate(**data)


def test_creates_confirmed_unpaid_booking(db, make_court):
    make_court(3, hourly_rate="150000")

    created = create_booking(db, booking_request(3, "09:00", "11:00"))

    assert len(created) == 1
    booking = created[0]
    assert booking.id is not None
    assert booking.court_id == 3
    assert booking.user_id is None
    assert booking.status == BookingStatus.CONFIRMED
    assert booking.payment_status == PaymentStatus.UNPAID
    assert booking.payment_method == "cash"
    assert Decimal(booking.total_amount) == Decimal("300000.00")
    assert booking.booking_code.startswith("BK")


def test_total_amount_bills_whole_hours():
    assert compute_total_amount(Decimal("100000"), "09:30", "11:00") == Decimal(
        "200000.00"
    )


def test_missing_court_is_not_found(db):
    with pytest.raises(NotFoundError):
        create_booking(db, booking_request(999))


def test_maintenance_court_is_rejected(db, make_court):
    make_court(3, status=CourtStatus.MAINTENANCE)

    with pytest.raises(InvalidRequestError):
        create_booking(db, booking_request(3))

    assert db.query(Booking).count() == 0


def test_booked_court_is_rejected(db, make_court):
    make_court(3, status=CourtStatus.BOOKED)

    with pytest.raises(InvalidRequestError):
        create_booking(db, booking_request(3))


@pytest.mark.parametrize("start_time,end_time", [("10:00", "09:00"), ("10:00", "10:30")])
def test_start_must_be_before_end(db, make_court, start_time, end_time):
    make_court(3)

    with pytest.raises(InvalidRequestError):
        create_booking(db, booking_request(3, start_time, end_time))


def test_request_without_times_is_rejected(db, make_court):
    make_court(3)

    with pytest.raises(InvalidRequestError):
        create_booking(db, booking_request(3, None, None))


def test_exact_clash_is_a_conflict(db, make_court, make_booking):
    make_court(3)
    make_booking(3, "09:00", "10:00")

    with pytest.raises(ConflictError):
        create_booking(db, booking_request(3, "09:00", "10:00"))


def test_adjacent_slot_is_accepted(db, make_court, make_booking):
    make_court(3)
    make_booking(3, "09:00", "10:00")

    created = create_booking(db, booking_request(3, "10:00", "11:00"))

    assert created[0].start_time == "10:00"


def test_containing_request_is_a_conflict(db, make_court, make_booking):
    make_court(3)
    make_booking(3, "09:00", "11:00")

    with pytest.raises(ConflictError):
        create_booking(db, booking_request(3, "08:00", "12:00"))


def test_parent_court_conflicts_with_child_booking(
    db, make_court, make_mapping, make_booking
):
    make_court(10)
    make_court(11)
    make_mapping(10, 11)
    make_booking(11, "14:00", "15:00")

    with pytest.raises(ConflictError):
        create_booking(db, booking_request(10, "14:00", "15:00"))


def test_second_identical_request_is_a_conflict(db, make_court):
    make_court(3)
    create_booking(db, booking_request(3, "09:00", "10:00"))

    with pytest.raises(ConflictError):
        create_booking(db, booking_request(3, "09:00", "10:00"))

    assert db.query(Booking).count() == 1


def test_selected_times_create_one_booking_per_slot(db, make_court):
    make_court(3, hourly_rate="50000")

    created = create_booking(
        db, booking_request(3, None, None, selected_times="09-10,10-11,14-16")
    )

    assert [(b.start_time, b.end_time) for b in created] == [
        ("09:00", "10:00"),
        ("10:00", "11:00"),
        ("14:00", "16:00"),
    ]
    assert len({b.booking_code for b in created}) == 3
    assert Decimal(created[2].total_amount) == Decimal("100000.00")


def test_later_slot_conflict_keeps_earlier_slots(db, make_court, make_booking):
    make_court(3)
    make_booking(3, "10:00", "11:00")

    with pytest.raises(ConflictError):
        create_booking(db, booking_request(3, None, None, selected_times="08-09,10-11"))

    remaining = db.query(Booking).filter(Booking.start_time == "08:00").all()
    assert len(remaining) == 1
    assert remaining[0].status == BookingStatus.CONFIRMED


def test_overlapping_slots_in_one_request_conflict(db, make_court):
    make_court(3)

    with pytest.raises(ConflictError):
        create_booking(db, booking_request(3, None, None, selected_times="09-11,10-12"))


def test_malformed_selected_times_are_rejected(db, make_court):
    make_court(3)

    with pytest.raises(InvalidRequestError):
        create_booking(db, booking_request(3, None, None, selected_times="09-10,abc"))

    assert db.query(Booking).count() == 0


def test_user_booking_creates_notification(db, make_court, sample_user):
    make_court(3)

    created = create_booking(db, booking_request(3), user_id=sample_user.id)

    notifications = db.query(Notification).filter_by(user_id=sample_user.id).all()
    assert created[0].user_id == sample_user.id
    assert len(notifications) == 1
    assert notifications[0].type == "booking_created"
    assert notifications[0].data["booking_id"] == created[0].id


def test_guest_booking_creates_no_notification(db, make_court):
    make_court(3)

    create_booking(db, booking_request(3))

    assert db.query(Notification).count() == 0


def test_unique_index_rejects_lost_race(db, make_court, make_booking, monkeypatch):
    # Availability read misses the concurrent insert; the index still holds
    make_court(3)
    make_booking(3, "09:00", "10:00")
    monkeypatch.setattr(
        "unisport.services.booking.check_availability", lambda *args, **kwargs: True
    )

    with pytest.raises(ConflictError):
        create_booking(db, booking_request(3, "09:00", "10:00"))

    assert db.query(Booking).count() == 1
    # Session is usable again after the rejected insert
    assert len(create_booking(db, booking_request(3, "10:00", "11:00"))) == 1


def test_unique_index_ignores_cancelled_rows(db, make_court, make_booking, monkeypatch):
    make_court(3)
    make_booking(3, "09:00", "10:00", status=BookingStatus.CANCELLED)
    monkeypatch.setattr(
        "unisport.services.booking.check_availability", lambda *args, **kwargs: True
    )

    created = create_booking(db, booking_request(3, "09:00", "10:00"))

    assert created[0].status == BookingStatus.CONFIRMED
    assert db.query(Booking).count() == 2


def test_lost_race_on_later_slot_keeps_earlier_slots(
    db, make_court, make_booking, monkeypatch
):
    make_court(3)
    make_booking(3, "10:00", "11:00")
    monkeypatch.setattr(
        "unisport.services.booking.check_availability", lambda *args, **kwargs: True
    )

    with pytest.raises(ConflictError):
        create_booking(db, booking_request(3, None, None, selected_times="08-09,10-11"))

    assert db.query(Booking).count() == 2
    assert db.query(Booking).filter(Booking.start_time == "08:00").count() == 1
