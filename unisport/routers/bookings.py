from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
import logging

from unisport.database import get_db
from unisport.crud import booking as crud
from unisport.schemas.booking import (
    Booking,
    BookingCreate,
    BookingCreatedResponse,
    BookingUpdate,
)
from unisport.models.booking import BookingStatus
from unisport.models.user import User
from unisport.services import booking as booking_service
from unisport.services.auth import (
    get_current_user,
    get_current_user_optional,
    get_current_staff_user,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_can_access(booking, current_user: User) -> None:
    if not current_user.is_staff and booking.user_id != current_user.id:
        raise HTTPException(status_code=403, detail="Not allowed to access this booking")


@router.post("/", response_model=BookingCreatedResponse)
def create_booking(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """
    Books one slot (start_time/end_time) or several (selected_times, e.g.
    "09-10,10-11"). Anonymous callers make guest bookings; for logged-in
    callers user_id is always taken from the token.
    """
    user_id = current_user.id if current_user else None
    if user_id is None:
        logger.info(f"Guest booking request for court {booking.court_id}")

    created = booking_service.create_booking(db, booking, user_id=user_id)
    return {
        "message": "Booking created successfully",
        "booking": created[0],
        "bookings": created,
    }


@router.get("/my-bookings", response_model=List[Booking])
def read_my_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return crud.get_user_bookings(db, current_user.id)


@router.get("/", response_model=List[Booking])
def read_bookings(
    skip: int = 0,
    limit: int = 100,
    status: Optional[BookingStatus] = None,
    date: Optional[date] = None,
    court_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_staff_user),
):
    return crud.get_bookings(
        db,
        skip=skip,
        limit=limit,
        status=status,
        booking_date=date,
        court_id=court_id,
    )


@router.get("/{booking_id}", response_model=Booking)
def read_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    db_booking = crud.get_booking(db, booking_id)
    if db_booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    _ensure_can_access(db_booking, current_user)
    return db_booking


@router.patch("/{booking_id}", response_model=Booking)
def update_booking(
    booking_id: int,
    booking: BookingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_staff_user),
):
    return booking_service.update_booking(db, booking_id, booking)


@router.delete("/{booking_id}", response_model=Booking)
def cancel_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    db_booking = crud.get_booking(db, booking_id)
    if db_booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    _ensure_can_access(db_booking, current_user)
    return booking_service.cancel_booking(db, booking_id)
