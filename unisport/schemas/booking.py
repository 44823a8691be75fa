from pydantic import BaseModel, EmailStr
from datetime import date as date_type, datetime
from typing import List, Optional

from unisport.models.booking import BookingStatus, PaymentStatus


class BookingCreate(BaseModel):
    court_id: int
    date: date_type
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    # Comma-separated "start-end" pairs, e.g. "09-10,10-11"
    selected_times: Optional[str] = None
    renter_name: str
    renter_phone: str
    renter_email: Optional[EmailStr] = None
    notes: Optional[str] = None
    payment_method: Optional[str] = None
    # Overwritten with the caller's identity when authenticated
    user_id: Optional[int] = None


class BookingUpdate(BaseModel):
    court_id: Optional[int] = None
    date: Optional[date_type] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    renter_name: Optional[str] = None
    renter_phone: Optional[str] = None
    renter_email: Optional[EmailStr] = None
    notes: Optional[str] = None
    status: Optional[BookingStatus] = None
    payment_status: Optional[PaymentStatus] = None


class Booking(BaseModel):
    id: int
    court_id: int
    user_id: Optional[int] = None
    date: date_type
    start_time: str
    end_time: str
    total_amount: float
    status: BookingStatus
    payment_status: PaymentStatus
    payment_method: Optional[str] = None
    renter_name: str
    renter_email: Optional[str] = None
    renter_phone: str
    notes: Optional[str] = None
    booking_code: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BookingCreatedResponse(BaseModel):
    message: str
    booking: Booking
    bookings: List[Booking]
