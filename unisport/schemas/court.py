from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime

from unisport.models.court import CourtStatus


class VenueBase(BaseModel):
    name: str
    address: Optional[str] = None


class VenueCreate(VenueBase):
    pass


class VenueResponse(VenueBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True


class CourtTypeBase(BaseModel):
    name: str
    description: Optional[str] = None


class CourtTypeCreate(CourtTypeBase):
    pass


class CourtTypeResponse(CourtTypeBase):
    id: int

    class Config:
        from_attributes = True


class CourtBase(BaseModel):
    name: str
    code: str
    description: Optional[str] = None
    hourly_rate: float = Field(..., ge=0)
    status: CourtStatus = CourtStatus.AVAILABLE
    is_indoor: bool = True
    venue_id: int
    type_id: int


class CourtCreate(CourtBase):
    pass


class CourtUpdate(BaseModel):
    name: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    status: Optional[CourtStatus] = None
    is_indoor: Optional[bool] = None
    venue_id: Optional[int] = None
    type_id: Optional[int] = None


class CourtStatusUpdate(BaseModel):
    status: CourtStatus


class CourtResponse(CourtBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True


class RelatedCourtsResponse(BaseModel):
    court_id: int
    related_court_ids: List[int]


class TimeSlot(BaseModel):
    start_time: str
    end_time: str
    is_available: bool
    booking_id: Optional[int] = None
    booking_status: Optional[str] = None
    conflicting_court_id: Optional[int] = None


class CourtAvailabilityResponse(BaseModel):
    court_id: int
    date: date
    related_court_ids: List[int]
    slots: List[TimeSlot]
