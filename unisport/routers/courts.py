from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date

from unisport.database import get_db
from unisport.crud import court as crud
from unisport.crud import venue as venue_crud
from unisport.models.court import CourtStatus
from unisport.models.user import User
from unisport.schemas.court import (
    CourtAvailabilityResponse,
    CourtCreate,
    CourtResponse,
    CourtStatusUpdate,
    CourtUpdate,
    RelatedCourtsResponse,
)
from unisport.services.auth import get_current_staff_user
from unisport.services.availability import get_daily_availability, get_related_courts

router = APIRouter()


def _validate_references(db: Session, venue_id: Optional[int], type_id: Optional[int]):
    if venue_id is not None and not venue_crud.get_venue(db, venue_id):
        raise HTTPException(status_code=404, detail="Venue not found")
    if type_id is not None and not venue_crud.get_court_type(db, type_id):
        raise HTTPException(status_code=404, detail="Court type not found")


@router.post("/", response_model=CourtResponse)
def create_court(
    court: CourtCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_staff_user),
):
    _validate_references(db, court.venue_id, court.type_id)
    if crud.get_court_by_code(db, court.code):
        raise HTTPException(status_code=409, detail="Court code already in use")
    return crud.create_court(db=db, court=court)


@router.get("/", response_model=List[CourtResponse])
def read_courts(
    skip: int = 0,
    limit: int = 100,
    venue_id: Optional[int] = None,
    type_id: Optional[int] = None,
    status: Optional[CourtStatus] = None,
    db: Session = Depends(get_db),
):
    return crud.get_courts(
        db, skip=skip, limit=limit, venue_id=venue_id, type_id=type_id, status=status
    )


@router.get("/{court_id}", response_model=CourtResponse)
def read_court(court_id: int, db: Session = Depends(get_db)):
    db_court = crud.get_court(db, court_id=court_id)
    if db_court is None:
        raise HTTPException(status_code=404, detail="Court not found")
    return db_court


@router.get("/{court_id}/related", response_model=RelatedCourtsResponse)
def read_related_courts(court_id: int, db: Session = Depends(get_db)):
    if crud.get_court(db, court_id=court_id) is None:
        raise HTTPException(status_code=404, detail="Court not found")
    return {
        "court_id": court_id,
        "related_court_ids": sorted(get_related_courts(db, court_id)),
    }


@router.get("/{court_id}/availability", response_model=CourtAvailabilityResponse)
def read_court_availability(
    court_id: int,
    target_date: date = Query(..., alias="date", description="Date (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
):
    """
    Hourly slot grid for one day. Bookings on parent or child courts also
    block the slot.
    """
    if crud.get_court(db, court_id=court_id) is None:
        raise HTTPException(status_code=404, detail="Court not found")
    return get_daily_availability(db, court_id, target_date)


@router.put("/{court_id}", response_model=CourtResponse)
def update_court(
    court_id: int,
    court: CourtUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_staff_user),
):
    _validate_references(db, court.venue_id, court.type_id)
    db_court = crud.update_court(db=db, court_id=court_id, court=court)
    if db_court is None:
        raise HTTPException(status_code=404, detail="Court not found")
    return db_court


@router.patch("/{court_id}/status", response_model=CourtResponse)
def update_court_status(
    court_id: int,
    payload: CourtStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_staff_user),
):
    db_court = crud.update_court_status(db, court_id, payload.status)
    if db_court is None:
        raise HTTPException(status_code=404, detail="Court not found")
    return db_court


@router.delete("/{court_id}")
def delete_court(
    court_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_staff_user),
):
    success = crud.delete_court(db=db, court_id=court_id)
    if not success:
        raise HTTPException(status_code=404, detail="Court not found")
    return {"message": "Court deleted successfully"}
