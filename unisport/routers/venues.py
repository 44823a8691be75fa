from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from unisport.database import get_db
from unisport.crud import venue as crud
from unisport.models.user import User
from unisport.schemas.court import (
    CourtTypeCreate,
    CourtTypeResponse,
    VenueCreate,
    VenueResponse,
)
from unisport.services.auth import get_current_staff_user

router = APIRouter()


@router.get("/venues", response_model=List[VenueResponse])
def read_venues(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.get_venues(db, skip=skip, limit=limit)


@router.post("/venues", response_model=VenueResponse)
def create_venue(
    venue: VenueCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_staff_user),
):
    return crud.create_venue(db, venue)


@router.get("/venues/{venue_id}", response_model=VenueResponse)
def read_venue(venue_id: int, db: Session = Depends(get_db)):
    db_venue = crud.get_venue(db, venue_id)
    if db_venue is None:
        raise HTTPException(status_code=404, detail="Venue not found")
    return db_venue


@router.get("/court-types", response_model=List[CourtTypeResponse])
def read_court_types(db: Session = Depends(get_db)):
    return crud.get_court_types(db)


@router.post("/court-types", response_model=CourtTypeResponse)
def create_court_type(
    court_type: CourtTypeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_staff_user),
):
    return crud.create_court_type(db, court_type)
