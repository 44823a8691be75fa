from sqlalchemy.orm import Session
from typing import List, Optional

from unisport.models.venue import Venue
from unisport.models.court_type import CourtType
from unisport.schemas.court import VenueCreate, CourtTypeCreate


def get_venue(db: Session, venue_id: int) -> Optional[Venue]:
    return db.query(Venue).filter(Venue.id == venue_id).first()


def get_venues(db: Session, skip: int = 0, limit: int = 100) -> List[Venue]:
    return db.query(Venue).order_by(Venue.id).offset(skip).limit(limit).all()


def create_venue(db: Session, venue: VenueCreate) -> Venue:
    db_venue = Venue(**venue.model_dump())
    db.add(db_venue)
    db.commit()
    db.refresh(db_venue)
    return db_venue


def get_court_type(db: Session, type_id: int) -> Optional[CourtType]:
    return db.query(CourtType).filter(CourtType.id == type_id).first()


def get_court_types(db: Session) -> List[CourtType]:
    return db.query(CourtType).order_by(CourtType.name).all()


def create_court_type(db: Session, court_type: CourtTypeCreate) -> CourtType:
    db_court_type = CourtType(**court_type.model_dump())
    db.add(db_court_type)
    db.commit()
    db.refresh(db_court_type)
    return db_court_type
