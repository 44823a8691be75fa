from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import List, Optional

from unisport.exceptions import ConflictError
from unisport.models.booking import Booking
from unisport.models.court import Court, CourtStatus
from unisport.models.court_mapping import CourtMapping
from unisport.schemas.court import CourtCreate, CourtUpdate


def get_court(db: Session, court_id: int) -> Optional[Court]:
    return db.query(Court).filter(Court.id == court_id).first()


def get_court_by_code(db: Session, code: str) -> Optional[Court]:
    return db.query(Court).filter(Court.code == code).first()


def get_courts(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    venue_id: Optional[int] = None,
    type_id: Optional[int] = None,
    status: Optional[CourtStatus] = None,
) -> List[Court]:
    query = db.query(Court)

    if venue_id:
        query = query.filter(Court.venue_id == venue_id)
    if type_id:
        query = query.filter(Court.type_id == type_id)
    if status:
        query = query.filter(Court.status == status)

    return query.order_by(Court.id).offset(skip).limit(limit).all()


def create_court(db: Session, court: CourtCreate) -> Court:
    db_court = Court(**court.model_dump())
    db.add(db_court)
    db.commit()
    db.refresh(db_court)
    return db_court


def update_court(db: Session, court_id: int, court: CourtUpdate) -> Optional[Court]:
    db_court = get_court(db, court_id)
    if not db_court:
        return None

    update_data = court.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(db_court, field, value)

    db.commit()
    db.refresh(db_court)
    return db_court


def update_court_status(
    db: Session, court_id: int, status: CourtStatus
) -> Optional[Court]:
    db_court = get_court(db, court_id)
    if not db_court:
        return None

    db_court.status = status
    db.commit()
    db.refresh(db_court)
    return db_court


def delete_court(db: Session, court_id: int) -> bool:
    """
    Deletes a court and its mappings. Raises ConflictError while any
    booking, past or cancelled, still points at the court.
    """
    db_court = get_court(db, court_id)
    if not db_court:
        return False

    booking_count = db.query(Booking).filter(Booking.court_id == court_id).count()
    if booking_count:
        raise ConflictError(
            f"Court {court_id} has {booking_count} booking(s) and cannot be deleted"
        )

    db.query(CourtMapping).filter(
        or_(
            CourtMapping.parent_court_id == court_id,
            CourtMapping.child_court_id == court_id,
        )
    ).delete(synchronize_session=False)
    db.delete(db_court)
    db.commit()
    return True
