from sqlalchemy.orm import Session, joinedload
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from typing import List, Optional
import logging

from unisport.crud.court import get_court
from unisport.exceptions import ConflictError, InvalidRequestError, NotFoundError
from unisport.models.court_mapping import CourtMapping
from unisport.schemas.court_mapping import CourtMappingCreate, CourtMappingUpdate

logger = logging.getLogger(__name__)


def _commit_or_conflict(db: Session, child_court_id: int) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Court mapping rejected by unique constraint: {e.orig}")
        raise ConflictError(
            f"Court {child_court_id} is already mapped to a parent court"
        )


def mapping_to_dict(mapping: CourtMapping) -> dict:
    return {
        "id": mapping.id,
        "parent_court_id": mapping.parent_court_id,
        "child_court_id": mapping.child_court_id,
        "position": mapping.position,
        "created_at": mapping.created_at,
        "parent_court_name": mapping.parent_court.name if mapping.parent_court else None,
        "parent_court_code": mapping.parent_court.code if mapping.parent_court else None,
        "child_court_name": mapping.child_court.name if mapping.child_court else None,
        "child_court_code": mapping.child_court.code if mapping.child_court else None,
    }


def get_court_mapping(db: Session, mapping_id: int) -> Optional[CourtMapping]:
    return (
        db.query(CourtMapping)
        .options(
            joinedload(CourtMapping.parent_court), joinedload(CourtMapping.child_court)
        )
        .filter(CourtMapping.id == mapping_id)
        .first()
    )


def get_court_mappings(db: Session) -> List[CourtMapping]:
    return (
        db.query(CourtMapping)
        .options(
            joinedload(CourtMapping.parent_court), joinedload(CourtMapping.child_court)
        )
        .order_by(CourtMapping.id)
        .all()
    )


def get_mappings_for_court(db: Session, court_id: int) -> List[CourtMapping]:
    """Mappings where the court is on either the parent or the child side."""
    return (
        db.query(CourtMapping)
        .filter(
            or_(
                CourtMapping.parent_court_id == court_id,
                CourtMapping.child_court_id == court_id,
            )
        )
        .all()
    )


def _ensure_court_exists(db: Session, court_id: int, role: str) -> None:
    if not get_court(db, court_id):
        raise NotFoundError(f"{role} court {court_id} not found")


def _ensure_pair_is_free(
    db: Session,
    parent_court_id: int,
    child_court_id: int,
    exclude_mapping_id: Optional[int] = None,
) -> None:
    pair_query = db.query(CourtMapping).filter(
        CourtMapping.parent_court_id == parent_court_id,
        CourtMapping.child_court_id == child_court_id,
    )
    child_query = db.query(CourtMapping).filter(
        CourtMapping.child_court_id == child_court_id
    )
    if exclude_mapping_id is not None:
        pair_query = pair_query.filter(CourtMapping.id != exclude_mapping_id)
        child_query = child_query.filter(CourtMapping.id != exclude_mapping_id)

    if pair_query.first():
        raise ConflictError("This court mapping already exists")
    if child_query.first():
        raise ConflictError(
            f"Court {child_court_id} is already mapped to another parent court"
        )


def create_court_mapping(db: Session, mapping: CourtMappingCreate) -> CourtMapping:
    if mapping.parent_court_id == mapping.child_court_id:
        raise InvalidRequestError("Parent and child court must be different courts")

    _ensure_court_exists(db, mapping.parent_court_id, "Parent")
    _ensure_court_exists(db, mapping.child_court_id, "Child")
    _ensure_pair_is_free(db, mapping.parent_court_id, mapping.child_court_id)

    db_mapping = CourtMapping(**mapping.model_dump())
    db.add(db_mapping)
    _commit_or_conflict(db, mapping.child_court_id)
    db.refresh(db_mapping)
    logger.info(
        f"Court mapping {db_mapping.id} created: "
        f"{db_mapping.parent_court_id} -> {db_mapping.child_court_id}"
    )
    return db_mapping


def update_court_mapping(
    db: Session, mapping_id: int, mapping: CourtMappingUpdate
) -> CourtMapping:
    db_mapping = get_court_mapping(db, mapping_id)
    if not db_mapping:
        raise NotFoundError(f"Court mapping {mapping_id} not found")

    update_data = mapping.model_dump(exclude_unset=True)
    parent_court_id = update_data.get("parent_court_id") or db_mapping.parent_court_id
    child_court_id = update_data.get("child_court_id") or db_mapping.child_court_id

    if parent_court_id == child_court_id:
        raise InvalidRequestError("Parent and child court must be different courts")
    if update_data.get("parent_court_id"):
        _ensure_court_exists(db, parent_court_id, "Parent")
    if update_data.get("child_court_id"):
        _ensure_court_exists(db, child_court_id, "Child")
    _ensure_pair_is_free(
        db, parent_court_id, child_court_id, exclude_mapping_id=mapping_id
    )

    for field, value in update_data.items():
        if value is not None or field == "position":
            setattr(db_mapping, field, value)

    _commit_or_conflict(db, child_court_id)
    db.refresh(db_mapping)
    return db_mapping


def delete_court_mapping(db: Session, mapping_id: int) -> bool:
    db_mapping = get_court_mapping(db, mapping_id)
    if not db_mapping:
        return False

    db.delete(db_mapping)
    db.commit()
    return True
