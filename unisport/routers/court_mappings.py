from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from unisport.database import get_db
from unisport.crud import court_mapping as crud
from unisport.models.user import User
from unisport.schemas.court_mapping import (
    CourtMappingCreate,
    CourtMappingResponse,
    CourtMappingUpdate,
)
from unisport.services.auth import get_current_user, get_current_staff_user

router = APIRouter()


@router.get("/", response_model=List[CourtMappingResponse])
def read_court_mappings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [crud.mapping_to_dict(mapping) for mapping in crud.get_court_mappings(db)]


@router.get("/{mapping_id}", response_model=CourtMappingResponse)
def read_court_mapping(
    mapping_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    db_mapping = crud.get_court_mapping(db, mapping_id)
    if db_mapping is None:
        raise HTTPException(status_code=404, detail="Court mapping not found")
    return crud.mapping_to_dict(db_mapping)


@router.post("/", response_model=CourtMappingResponse)
def create_court_mapping(
    mapping: CourtMappingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_staff_user),
):
    db_mapping = crud.create_court_mapping(db, mapping)
    return crud.mapping_to_dict(crud.get_court_mapping(db, db_mapping.id))


@router.patch("/{mapping_id}", response_model=CourtMappingResponse)
def update_court_mapping(
    mapping_id: int,
    mapping: CourtMappingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_staff_user),
):
    db_mapping = crud.update_court_mapping(db, mapping_id, mapping)
    return crud.mapping_to_dict(db_mapping)


@router.delete("/{mapping_id}")
def delete_court_mapping(
    mapping_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_staff_user),
):
    if not crud.delete_court_mapping(db, mapping_id):
        raise HTTPException(status_code=404, detail="Court mapping not found")
    return {"message": "Court mapping deleted successfully"}
