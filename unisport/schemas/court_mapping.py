from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class CourtMappingBase(BaseModel):
    parent_court_id: int
    child_court_id: int
    position: Optional[str] = None


class CourtMappingCreate(CourtMappingBase):
    pass


class CourtMappingUpdate(BaseModel):
    parent_court_id: Optional[int] = None
    child_court_id: Optional[int] = None
    position: Optional[str] = None


class CourtMappingResponse(CourtMappingBase):
    id: int
    created_at: datetime
    parent_court_name: Optional[str] = None
    parent_court_code: Optional[str] = None
    child_court_name: Optional[str] = None
    child_court_code: Optional[str] = None
