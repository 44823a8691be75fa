from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from unisport.database import Base
from datetime import datetime


class CourtMapping(Base):
    """
    Parent/child pairing of two courts that share physical space, e.g. a
    full-size court split into smaller bookable sub-courts.
    """

    __tablename__ = "court_mappings"
    __table_args__ = (
        UniqueConstraint(
            "parent_court_id", "child_court_id", name="uq_court_mapping_pair"
        ),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    parent_court_id = Column(
        Integer, ForeignKey("courts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # A child court has at most one parent
    child_court_id = Column(
        Integer, ForeignKey("courts.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    position = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    parent_court = relationship("Court", foreign_keys=[parent_court_id])
    child_court = relationship("Court", foreign_keys=[child_court_id])
