from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    ForeignKey,
    DateTime,
    Enum,
    Boolean,
)
from sqlalchemy.orm import relationship
from unisport.database import Base
import enum
from datetime import datetime


class CourtStatus(enum.Enum):
    AVAILABLE = "available"
    BOOKED = "booked"
    MAINTENANCE = "maintenance"


class Court(Base):
    __tablename__ = "courts"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    code = Column(String(20), nullable=False, unique=True)
    description = Column(String, nullable=True)
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    # Only AVAILABLE courts accept new bookings
    status = Column(Enum(CourtStatus), default=CourtStatus.AVAILABLE, nullable=False)
    is_indoor = Column(Boolean, default=True)
    venue_id = Column(Integer, ForeignKey("venues.id"), nullable=False)
    type_id = Column(Integer, ForeignKey("court_types.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    venue = relationship("Venue", back_populates="courts")
    court_type = relationship("CourtType", back_populates="courts")
    bookings = relationship("Booking", back_populates="court")
