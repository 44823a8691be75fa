from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from unisport.database import Base
from datetime import datetime


class Venue(Base):
    __tablename__ = "venues"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    courts = relationship("Court", back_populates="venue")
