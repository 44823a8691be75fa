from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from unisport.database import Base


class CourtType(Base):
    __tablename__ = "court_types"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    description = Column(String, nullable=True)

    courts = relationship("Court", back_populates="court_type")
