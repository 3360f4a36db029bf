"""Specialty model definitions."""

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from backend.database import Base


class Specialty(Base):
    """A medical specialty doctors are grouped under."""
    __tablename__ = "specialties"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, unique=True)
    description = Column(String)
    icon = Column(String, default="fa-stethoscope")
    created_at = Column(DateTime, server_default=func.now())

    doctors = relationship("Doctor", back_populates="specialty")
