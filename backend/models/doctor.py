"""Doctor model definitions."""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from backend.database import Base


class Doctor(Base):
    """A doctor whose working hours drive the bookable slots."""
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    specialty_id = Column(Integer, ForeignKey("specialties.id"))
    email = Column(String, unique=True)
    phone = Column(String)
    photo_url = Column(String, default="/assets/images/doctor-default.jpg")
    experience_years = Column(Integer, default=5)
    consultation_duration = Column(Integer, default=30)
    working_hours_start = Column(String, default="09:00")
    working_hours_end = Column(String, default="18:00")
    available_days = Column(String, default="1,2,3,4,5")
    fee = Column(Float, default=50.0)
    bio = Column(String)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())

    specialty = relationship("Specialty", back_populates="doctors")
    appointments = relationship("Appointment", back_populates="doctor")
