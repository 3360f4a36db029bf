"""Appointment model definitions."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, String, func, text
from sqlalchemy.orm import relationship

from backend.database import ACTIVE_SLOT_INDEX, Base

APPOINTMENT_STATUSES = ('pending', 'confirmed', 'cancelled', 'completed', 'no_show')
ACTIVE_STATUSES = ('confirmed', 'pending')
DEFAULT_STATUS = 'confirmed'

_ACTIVE_STATUS_CLAUSE = text("status IN ('confirmed', 'pending')")


class Appointment(Base):
    """Represents a booked appointment."""
    __tablename__ = "appointments"
    __table_args__ = (
        Index('idx_appointments_doctor_date', 'doctor_id', 'appointment_date'),
        Index(
            ACTIVE_SLOT_INDEX,
            'doctor_id',
            'appointment_date',
            'appointment_time',
            unique=True,
            sqlite_where=_ACTIVE_STATUS_CLAUSE,
            postgresql_where=_ACTIVE_STATUS_CLAUSE,
        ),
    )

    id = Column(Integer, primary_key=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False)
    patient_name = Column(String, nullable=False)
    patient_email = Column(String, nullable=False)
    patient_phone = Column(String, nullable=False)
    appointment_date = Column(Date, nullable=False)
    appointment_time = Column(String(5), nullable=False)  # HH:MM
    duration = Column(Integer, default=30)
    status = Column(String, default=DEFAULT_STATUS)
    reason = Column(String)
    notes = Column(String)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    doctor = relationship("Doctor", back_populates="appointments")
