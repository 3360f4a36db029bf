"""Booking conflict guard and appointment status transitions."""

import logging
from datetime import date

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.core import config
from backend.models.appointment import (
    ACTIVE_STATUSES,
    APPOINTMENT_STATUSES,
    DEFAULT_STATUS,
    Appointment,
)
from backend.models.doctor import Doctor
from backend.services.availability import (
    Slot,
    compute_available_slots,
    normalize_time,
    working_window_for,
)
from backend.services.errors import (
    AppointmentNotFound,
    DoctorNotFound,
    InvalidStatus,
    SlotAlreadyBooked,
)

logger = logging.getLogger(__name__)


def get_active_doctor(db: Session, doctor_id: int) -> Doctor:
    doctor = db.query(Doctor).filter(
        Doctor.id == doctor_id,
        Doctor.is_active.is_(True),
    ).first()

    if doctor is None:
        logger.info('Doctor %s not found or inactive', doctor_id)
        raise DoctorNotFound()

    return doctor


def find_active_booking(
    db: Session,
    doctor_id: int,
    appointment_date: date,
    appointment_time: str,
) -> Appointment | None:
    return db.query(Appointment).filter(
        Appointment.doctor_id == doctor_id,
        Appointment.appointment_date == appointment_date,
        Appointment.appointment_time == appointment_time,
        Appointment.status.in_(ACTIVE_STATUSES),
    ).first()


def booked_times(db: Session, doctor_id: int, appointment_date: date) -> list[str]:
    rows = db.query(Appointment.appointment_time).filter(
        Appointment.doctor_id == doctor_id,
        Appointment.appointment_date == appointment_date,
        Appointment.status.in_(ACTIVE_STATUSES),
    ).order_by(Appointment.appointment_time.asc()).all()

    return [appointment_time for (appointment_time,) in rows]


def get_doctor_availability(
    db: Session,
    doctor_id: int,
    appointment_date: date,
) -> tuple[Doctor, list[Slot], list[str]]:
    doctor = get_active_doctor(db, doctor_id)
    booked = booked_times(db, doctor.id, appointment_date)
    slots = compute_available_slots(working_window_for(doctor), booked)

    logger.info(
        'Doctor %s on %s: %d open slots, %d booked',
        doctor.id,
        appointment_date.isoformat(),
        len(slots),
        len(booked),
    )
    return doctor, slots, booked


def attempt_book(db: Session, data) -> Appointment:
    """Book a slot for a patient or raise ``SlotAlreadyBooked``.

    The existence check gives the common case a clean error; the partial
    unique index on active appointments settles requests that race past it.
    """
    doctor = get_active_doctor(db, data.doctor_id)
    appointment_time = normalize_time(data.appointment_time)

    if find_active_booking(db, doctor.id, data.appointment_date, appointment_time):
        logger.info(
            'Rejected booking: doctor %s already booked on %s at %s',
            doctor.id,
            data.appointment_date.isoformat(),
            appointment_time,
        )
        raise SlotAlreadyBooked()

    appointment = Appointment(
        doctor_id=doctor.id,
        patient_name=data.patient_name,
        patient_email=data.patient_email,
        patient_phone=data.patient_phone,
        appointment_date=data.appointment_date,
        appointment_time=appointment_time,
        duration=doctor.consultation_duration or config.DEFAULT_SLOT_DURATION_MINUTES,
        status=DEFAULT_STATUS,
        reason=data.reason,
        notes=data.notes,
    )
    db.add(appointment)

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(
            'Concurrent booking lost the race for doctor %s on %s at %s',
            doctor.id,
            data.appointment_date.isoformat(),
            appointment_time,
        )
        raise SlotAlreadyBooked() from exc

    db.refresh(appointment)
    logger.info('Booked appointment %s for doctor %s', appointment.id, doctor.id)
    return appointment


def set_status(db: Session, appointment_id: int, new_status: str) -> Appointment:
    # any status may follow any other; only the value itself is checked
    if new_status not in APPOINTMENT_STATUSES:
        raise InvalidStatus()

    appointment = db.get(Appointment, appointment_id)
    if appointment is None:
        logger.info('Appointment %s not found', appointment_id)
        raise AppointmentNotFound()

    appointment.status = new_status
    appointment.updated_at = func.now()

    try:
        db.commit()
    except IntegrityError as exc:
        # reactivating an appointment whose slot was taken meanwhile
        db.rollback()
        raise SlotAlreadyBooked() from exc

    db.refresh(appointment)
    logger.info('Appointment %s status changed to %s', appointment.id, new_status)
    return appointment
