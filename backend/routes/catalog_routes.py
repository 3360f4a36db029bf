from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from backend.models.appointment import Appointment
from backend.models.doctor import Doctor
from backend.models.specialty import Specialty
from backend.routes.common import get_db, storage_failure
from backend.schemas import (
    ApiResponse,
    AppointmentResponse,
    AvailabilityResponse,
    DoctorResponse,
    DoctorSummaryResponse,
    SlotResponse,
    SpecialtyResponse,
)
from backend.services.booking import get_doctor_availability

router = APIRouter(tags=['catalog'])


@router.get('/specialties', response_model=ApiResponse[list[SpecialtyResponse]])
def list_specialties(db: Session = Depends(get_db)):
    try:
        specialties = db.query(Specialty).order_by(Specialty.name.asc()).all()
    except SQLAlchemyError as exc:
        raise storage_failure(db, exc, 'listing specialties') from exc

    return ApiResponse(data=[SpecialtyResponse.model_validate(specialty) for specialty in specialties])


@router.get('/doctors', response_model=ApiResponse[list[DoctorResponse]])
def list_doctors(
    specialty_id: int | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Doctor).options(joinedload(Doctor.specialty)).filter(Doctor.is_active.is_(True))
        if specialty_id is not None:
            query = query.filter(Doctor.specialty_id == specialty_id)

        doctors = query.order_by(Doctor.name.asc()).all()
    except SQLAlchemyError as exc:
        raise storage_failure(db, exc, 'listing doctors') from exc

    return ApiResponse(data=[DoctorResponse.from_doctor(doctor) for doctor in doctors])


@router.get('/doctors/{doctor_id}/availability', response_model=ApiResponse[AvailabilityResponse])
def get_availability(
    doctor_id: int,
    date: date | None = Query(default=None),
    db: Session = Depends(get_db),
):
    if date is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Date is required.',
        )

    try:
        doctor, slots, booked = get_doctor_availability(db, doctor_id, date)
    except SQLAlchemyError as exc:
        raise storage_failure(db, exc, 'computing availability') from exc

    return ApiResponse(
        data=AvailabilityResponse(
            doctor=DoctorSummaryResponse(
                id=doctor.id,
                name=doctor.name,
                specialty_id=doctor.specialty_id,
                working_hours_start=doctor.working_hours_start,
                working_hours_end=doctor.working_hours_end,
                consultation_duration=doctor.consultation_duration,
            ),
            available_slots=[SlotResponse(time=slot.time, display=slot.display) for slot in slots],
            booked_slots=booked,
        )
    )


@router.get('/doctors/{doctor_id}/appointments', response_model=ApiResponse[list[AppointmentResponse]])
def list_doctor_appointments(
    doctor_id: int,
    status_filter: str | None = Query(default=None, alias='status'),
    date: date | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Appointment).options(
            joinedload(Appointment.doctor).joinedload(Doctor.specialty)
        ).filter(Appointment.doctor_id == doctor_id)

        if status_filter:
            query = query.filter(Appointment.status == status_filter)
        if date is not None:
            query = query.filter(Appointment.appointment_date == date)

        appointments = query.order_by(
            Appointment.appointment_date.asc(),
            Appointment.appointment_time.asc(),
        ).all()
    except SQLAlchemyError as exc:
        raise storage_failure(db, exc, 'listing doctor appointments') from exc

    return ApiResponse(data=[AppointmentResponse.from_appointment(appointment) for appointment in appointments])
