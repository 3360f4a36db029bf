import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from backend.core import config
from backend.models.appointment import Appointment
from backend.models.doctor import Doctor
from backend.models.specialty import Specialty
from backend.routes.common import get_db, storage_failure
from backend.schemas import (
    ApiResponse,
    AppointmentResponse,
    CreatedResponse,
    CreateSpecialtyRequest,
    DoctorRequest,
    DoctorResponse,
    SpecialtyResponse,
)
from backend.services.errors import DoctorNotFound, DuplicateRecord, SpecialtyNotFound

router = APIRouter(tags=['admin'])

logger = logging.getLogger(__name__)

DEFAULT_SPECIALTY_ICON = 'fa-stethoscope'
DEFAULT_EXPERIENCE_YEARS = 5
DEFAULT_AVAILABLE_DAYS = '1,2,3,4,5'
DEFAULT_FEE = 50.0


def ensure_specialty_exists(db: Session, specialty_id: int) -> None:
    if db.get(Specialty, specialty_id) is None:
        raise SpecialtyNotFound()


@router.get('/specialties', response_model=ApiResponse[list[SpecialtyResponse]])
def list_all_specialties(db: Session = Depends(get_db)):
    try:
        specialties = db.query(Specialty).order_by(Specialty.name.asc()).all()
    except SQLAlchemyError as exc:
        raise storage_failure(db, exc, 'listing specialties') from exc

    return ApiResponse(data=[SpecialtyResponse.model_validate(specialty) for specialty in specialties])


@router.post(
    '/specialties',
    response_model=ApiResponse[CreatedResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_specialty(data: CreateSpecialtyRequest, db: Session = Depends(get_db)):
    specialty = Specialty(
        name=data.name,
        description=data.description,
        icon=data.icon or DEFAULT_SPECIALTY_ICON,
    )

    try:
        db.add(specialty)
        db.commit()
        db.refresh(specialty)
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateRecord('A specialty with that name already exists.') from exc
    except SQLAlchemyError as exc:
        raise storage_failure(db, exc, 'creating a specialty') from exc

    logger.info('Created specialty %s (%s)', specialty.id, specialty.name)
    return ApiResponse(message='Specialty created successfully.', data=CreatedResponse(id=specialty.id))


@router.get('/doctors', response_model=ApiResponse[list[DoctorResponse]])
def list_all_doctors(db: Session = Depends(get_db)):
    try:
        doctors = db.query(Doctor).options(joinedload(Doctor.specialty)).order_by(Doctor.name.asc()).all()
    except SQLAlchemyError as exc:
        raise storage_failure(db, exc, 'listing doctors') from exc

    return ApiResponse(data=[DoctorResponse.from_doctor(doctor) for doctor in doctors])


@router.post(
    '/doctors',
    response_model=ApiResponse[CreatedResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_doctor(data: DoctorRequest, db: Session = Depends(get_db)):
    try:
        ensure_specialty_exists(db, data.specialty_id)

        doctor = Doctor(
            name=data.name,
            specialty_id=data.specialty_id,
            email=data.email,
            phone=data.phone,
            experience_years=data.experience_years or DEFAULT_EXPERIENCE_YEARS,
            consultation_duration=data.consultation_duration or config.DEFAULT_SLOT_DURATION_MINUTES,
            working_hours_start=data.working_hours_start or config.DEFAULT_WORKING_HOURS_START,
            working_hours_end=data.working_hours_end or config.DEFAULT_WORKING_HOURS_END,
            available_days=data.available_days or DEFAULT_AVAILABLE_DAYS,
            fee=data.fee if data.fee is not None else DEFAULT_FEE,
            bio=data.bio,
            is_active=data.is_active,
        )
        db.add(doctor)
        db.commit()
        db.refresh(doctor)
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateRecord('A doctor with that email already exists.') from exc
    except SQLAlchemyError as exc:
        raise storage_failure(db, exc, 'creating a doctor') from exc

    logger.info('Created doctor %s (%s)', doctor.id, doctor.name)
    return ApiResponse(message='Doctor created successfully.', data=CreatedResponse(id=doctor.id))


@router.put('/doctors/{doctor_id}', response_model=ApiResponse[DoctorResponse])
def update_doctor(doctor_id: int, data: DoctorRequest, db: Session = Depends(get_db)):
    try:
        doctor = db.get(Doctor, doctor_id)
        if doctor is None:
            raise DoctorNotFound()

        ensure_specialty_exists(db, data.specialty_id)

        for field_name, value in data.model_dump(exclude_unset=True).items():
            setattr(doctor, field_name, value)

        db.commit()
        db.refresh(doctor)
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateRecord('A doctor with that email already exists.') from exc
    except SQLAlchemyError as exc:
        raise storage_failure(db, exc, 'updating a doctor') from exc

    logger.info('Updated doctor %s', doctor.id)
    return ApiResponse(message='Doctor updated successfully.', data=DoctorResponse.from_doctor(doctor))


@router.get('/appointments', response_model=ApiResponse[list[AppointmentResponse]])
def list_all_appointments(
    status_filter: str | None = Query(default=None, alias='status'),
    date: date | None = Query(default=None),
    doctor_id: int | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Appointment).options(
            joinedload(Appointment.doctor).joinedload(Doctor.specialty)
        )

        if status_filter:
            query = query.filter(Appointment.status == status_filter)
        if date is not None:
            query = query.filter(Appointment.appointment_date == date)
        if doctor_id is not None:
            query = query.filter(Appointment.doctor_id == doctor_id)

        appointments = query.order_by(
            Appointment.appointment_date.desc(),
            Appointment.appointment_time.desc(),
        ).all()
    except SQLAlchemyError as exc:
        raise storage_failure(db, exc, 'listing appointments') from exc

    return ApiResponse(data=[AppointmentResponse.from_appointment(appointment) for appointment in appointments])
