import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from backend.models.appointment import Appointment
from backend.models.doctor import Doctor
from backend.routes.common import get_db, storage_failure
from backend.schemas import (
    ApiResponse,
    AppointmentResponse,
    BookingResponse,
    CreateAppointmentRequest,
    UpdateStatusRequest,
)
from backend.services.booking import attempt_book, set_status

router = APIRouter(tags=['appointments'])

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    'confirmed': 'confirmed',
    'cancelled': 'cancelled',
    'completed': 'completed',
    'pending': 'marked as pending',
    'no_show': 'marked as no-show',
}


@router.post(
    '/appointments',
    response_model=ApiResponse[BookingResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_appointment(data: CreateAppointmentRequest, db: Session = Depends(get_db)):
    try:
        appointment = attempt_book(db, data)
    except SQLAlchemyError as exc:
        raise storage_failure(db, exc, 'creating an appointment') from exc

    return ApiResponse(
        message='Appointment booked successfully.',
        data=BookingResponse(
            appointment_id=appointment.id,
            appointment=AppointmentResponse.from_appointment(appointment),
        ),
    )


@router.patch('/appointments/{appointment_id}/status', response_model=ApiResponse[AppointmentResponse])
def update_appointment_status(
    appointment_id: int,
    data: UpdateStatusRequest,
    db: Session = Depends(get_db),
):
    logger.info('Status change requested for appointment %s: %s', appointment_id, data.status)

    try:
        appointment = set_status(db, appointment_id, data.status)
    except SQLAlchemyError as exc:
        raise storage_failure(db, exc, 'updating appointment status') from exc

    return ApiResponse(
        message=f'Appointment {STATUS_MESSAGES[appointment.status]} successfully.',
        data=AppointmentResponse.from_appointment(appointment),
    )


@router.get('/patient/appointments', response_model=ApiResponse[list[AppointmentResponse]])
def list_patient_appointments(
    email: str | None = Query(default=None),
    phone: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    normalized_email = (email or '').strip().lower()
    normalized_phone = (phone or '').strip()

    if not normalized_email and not normalized_phone:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='An email or phone number is required to look up appointments.',
        )

    if normalized_email and normalized_phone:
        patient_filter = and_(
            Appointment.patient_email == normalized_email,
            Appointment.patient_phone == normalized_phone,
        )
    else:
        patient_filter = or_(
            Appointment.patient_email == normalized_email,
            Appointment.patient_phone == normalized_phone,
        )

    try:
        appointments = db.query(Appointment).options(
            joinedload(Appointment.doctor).joinedload(Doctor.specialty)
        ).filter(patient_filter).order_by(
            Appointment.appointment_date.desc(),
            Appointment.appointment_time.desc(),
        ).all()
    except SQLAlchemyError as exc:
        raise storage_failure(db, exc, 'looking up patient appointments') from exc

    return ApiResponse(data=[AppointmentResponse.from_appointment(appointment) for appointment in appointments])
