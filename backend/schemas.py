"""Request and response schemas shared by the API routers."""

from datetime import date, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationInfo, field_validator

from backend.models.appointment import Appointment
from backend.services.availability import is_valid_time, normalize_time

DataT = TypeVar('DataT')

MAX_NOTES_LENGTH = 600


def _required_text(value: str, label: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError(f'{label} is required.')
    return normalized


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None

    normalized = value.strip()
    if not normalized:
        return None

    if len(normalized) > MAX_NOTES_LENGTH:
        raise ValueError(f'Text must be {MAX_NOTES_LENGTH} characters or fewer.')

    return normalized


def _working_hour(value: str | None) -> str | None:
    if value is None:
        return None
    if not is_valid_time(value):
        raise ValueError('Working hours must use the HH:MM (24-hour) format.')
    return normalize_time(value)


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    message: str | None = None
    data: DataT


class SpecialtyResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    icon: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class CreateSpecialtyRequest(BaseModel):
    name: str
    description: str | None = None
    icon: str | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _required_text(value, 'Specialty name')


class CreatedResponse(BaseModel):
    id: int


class DoctorResponse(BaseModel):
    id: int
    name: str
    specialty_id: int | None = None
    specialty_name: str | None = None
    specialty_icon: str | None = None
    email: str | None = None
    phone: str | None = None
    photo_url: str | None = None
    experience_years: int | None = None
    consultation_duration: int | None = None
    working_hours_start: str | None = None
    working_hours_end: str | None = None
    available_days: str | None = None
    fee: float | None = None
    bio: str | None = None
    is_active: bool

    @classmethod
    def from_doctor(cls, doctor) -> 'DoctorResponse':
        return cls(
            id=doctor.id,
            name=doctor.name,
            specialty_id=doctor.specialty_id,
            specialty_name=doctor.specialty.name if doctor.specialty else None,
            specialty_icon=doctor.specialty.icon if doctor.specialty else None,
            email=doctor.email,
            phone=doctor.phone,
            photo_url=doctor.photo_url,
            experience_years=doctor.experience_years,
            consultation_duration=doctor.consultation_duration,
            working_hours_start=doctor.working_hours_start,
            working_hours_end=doctor.working_hours_end,
            available_days=doctor.available_days,
            fee=doctor.fee,
            bio=doctor.bio,
            is_active=bool(doctor.is_active),
        )


class DoctorRequest(BaseModel):
    name: str
    specialty_id: int
    email: str
    phone: str | None = None
    experience_years: int | None = None
    consultation_duration: int | None = None
    working_hours_start: str | None = None
    working_hours_end: str | None = None
    available_days: str | None = None
    fee: float | None = None
    bio: str | None = None
    is_active: bool = True

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _required_text(value, 'Doctor name')

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _required_text(value, 'Doctor email').lower()

    @field_validator('consultation_duration')
    @classmethod
    def validate_consultation_duration(cls, value: int | None) -> int | None:
        if value is not None and value <= 0:
            raise ValueError('Consultation duration must be a positive number of minutes.')
        return value

    @field_validator('working_hours_start', 'working_hours_end')
    @classmethod
    def validate_working_hours(cls, value: str | None) -> str | None:
        return _working_hour(value)


class DoctorSummaryResponse(BaseModel):
    id: int
    name: str
    specialty_id: int | None = None
    working_hours_start: str | None = None
    working_hours_end: str | None = None
    consultation_duration: int | None = None


class SlotResponse(BaseModel):
    time: str
    display: str


class AvailabilityResponse(BaseModel):
    doctor: DoctorSummaryResponse
    available_slots: list[SlotResponse]
    booked_slots: list[str]


class CreateAppointmentRequest(BaseModel):
    doctor_id: int
    patient_name: str
    patient_email: str
    patient_phone: str
    appointment_date: date
    appointment_time: str
    reason: str | None = None
    notes: str | None = None

    @field_validator('patient_name', 'patient_phone')
    @classmethod
    def validate_patient_contact(cls, value: str, info: ValidationInfo) -> str:
        return _required_text(value, info.field_name.replace('_', ' ').capitalize())

    @field_validator('patient_email')
    @classmethod
    def validate_patient_email(cls, value: str) -> str:
        return _required_text(value, 'Patient email').lower()

    @field_validator('appointment_time')
    @classmethod
    def validate_appointment_time(cls, value: str) -> str:
        normalized = value.strip()
        if not is_valid_time(normalized):
            raise ValueError('Appointment time must use the HH:MM (24-hour) format.')
        return normalize_time(normalized)

    @field_validator('reason', 'notes')
    @classmethod
    def validate_free_text(cls, value: str | None) -> str | None:
        return _optional_text(value)


class UpdateStatusRequest(BaseModel):
    status: str


class AppointmentResponse(BaseModel):
    id: int
    doctor_id: int
    doctor_name: str | None = None
    specialty_name: str | None = None
    specialty_icon: str | None = None
    patient_name: str
    patient_email: str
    patient_phone: str
    appointment_date: date
    appointment_time: str
    duration: int | None = None
    status: str
    reason: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_appointment(cls, appointment: Appointment) -> 'AppointmentResponse':
        doctor = appointment.doctor
        specialty = doctor.specialty if doctor else None
        return cls(
            id=appointment.id,
            doctor_id=appointment.doctor_id,
            doctor_name=doctor.name if doctor else None,
            specialty_name=specialty.name if specialty else None,
            specialty_icon=specialty.icon if specialty else None,
            patient_name=appointment.patient_name,
            patient_email=appointment.patient_email,
            patient_phone=appointment.patient_phone,
            appointment_date=appointment.appointment_date,
            appointment_time=appointment.appointment_time,
            duration=appointment.duration,
            status=appointment.status,
            reason=appointment.reason,
            notes=appointment.notes,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )


class BookingResponse(BaseModel):
    appointment_id: int
    appointment: AppointmentResponse
