"""Errors raised by the booking services.

Each error carries the HTTP status the API answers with, so route handlers
can let them propagate to the application-level handler.
"""


class ClinicError(Exception):
    """Base exception for clinic booking operations."""

    status_code = 400
    default_message = 'Request could not be processed.'

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidTimeFormat(ClinicError):
    """Raised when a time of day is not a 24-hour HH:MM string."""

    default_message = 'Invalid time format. Expected HH:MM (24-hour).'


class InvalidConfiguration(ClinicError):
    """Raised when a doctor's schedule cannot produce slots."""

    default_message = 'Consultation duration must be a positive number of minutes.'


class InvalidStatus(ClinicError):
    default_message = (
        'Invalid status. Allowed statuses are: pending, confirmed, cancelled, completed, no_show.'
    )


class DoctorNotFound(ClinicError):
    status_code = 404
    default_message = 'Doctor not found.'


class SpecialtyNotFound(ClinicError):
    status_code = 404
    default_message = 'Specialty not found.'


class AppointmentNotFound(ClinicError):
    status_code = 404
    default_message = 'Appointment not found.'


class SlotAlreadyBooked(ClinicError):
    """Raised when the requested slot is held by an active appointment."""

    status_code = 409
    default_message = 'This time slot is already booked. Please choose another time.'


class DuplicateRecord(ClinicError):
    status_code = 409
    default_message = 'A record with these details already exists.'


class InternalError(ClinicError):
    """Storage or connectivity failure; the message never leaks details."""

    status_code = 500
    default_message = 'Internal server error.'
