"""Sample specialties and doctors for a fresh database."""

import logging

from sqlalchemy.orm import Session

from backend.models.doctor import Doctor
from backend.models.specialty import Specialty

logger = logging.getLogger(__name__)

SAMPLE_SPECIALTIES = [
    {'name': 'General Medicine', 'description': 'Primary care and general checkups', 'icon': 'fa-user-md'},
    {'name': 'Cardiology', 'description': 'Diagnosis and treatment of heart conditions', 'icon': 'fa-heartbeat'},
    {'name': 'Dermatology', 'description': 'Skin care and skin conditions', 'icon': 'fa-allergies'},
    {'name': 'Pediatrics', 'description': 'Medical care for children and adolescents', 'icon': 'fa-baby'},
    {'name': 'Gynecology', 'description': 'Women\'s health and reproductive care', 'icon': 'fa-female'},
]

SAMPLE_DOCTORS = [
    {
        'name': 'Dr. Carlos Rodriguez',
        'specialty': 'General Medicine',
        'email': 'carlos.rodriguez@clinic.com',
        'phone': '+1 234-567-8901',
        'experience_years': 15,
        'consultation_duration': 30,
        'working_hours_start': '08:00',
        'working_hours_end': '17:00',
        'fee': 60.0,
        'bio': 'General practitioner with more than 15 years of experience.',
    },
    {
        'name': 'Dr. Maria Gonzalez',
        'specialty': 'Cardiology',
        'email': 'maria.gonzalez@clinic.com',
        'phone': '+1 234-567-8902',
        'experience_years': 12,
        'consultation_duration': 45,
        'working_hours_start': '09:00',
        'working_hours_end': '18:00',
        'fee': 120.0,
        'bio': 'Board-certified cardiologist specialized in interventional cardiology.',
    },
    {
        'name': 'Dr. Roberto Silva',
        'specialty': 'Dermatology',
        'email': 'roberto.silva@clinic.com',
        'phone': '+1 234-567-8903',
        'experience_years': 8,
        'consultation_duration': 20,
        'working_hours_start': '10:00',
        'working_hours_end': '19:00',
        'fee': 80.0,
        'bio': 'Dermatologist focused on skin disease and aesthetic dermatology.',
    },
]


def seed_sample_data(db: Session) -> tuple[int, int]:
    """Insert the sample records that are not present yet.

    Specialties are matched by name and doctors by email, so running this
    twice leaves the data unchanged. Returns how many specialties and doctors
    were inserted.
    """
    specialties_by_name = {specialty.name: specialty for specialty in db.query(Specialty).all()}
    specialties_inserted = 0

    for entry in SAMPLE_SPECIALTIES:
        if entry['name'] in specialties_by_name:
            continue
        specialty = Specialty(**entry)
        db.add(specialty)
        specialties_by_name[specialty.name] = specialty
        specialties_inserted += 1

    db.flush()

    existing_emails = {email for (email,) in db.query(Doctor.email).all()}
    doctors_inserted = 0

    for entry in SAMPLE_DOCTORS:
        if entry['email'] in existing_emails:
            continue
        fields = {key: value for key, value in entry.items() if key != 'specialty'}
        db.add(Doctor(specialty_id=specialties_by_name[entry['specialty']].id, **fields))
        doctors_inserted += 1

    db.commit()

    logger.info('Seeded %d specialties and %d doctors', specialties_inserted, doctors_inserted)
    return specialties_inserted, doctors_inserted
