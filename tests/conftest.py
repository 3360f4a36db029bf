import os

os.environ.setdefault('SEED_SAMPLE_DATA', 'false')

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from backend.database import Database  # noqa: E402
from backend.main import create_app  # noqa: E402
from backend.models.doctor import Doctor  # noqa: E402
from backend.models.specialty import Specialty  # noqa: E402


@pytest.fixture
def database():
    database = Database('sqlite://')
    database.create_schema()
    try:
        yield database
    finally:
        database.dispose()


@pytest.fixture
def db(database):
    with database.session() as session:
        yield session


def add_doctor(db, **overrides) -> Doctor:
    specialty = db.query(Specialty).filter(Specialty.name == 'Cardiology').first()
    if specialty is None:
        specialty = Specialty(name='Cardiology', description='Heart care', icon='fa-heartbeat')
        db.add(specialty)
        db.flush()

    fields = {
        'name': 'Dr. Maria Gonzalez',
        'specialty_id': specialty.id,
        'email': 'maria.gonzalez@clinic.com',
        'consultation_duration': 30,
        'working_hours_start': '09:00',
        'working_hours_end': '18:00',
        'is_active': True,
    }
    fields.update(overrides)

    doctor = Doctor(**fields)
    db.add(doctor)
    db.commit()
    db.refresh(doctor)
    return doctor


@pytest.fixture
def doctor(db) -> Doctor:
    return add_doctor(db)


@pytest.fixture
def make_doctor(database):
    def make(**overrides) -> int:
        with database.session() as session:
            return add_doctor(session, **overrides).id

    return make


@pytest.fixture
def doctor_id(make_doctor) -> int:
    return make_doctor()


@pytest.fixture
def client(database):
    app = create_app(database=database, seed=False)
    with TestClient(app) as test_client:
        yield test_client
