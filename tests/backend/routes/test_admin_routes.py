import pytest


def doctor_payload(specialty_id: int, **overrides) -> dict:
    payload = {
        'name': 'Dr. Roberto Silva',
        'specialty_id': specialty_id,
        'email': 'Roberto.Silva@clinic.com',
        'phone': '+1 234-567-8903',
        'consultation_duration': 20,
        'working_hours_start': '10:00',
        'working_hours_end': '19:00',
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def specialty_id(client) -> int:
    response = client.post('/api/admin/specialties', json={'name': 'Dermatology', 'description': 'Skin care'})
    return response.json()['data']['id']


def test_create_specialty_defaults_icon(client, specialty_id: int) -> None:
    specialties = client.get('/api/admin/specialties').json()['data']

    assert specialties[0]['id'] == specialty_id
    assert specialties[0]['icon'] == 'fa-stethoscope'


def test_create_specialty_rejects_duplicate_name(client, specialty_id: int) -> None:
    response = client.post('/api/admin/specialties', json={'name': 'Dermatology'})

    assert response.status_code == 409
    assert response.json() == {'success': False, 'error': 'A specialty with that name already exists.'}


def test_create_specialty_requires_name(client) -> None:
    response = client.post('/api/admin/specialties', json={'name': '  '})

    assert response.status_code == 400


def test_create_doctor_applies_defaults(client, specialty_id: int) -> None:
    response = client.post(
        '/api/admin/doctors',
        json={'name': 'Dr. New', 'specialty_id': specialty_id, 'email': 'new@clinic.com'},
    )

    assert response.status_code == 201
    doctor = client.get('/api/admin/doctors').json()['data'][0]
    assert doctor['id'] == response.json()['data']['id']
    assert doctor['consultation_duration'] == 30
    assert doctor['working_hours_start'] == '09:00'
    assert doctor['working_hours_end'] == '18:00'
    assert doctor['available_days'] == '1,2,3,4,5'
    assert doctor['fee'] == 50.0
    assert doctor['specialty_name'] == 'Dermatology'


def test_create_doctor_rejects_duplicate_email(client, specialty_id: int) -> None:
    first = client.post('/api/admin/doctors', json=doctor_payload(specialty_id))
    second = client.post('/api/admin/doctors', json=doctor_payload(specialty_id, email='roberto.silva@clinic.com'))

    assert first.status_code == 201
    assert second.status_code == 409


@pytest.mark.parametrize(
    'overrides',
    [
        {'working_hours_start': '9am'},
        {'working_hours_end': '24:00'},
        {'consultation_duration': 0},
        {'email': ''},
    ],
)
def test_create_doctor_validates_schedule(client, specialty_id: int, overrides: dict) -> None:
    response = client.post('/api/admin/doctors', json=doctor_payload(specialty_id, **overrides))

    assert response.status_code == 400
    assert response.json()['success'] is False


def test_create_doctor_requires_existing_specialty(client) -> None:
    response = client.post('/api/admin/doctors', json=doctor_payload(999))

    assert response.status_code == 404
    assert response.json()['error'] == 'Specialty not found.'


def test_update_doctor_changes_schedule_used_for_slots(client, specialty_id: int) -> None:
    doctor_id = client.post('/api/admin/doctors', json=doctor_payload(specialty_id)).json()['data']['id']

    response = client.put(
        f'/api/admin/doctors/{doctor_id}',
        json=doctor_payload(specialty_id, working_hours_start='8:00', working_hours_end='10:00', consultation_duration=60),
    )

    assert response.status_code == 200
    assert response.json()['data']['working_hours_start'] == '08:00'

    slots = client.get(f'/api/doctors/{doctor_id}/availability', params={'date': '2024-06-03'}).json()['data']
    assert slots['available_slots'] == [
        {'time': '08:00', 'display': '8:00 AM'},
        {'time': '09:00', 'display': '9:00 AM'},
    ]


def test_update_doctor_can_deactivate(client, specialty_id: int) -> None:
    doctor_id = client.post('/api/admin/doctors', json=doctor_payload(specialty_id)).json()['data']['id']

    client.put(f'/api/admin/doctors/{doctor_id}', json=doctor_payload(specialty_id, is_active=False))

    assert client.get('/api/doctors').json()['data'] == []
    assert client.get('/api/admin/doctors').json()['data'][0]['is_active'] is False


def test_update_unknown_doctor(client, specialty_id: int) -> None:
    response = client.put('/api/admin/doctors/9999', json=doctor_payload(specialty_id))

    assert response.status_code == 404
    assert response.json() == {'success': False, 'error': 'Doctor not found.'}


def test_admin_appointments_filters_and_orders_newest_first(client, doctor_id: int) -> None:
    created_ids = []
    for appointment_date, appointment_time in [('2024-06-01', '09:00'), ('2024-06-03', '10:00'), ('2024-06-01', '15:00')]:
        response = client.post(
            '/api/appointments',
            json={
                'doctor_id': doctor_id,
                'patient_name': 'Ana Perez',
                'patient_email': 'ana@example.com',
                'patient_phone': '+1 555-0100',
                'appointment_date': appointment_date,
                'appointment_time': appointment_time,
            },
        )
        created_ids.append(response.json()['data']['appointment_id'])

    client.patch(f'/api/appointments/{created_ids[0]}/status', json={'status': 'no_show'})

    everything = client.get('/api/admin/appointments').json()['data']
    no_shows = client.get('/api/admin/appointments', params={'status': 'no_show'}).json()['data']
    june_first = client.get(
        '/api/admin/appointments',
        params={'date': '2024-06-01', 'doctor_id': doctor_id},
    ).json()['data']
    other_doctor = client.get('/api/admin/appointments', params={'doctor_id': doctor_id + 1}).json()['data']

    assert [(item['appointment_date'], item['appointment_time']) for item in everything] == [
        ('2024-06-03', '10:00'),
        ('2024-06-01', '15:00'),
        ('2024-06-01', '09:00'),
    ]
    assert [item['id'] for item in no_shows] == [created_ids[0]]
    assert len(june_first) == 2
    assert other_doctor == []
