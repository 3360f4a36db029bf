def test_list_specialties_sorted_by_name(client, make_doctor) -> None:
    make_doctor()
    make_doctor(name='Dr. Ana Lopez', email='ana.lopez@clinic.com')

    client.post('/api/admin/specialties', json={'name': 'Allergology'})

    response = client.get('/api/specialties')

    assert response.status_code == 200
    assert [item['name'] for item in response.json()['data']] == ['Allergology', 'Cardiology']


def test_list_doctors_hides_inactive_and_filters_by_specialty(client, make_doctor) -> None:
    make_doctor()
    make_doctor(name='Dr. Retired', email='retired@clinic.com', is_active=False)

    everyone = client.get('/api/doctors').json()['data']
    specialty_id = everyone[0]['specialty_id']
    filtered = client.get('/api/doctors', params={'specialty_id': specialty_id}).json()['data']
    none = client.get('/api/doctors', params={'specialty_id': specialty_id + 1}).json()['data']

    assert [doctor['name'] for doctor in everyone] == ['Dr. Maria Gonzalez']
    assert everyone[0]['specialty_name'] == 'Cardiology'
    assert everyone[0]['specialty_icon'] == 'fa-heartbeat'
    assert len(filtered) == 1
    assert none == []


def test_availability_lists_open_and_booked_slots(client, doctor_id: int) -> None:
    client.post(
        '/api/appointments',
        json={
            'doctor_id': doctor_id,
            'patient_name': 'Ana Perez',
            'patient_email': 'ana@example.com',
            'patient_phone': '+1 555-0100',
            'appointment_date': '2024-06-01',
            'appointment_time': '17:30',
        },
    )

    response = client.get(f'/api/doctors/{doctor_id}/availability', params={'date': '2024-06-01'})

    assert response.status_code == 200
    data = response.json()['data']
    assert data['doctor']['id'] == doctor_id
    assert data['doctor']['consultation_duration'] == 30
    assert data['booked_slots'] == ['17:30']
    assert len(data['available_slots']) == 17
    assert data['available_slots'][0] == {'time': '09:00', 'display': '9:00 AM'}
    assert data['available_slots'][-1] == {'time': '17:00', 'display': '5:00 PM'}


def test_availability_requires_date(client, doctor_id: int) -> None:
    response = client.get(f'/api/doctors/{doctor_id}/availability')

    assert response.status_code == 400
    assert response.json() == {'success': False, 'error': 'Date is required.'}


def test_availability_unknown_or_inactive_doctor(client, make_doctor) -> None:
    inactive_id = make_doctor(is_active=False)

    missing = client.get('/api/doctors/9999/availability', params={'date': '2024-06-01'})
    inactive = client.get(f'/api/doctors/{inactive_id}/availability', params={'date': '2024-06-01'})

    assert missing.status_code == 404
    assert inactive.status_code == 404


def test_availability_with_broken_schedule(client, make_doctor) -> None:
    broken_id = make_doctor(working_hours_start='9am')

    response = client.get(f'/api/doctors/{broken_id}/availability', params={'date': '2024-06-01'})

    assert response.status_code == 400
    assert response.json()['success'] is False


def test_doctor_appointments_filtered_and_ordered(client, doctor_id: int) -> None:
    for appointment_date, appointment_time in [('2024-06-02', '09:00'), ('2024-06-01', '11:00'), ('2024-06-01', '09:30')]:
        client.post(
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

    all_items = client.get(f'/api/doctors/{doctor_id}/appointments').json()['data']
    one_day = client.get(f'/api/doctors/{doctor_id}/appointments', params={'date': '2024-06-01'}).json()['data']
    cancelled = client.get(f'/api/doctors/{doctor_id}/appointments', params={'status': 'cancelled'}).json()['data']

    assert [(item['appointment_date'], item['appointment_time']) for item in all_items] == [
        ('2024-06-01', '09:30'),
        ('2024-06-01', '11:00'),
        ('2024-06-02', '09:00'),
    ]
    assert len(one_day) == 2
    assert cancelled == []
