from datetime import datetime

import pytest

from utils.validation import ValidationError, normalize_experience


def test_create_computes_duration(client):
    response = client.post('/api/experience', json={
        'role': 'Backend Engineer',
        'company': 'Acme',
        'startDate': '2022-01-15',
        'endDate': '2023-04-10',
        'type': 'Full-Time',
        'tech': ['Python', 'python', 'Python', ' Go '],
        'bullets': ['  Built APIs ', '', 'Built APIs'],
    })

    assert response.status_code == 201
    body = response.get_json()
    assert body['duration'] == 'Jan 2022 – Apr 2023 · 1 yr 3 mos'
    assert body['type'] == 'full-time'
    assert body['tech'] == ['Python', 'python', 'Go']
    assert body['bullets'] == ['Built APIs']
    assert body['current'] is False


def test_explicit_duration_is_kept(client):
    response = client.post('/api/experience', json={
        'role': 'Intern', 'company': 'Acme', 'startDate': '2021-06-01', 'duration': 'Summer 2021',
    })
    assert response.get_json()['duration'] == 'Summer 2021'


def test_dates_parsed_from_text(client):
    response = client.post('/api/experience', json={
        'role': 'Engineer', 'company': 'Initech', 'startText': 'Mar 2020', 'endText': 'March 2022',
    })

    body = response.get_json()
    assert body['startDate'] == '2020-03-01T00:00:00.000Z'
    assert body['endDate'] == '2022-03-01T00:00:00.000Z'
    assert body['duration'] == 'Mar 2020 – Mar 2022 · 2 yrs'


def test_requires_role_and_company(client):
    response = client.post('/api/experience', json={'role': 'Engineer'})
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Role and company are required'}


def test_rejects_unknown_employment_type(client):
    response = client.post('/api/experience', json={
        'role': 'Engineer', 'company': 'Acme', 'employmentType': 'gig',
    })
    assert response.status_code == 400
    assert response.get_json()['error'].startswith('Invalid employmentType')


def test_list_sorted_by_start_date(client):
    for role, start in [('First', '2019-01-01'), ('Latest', '2023-01-01'), ('Middle', '2021-01-01')]:
        client.post('/api/experience', json={'role': role, 'company': 'Acme', 'startDate': start})
    client.post('/api/experience', json={'role': 'Undated', 'company': 'Acme'})

    roles = [e['role'] for e in client.get('/api/experience').get_json()]
    assert roles == ['Latest', 'Middle', 'First', 'Undated']


def test_current_role_clears_end_date():
    values = normalize_experience({
        'role': 'Lead', 'company': 'Acme', 'current': 'true',
        'startDate': '2024-01-20', 'endDate': '2024-03-01', 'endText': 'Apr 2024',
    }, now=datetime(2024, 6, 3))

    assert values['current'] is True
    assert values['end_date'] is None
    assert values['duration'] == 'Jan 2024 – Present · 5 mos'


def test_present_end_text_means_ongoing():
    values = normalize_experience({
        'role': 'Lead', 'company': 'Acme', 'startText': '2023-02', 'endText': 'Present',
    }, now=datetime(2024, 5, 1))

    assert values['end_date'] is None
    assert values['duration'] == 'Feb 2023 – Present · 1 yr 3 mos'


def test_bad_company_url():
    with pytest.raises(ValidationError) as exc:
        normalize_experience({'role': 'Dev', 'company': 'Acme', 'companyUrl': 'acme dot com'})
    assert exc.value.message == 'Invalid URL for companyUrl'
    assert exc.value.field == 'companyUrl'
