from datetime import date, timedelta

from findmyrun import db
from findmyrun.models import Attendance, Club, RunSession


def test_list_clubs_filters_by_city(client, approved_club, owned_club):
    db.session.add(Club(name='Pending Pacers', city='Bristol', pace='mixed', status='pending'))
    db.session.commit()

    response = client.get('/api/clubs?city=bristol')

    assert response.status_code == 200
    assert [c['name'] for c in response.get_json()['clubs']] == ['Harbour Harriers']
    assert len(client.get('/api/clubs').get_json()['clubs']) == 2


def test_get_club_includes_sessions(client, approved_club):
    response = client.get(f'/api/clubs/{approved_club.id}')

    body = response.get_json()
    assert body['name'] == 'Harbour Harriers'
    assert [(s['day'], s['time']) for s in body['sessions']] == [('Wednesday', '19:00')]


def test_get_unknown_club(client):
    response = client.get('/api/clubs/404')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Club not found'}


def test_sessions_matched_by_id_or_name(client, approved_club):
    db.session.add(RunSession(club_name='Harbour Harriers', day='Sunday', time='08:00'))
    db.session.commit()

    response = client.get(f'/api/clubs/{approved_club.id}/sessions')

    assert [s['day'] for s in response.get_json()['sessions']] == ['Wednesday', 'Sunday']


def test_record_attendance(client, approved_club):
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    payload = {'clubName': 'Harbour Harriers', 'sessionDate': tomorrow, 'visitorId': 'v-1'}

    response = client.post('/api/attendance', json=payload)
    assert response.get_json()['success'] is True
    row = Attendance.query.one()
    assert row.club_id == approved_club.id

    response = client.post('/api/attendance', json=payload)
    assert response.get_json()['alreadyGoing'] is True
    assert Attendance.query.count() == 1


def test_record_attendance_validation(client):
    assert client.post('/api/attendance', json={'clubName': 'X'}).status_code == 400
    response = client.post('/api/attendance', json={'clubName': 'X', 'sessionDate': 'next tuesday'})
    assert response.status_code == 400


def test_attendance_counts_for_coming_week(client):
    today = date.today()
    db.session.add_all([
        Attendance(club_name='A', session_date=today),
        Attendance(club_name='A', session_date=today + timedelta(days=3)),
        Attendance(club_name='B', session_date=today + timedelta(days=6)),
        Attendance(club_name='B', session_date=today + timedelta(days=7)),
        Attendance(club_name='B', session_date=today - timedelta(days=1)),
    ])
    db.session.commit()

    assert client.get('/api/attendance').get_json() == {'A': 2, 'B': 1}
    assert client.get('/api/attendance?club=A').get_json() == {'club': 'A', 'count': 2}
