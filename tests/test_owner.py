from datetime import datetime, timedelta
from urllib.parse import parse_qs, urlparse

import pytest

from findmyrun import db
from findmyrun.errors import DependencyFailure
from findmyrun.models import Club, OwnerSession
from findmyrun.services import notifier, session_store
from findmyrun.services.owner_service import LOGIN_REQUESTED_MESSAGE, OwnerService


def _session_cookie(email):
    secret = session_store.create_login_challenge(email)
    return OwnerService.redeem_login(email, secret)


def _auth(cookie):
    return {'Cookie': f'owner_session={cookie}'}


@pytest.fixture
def other_club(app):
    club = Club(name='Hill Hoppers', city='Sheffield', pace='fast', status='approved')
    club.assign_owner('rival@club.test', 'Rita Rival')
    db.session.add(club)
    db.session.commit()
    return club


def test_scenario_d_unknown_email_gets_generic_reply(client, sent):
    response = client.post('/api/owner/login', json={'email': 'nobody@club.test'})

    assert response.status_code == 200
    assert response.get_json() == {'success': True, 'message': LOGIN_REQUESTED_MESSAGE}
    assert OwnerSession.query.filter_by(owner_email='nobody@club.test').count() == 0
    assert sent == []


def test_owner_gets_same_reply_and_a_link(client, sent, owned_club):
    response = client.post('/api/owner/login', json={'email': 'Owner@Club.test'})

    assert response.get_json() == {'success': True, 'message': LOGIN_REQUESTED_MESSAGE}
    assert OwnerSession.query.filter_by(owner_email='owner@club.test').count() == 1
    name, (email, secret) = sent[-1]
    assert name == 'notify_owner_login'
    assert email == 'owner@club.test'
    assert secret


def test_login_email_failure_is_reported(client, monkeypatch, owned_club):
    def broken(*args):
        raise DependencyFailure('Failed to send owner-login-link email')

    monkeypatch.setattr(notifier, 'notify_owner_login', broken)

    response = client.post('/api/owner/login', json={'email': 'owner@club.test'})

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to send owner-login-link email'}


def test_login_requires_email(client):
    response = client.post('/api/owner/login', json={})
    assert response.status_code == 400


def test_login_rejects_non_object_body(client):
    response = client.post('/api/owner/login', json=['owner@club.test'])
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Invalid request body'}


def test_edit_rejects_non_object_body(client, owned_club):
    cookie = _session_cookie('owner@club.test')
    response = client.put(f'/api/owner/clubs/{owned_club.id}', json=[['name', 'X']], headers=_auth(cookie))
    assert response.status_code == 400
    assert db.session.get(Club, owned_club.id).name == 'Canal Crew'


def test_full_login_flow(client, sent, owned_club):
    client.post('/api/owner/login', json={'email': 'owner@club.test'})
    _, (email, secret) = sent[-1]

    response = client.get('/api/owner/auth', query_string={'email': email, 'token': secret})

    assert response.status_code == 302
    assert response.headers['Location'] == 'http://localhost:3000/owner'
    set_cookie = response.headers['Set-Cookie']
    assert set_cookie.startswith('owner_session=owner@club.test:')
    assert 'HttpOnly' in set_cookie
    assert 'SameSite=Lax' in set_cookie
    assert f'Max-Age={7 * 24 * 60 * 60}' in set_cookie

    response = client.get('/api/owner/clubs')
    assert response.status_code == 200
    body = response.get_json()
    assert body['ownerEmail'] == 'owner@club.test'
    assert [c['name'] for c in body['clubs']] == ['Canal Crew']

    # The emailed link works once
    response = client.get('/api/owner/auth', query_string={'email': email, 'token': secret})
    assert response.headers['Location'] == 'http://localhost:3000/owner/login?error=invalid_or_expired'


def test_login_link_missing_params(client):
    response = client.get('/api/owner/auth?email=owner@club.test')
    assert response.headers['Location'] == 'http://localhost:3000/owner/login?error=invalid_link'


def test_expired_login_link(client, owned_club):
    secret = session_store.create_login_challenge('owner@club.test')
    OwnerSession.query.one().expires_at = datetime.utcnow() - timedelta(seconds=1)
    db.session.commit()

    response = client.get('/api/owner/auth', query_string={'email': 'owner@club.test', 'token': secret})

    location = urlparse(response.headers['Location'])
    assert location.path == '/owner/login'
    assert parse_qs(location.query) == {'error': ['invalid_or_expired']}


def test_owner_endpoints_require_session(client, owned_club):
    assert client.get('/api/owner/clubs').status_code == 401
    assert client.get(f'/api/owner/clubs/{owned_club.id}').status_code == 401
    assert client.put(f'/api/owner/clubs/{owned_club.id}', json={'name': 'X'}).status_code == 401
    assert client.get('/api/owner/clubs', headers=_auth('owner@club.test:made-up')).status_code == 401


def test_session_for_other_owner_cannot_edit(client, owned_club, other_club):
    cookie = _session_cookie('rival@club.test')

    response = client.put(f'/api/owner/clubs/{owned_club.id}', json={'name': 'Hijacked'},
                          headers=_auth(cookie))

    assert response.status_code == 401
    assert db.session.get(Club, owned_club.id).name == 'Canal Crew'
    assert client.get(f'/api/owner/clubs/{owned_club.id}', headers=_auth(cookie)).status_code == 401


def test_unknown_club_is_not_found(client, owned_club):
    cookie = _session_cookie('owner@club.test')
    assert client.get('/api/owner/clubs/999', headers=_auth(cookie)).status_code == 404


def test_edit_drops_fields_outside_allow_list(client, owned_club):
    cookie = _session_cookie('owner@club.test')

    response = client.put(f'/api/owner/clubs/{owned_club.id}', headers=_auth(cookie), json={
        'description': 'Now with a post-run brunch',
        'dog_friendly': True,
        'owner_email': 'attacker@evil.test',
        'verified': True,
        'status': 'rejected',
    })

    assert response.status_code == 200
    club = response.get_json()['club']
    assert club['description'] == 'Now with a post-run brunch'
    assert club['dog_friendly'] is True
    assert club['owner_email'] == 'owner@club.test'
    assert club['verified'] is False
    assert club['status'] == 'approved'


def test_edit_with_no_allowed_fields(client, owned_club):
    cookie = _session_cookie('owner@club.test')
    response = client.put(f'/api/owner/clubs/{owned_club.id}', headers=_auth(cookie),
                          json={'owner_email': 'attacker@evil.test'})
    assert response.status_code == 400
    assert response.get_json() == {'error': 'No valid fields to update'}


def test_ownership_rechecked_after_transfer(client, owned_club):
    cookie = _session_cookie('owner@club.test')
    assert client.get(f'/api/owner/clubs/{owned_club.id}', headers=_auth(cookie)).status_code == 200

    owned_club.assign_owner('successor@club.test')
    db.session.commit()

    assert client.get(f'/api/owner/clubs/{owned_club.id}', headers=_auth(cookie)).status_code == 401


def test_logout_revokes_session(client, owned_club):
    cookie = _session_cookie('owner@club.test')

    response = client.post('/api/owner/auth', headers=_auth(cookie))

    assert response.get_json() == {'success': True}
    assert 'owner_session=;' in response.headers['Set-Cookie']
    assert client.get('/api/owner/clubs', headers=_auth(cookie)).status_code == 401


def test_list_owned_clubs_is_scoped(owned_club, other_club):
    clubs = OwnerService.list_owned_clubs('owner@club.test')
    assert [c.id for c in clubs] == [owned_club.id]
