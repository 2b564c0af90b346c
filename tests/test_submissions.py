import pytest

from findmyrun.constants import SUBMISSION_REQUIRED_FIELDS, TokenAction
from findmyrun.errors import ValidationError
from findmyrun.models import Submission
from findmyrun.services.submission_service import SubmissionService, normalize_sessions
from findmyrun.services.tokens import verify_token


def test_post_submission_stores_pending_row(client, sent, submission_payload):
    response = client.post('/api/submissions', json=submission_payload)

    assert response.status_code == 201
    assert response.get_json() == {'success': True, 'message': 'Club submitted for review'}

    submission = Submission.query.one()
    assert submission.status == 'pending'
    assert submission.name == 'Riverside Runners'
    assert submission.submitter_email == 'organiser@riverside.test'
    assert submission.day == 'Tuesday'
    assert submission.time == '18:30'
    assert submission.beginner_friendly is True
    assert submission.dog_friendly is False
    assert submission.sessions == [
        {'day': 'Tuesday', 'time': '18:30', 'distance': '5k', 'type': 'social'}
    ]


def test_admin_is_sent_working_links(client, sent, submission_payload):
    client.post('/api/submissions', json=submission_payload)
    submission = Submission.query.one()

    assert [name for name, _ in sent] == ['notify_submission_pending']
    _, (notified, approve_token, reject_token) = sent[0]
    assert notified.id == submission.id
    assert verify_token(approve_token, submission.id, TokenAction.APPROVE).valid
    assert verify_token(reject_token, submission.id, TokenAction.REJECT).valid


def test_honeypot_looks_like_success_but_stores_nothing(client, sent, submission_payload):
    real = client.post('/api/submissions', json=submission_payload)
    Submission.query.delete()

    submission_payload['website_url'] = 'http://spam.example'
    bot = client.post('/api/submissions', json=submission_payload)

    assert bot.status_code == real.status_code == 201
    assert bot.get_json() == real.get_json()
    assert Submission.query.count() == 0
    assert len(sent) == 1


@pytest.mark.parametrize('field', SUBMISSION_REQUIRED_FIELDS)
def test_missing_required_field_is_named(client, sent, submission_payload, field):
    if field in ('day', 'time'):
        # Flat form fields, with no sessions list to fall back on
        del submission_payload['sessions']
        submission_payload.update(day='Tuesday', time='18:30')
    submission_payload[field] = ''

    response = client.post('/api/submissions', json=submission_payload)

    assert response.status_code == 400
    assert response.get_json() == {'error': f'Missing required field: {field}'}
    assert Submission.query.count() == 0
    assert sent == []


def test_flat_day_and_time_accepted(sent, submission_payload):
    del submission_payload['sessions']
    submission_payload.update(day='Saturday', time='09:00', distance='10k')

    submission = SubmissionService.submit(submission_payload)

    assert submission.sessions == [
        {'day': 'Saturday', 'time': '09:00', 'distance': '10k', 'type': None}
    ]


def test_invalid_pace_rejected(client, sent, submission_payload):
    submission_payload['pace'] = 'ludicrous'
    response = client.post('/api/submissions', json=submission_payload)
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Invalid value for field: pace'


@pytest.mark.parametrize('body', [[1], 'club', 42])
def test_non_object_body_is_rejected(client, sent, body):
    response = client.post('/api/submissions', json=body)
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Invalid request body'}
    assert Submission.query.count() == 0


def test_pace_defaults_to_mixed(sent, submission_payload):
    del submission_payload['pace']
    assert SubmissionService.submit(submission_payload).pace == 'mixed'


def test_notifier_failure_does_not_lose_submission(client, monkeypatch, submission_payload):
    from findmyrun.errors import DependencyFailure
    from findmyrun.services import notifier

    def broken(*args):
        raise DependencyFailure('smtp down')

    monkeypatch.setattr(notifier, 'notify_submission_pending', broken)

    response = client.post('/api/submissions', json=submission_payload)

    assert response.status_code == 201
    assert Submission.query.count() == 1


def test_normalize_sessions_drops_incomplete_entries():
    sessions = normalize_sessions({'sessions': [
        {'day': 'Monday', 'time': '18:00'},
        {'day': 'Tuesday', 'time': ''},
        {'day': '', 'time': '07:00'},
    ]})
    assert sessions == [{'day': 'Monday', 'time': '18:00', 'distance': None, 'type': None}]


def test_normalize_sessions_rejects_non_list():
    with pytest.raises(ValidationError):
        normalize_sessions({'sessions': 'Mondays'})
