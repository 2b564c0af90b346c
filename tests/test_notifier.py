import pytest

from findmyrun import db, mail
from findmyrun.constants import NotificationKind, TokenAction
from findmyrun.errors import DependencyFailure
from findmyrun.models import Club, ClubClaim, Submission
from findmyrun.services import notifier
from findmyrun.services.tokens import generate_token


@pytest.fixture
def submission(app):
    submission = Submission(
        name='Riverside Runners', city='Bristol', area='Harbourside', day='Tuesday',
        time='18:30', meeting_point='M Shed steps', pace='mixed',
        submitter_email='organiser@riverside.test',
        sessions=[{'day': 'Tuesday', 'time': '18:30', 'distance': '5k', 'type': 'social'}]
    )
    db.session.add(submission)
    db.session.commit()
    return submission


def test_submission_pending_goes_to_admin_with_links(submission):
    approve = generate_token(submission.id, TokenAction.APPROVE)
    reject = generate_token(submission.id, TokenAction.REJECT)

    with mail.record_messages() as outbox:
        notifier.notify_submission_pending(submission, approve, reject)

    assert len(outbox) == 1
    message = outbox[0]
    assert message.recipients == ['admin@findmyrun.test']
    assert message.subject == 'New Club Submission: Riverside Runners'
    assert f'/api/submissions/{submission.id}/approve?token={approve}' in message.body
    assert f'/api/submissions/{submission.id}/reject?token={reject}' in message.body
    assert 'Tuesdays at 18:30 (Social run), 5k' in message.body


def test_claim_verification_goes_to_club_contact(app):
    club = Club(name='Harbour Harriers', city='Bristol', pace='mixed',
                contact_email='hello@harbourharriers.test')
    db.session.add(club)
    db.session.commit()
    claim = ClubClaim(club_id=club.id, claimant_email='new@club.test', verification_method='email')
    db.session.add(claim)
    db.session.commit()

    with mail.record_messages() as outbox:
        notifier.notify_claim_verification(club, claim, 'tok')

    assert outbox[0].recipients == ['hello@harbourharriers.test']
    assert f'/api/claims/{claim.id}/verify?token=tok' in outbox[0].body


def test_owner_login_link(app):
    with mail.record_messages() as outbox:
        notifier.notify_owner_login('owner@club.test', 's3cret')

    assert outbox[0].recipients == ['owner@club.test']
    assert '/api/owner/auth?' in outbox[0].body
    assert 'token=s3cret' in outbox[0].body


def test_missing_admin_address_is_dependency_failure(app, submission, monkeypatch):
    monkeypatch.setitem(app.config, 'ADMIN_EMAIL', None)
    with pytest.raises(DependencyFailure):
        notifier.notify_submission_pending(submission, 'a', 'r')


def test_transport_error_becomes_dependency_failure(app, monkeypatch):
    def broken(message):
        raise ConnectionRefusedError('smtp down')

    monkeypatch.setattr(mail, 'send', broken)
    with pytest.raises(DependencyFailure):
        notifier.send(NotificationKind.OWNER_LOGIN_LINK, 'owner@club.test', {'login_url': 'x'})


def test_unknown_kind():
    with pytest.raises(ValueError):
        notifier.send('carrier-pigeon', 'a@b.test', {})


def test_best_effort_swallows_only_dependency_failures():
    def failing():
        raise DependencyFailure('down')

    def crashing():
        raise RuntimeError('bug')

    assert notifier.best_effort(failing) is False
    assert notifier.best_effort(lambda: None) is True
    with pytest.raises(RuntimeError):
        notifier.best_effort(crashing)
