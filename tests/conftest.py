"""
Pytest configuration and fixtures.
"""
import sys
import os
import pytest

# Add project root to Python path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__) + '/..'))

TEST_ADMIN_SECRET = 'test-admin-secret'
TEST_ADMIN_EMAIL = 'admin@findmyrun.test'


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    from findmyrun import create_app
    from config import Config

    class TestConfig(Config):
        TESTING = True
        import tempfile
        db_fd, db_path = tempfile.mkstemp()
        SQLALCHEMY_DATABASE_URI = f'sqlite:///{db_path}'
        SQLALCHEMY_ENGINE_OPTIONS = {}
        SERVER_NAME = 'localhost.localdomain'
        APP_URL = 'http://localhost:3000'
        ADMIN_SECRET = TEST_ADMIN_SECRET
        ADMIN_EMAIL = TEST_ADMIN_EMAIL
        MAPBOX_TOKEN = None
        MAIL_SUPPRESS_SEND = True
        SESSION_COOKIE_SECURE = False
        CACHE_TYPE = 'SimpleCache'

    app = create_app(TestConfig)

    # Initialize database
    with app.app_context():
        from findmyrun import db
        db.session.configure(expire_on_commit=False)
        db.create_all()

    return app


@pytest.fixture(scope='function', autouse=True)
def clean_db(app):
    """Clean database between tests."""
    with app.app_context():
        from findmyrun import db
        # Drop all tables and recreate them to ensure a clean slate
        db.drop_all()
        db.create_all()
    yield


@pytest.fixture(scope='function', autouse=True)
def app_ctx(app, clean_db):
    """
    One app context per test. Requests made with the test client reuse it,
    so fixtures, services and views share a database session.
    """
    with app.app_context():
        from findmyrun import db
        yield
        db.session.remove()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def admin_headers():
    return {'Authorization': f'Bearer {TEST_ADMIN_SECRET}'}


@pytest.fixture(scope='function')
def sent(monkeypatch):
    """
    Replace every notify helper with a recorder.

    Yields a list of ``(helper_name, args)`` tuples in call order.
    """
    from findmyrun.services import notifier

    calls = []

    def recorder(name):
        def record(*args, **kwargs):
            calls.append((name, args))
        record.__name__ = name
        return record

    for name in dir(notifier):
        if name.startswith('notify_'):
            monkeypatch.setattr(notifier, name, recorder(name))
    return calls


@pytest.fixture(scope='function')
def submission_payload():
    return {
        'club_name': 'Riverside Runners',
        'city': 'Bristol',
        'area': 'Harbourside',
        'meeting_point': 'M Shed steps',
        'contact_email': 'organiser@riverside.test',
        'submitter_name': 'Sam Organiser',
        'description': 'Friendly harbour loop',
        'pace': 'mixed',
        'terrain': 'road',
        'beginner_friendly': 'yes',
        'sessions': [
            {'day': 'Tuesday', 'time': '18:30', 'distance': '5k', 'type': 'social'},
        ],
    }


@pytest.fixture(scope='function')
def pending_submission(app, sent, submission_payload):
    """A stored pending submission (notifications recorded, not sent)."""
    from findmyrun.services.submission_service import SubmissionService
    return SubmissionService.submit(submission_payload)


@pytest.fixture(scope='function')
def approved_club(app):
    """A listed club with a contact email and no owner."""
    from findmyrun import db
    from findmyrun.models import Club, RunSession

    club = Club(
        name='Harbour Harriers',
        city='Bristol',
        area='Harbourside',
        lat=51.45,
        lng=-2.59,
        day='Wednesday',
        time='19:00',
        meeting_point='Lloyds Amphitheatre',
        pace='mixed',
        contact_email='hello@harbourharriers.test',
        status='approved'
    )
    club.sessions.append(RunSession(club_name=club.name, day='Wednesday', time='19:00'))
    db.session.add(club)
    db.session.commit()
    return club


@pytest.fixture(scope='function')
def owned_club(app):
    """A listed club already owned by owner@club.test."""
    from findmyrun import db
    from findmyrun.models import Club

    club = Club(
        name='Canal Crew',
        city='Manchester',
        area='Ancoats',
        day='Thursday',
        time='18:30',
        meeting_point='Cutting Room Square',
        pace='slow',
        contact_email='crew@canal.test',
        status='approved'
    )
    club.assign_owner('owner@club.test', 'Olive Owner')
    db.session.add(club)
    db.session.commit()
    return club
