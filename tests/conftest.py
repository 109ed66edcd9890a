"""
Shared fixtures: an app on in-memory SQLite, its test client, and doubles for
the notifier and the client-side HTTP session.
"""

from __future__ import annotations

import base64

import pytest

from app import create_app
from extensions import db
from utils.errors import TransportError


class RecordingNotifier:
    """Notifier double: remembers messages, or fails with the given error."""

    is_configured = True

    def __init__(self, error=None):
        self.sent = []
        self.error = error

    def notify_contact_message(self, message):
        if self.error is not None:
            raise self.error
        self.sent.append(message.to_dict())


class FakeApi:
    """PortfolioApi double for the client controller."""

    def __init__(self, error=None, testimonials=None, on_submit=None):
        self.calls = []
        self.error = error
        self.testimonials = testimonials or []
        self.on_submit = on_submit

    def submit(self, kind, payload):
        self.calls.append((kind, dict(payload)))
        if self.on_submit is not None:
            self.on_submit()
        if self.error is not None:
            raise self.error
        return {'success': True, 'message': 'ok'}

    def fetch_testimonials(self):
        if self.error is not None:
            raise TransportError('offline')
        return list(self.testimonials)


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(notifier):
    app = create_app('testing')
    app.extensions['notifier'] = notifier
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return app.extensions['submission_store']


@pytest.fixture
def admin_headers():
    token = base64.b64encode(b'admin:admin-secret').decode('ascii')
    return {'Authorization': f'Basic {token}'}


@pytest.fixture
def valid_contact():
    return {
        'name': 'Jo',
        'email': 'jo@x.com',
        'subject': 'Hello there',
        'message': 'This is a long enough message.',
    }


@pytest.fixture
def valid_testimonial():
    return {
        'name': 'Jane Smith',
        'email': 'jane@example.com',
        'message': 'Great to work with, clean code and clear communication.',
    }


class BrokenCommitSession:
    """Session wrapper whose commits fail like an unreachable database."""

    def __init__(self, session):
        self._session = session

    def commit(self):
        from sqlalchemy.exc import OperationalError
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    def __getattr__(self, name):
        return getattr(self._session, name)


@pytest.fixture
def broken_store(store, monkeypatch):
    monkeypatch.setattr(store, "session", BrokenCommitSession(store.session))
    return store
