import pytest

from app import create_app
from commands import create_account
from config import TestConfig
from identity import CurrentUser


class Recorder:
    """Stands in for the presentation layer: remembers every published event."""

    def __init__(self):
        self.events = []

    def __call__(self, event, payload):
        self.events.append((event, payload))

    def named(self, event):
        return [payload for name, payload in self.events if name == event]

    def toasts(self):
        return [payload['message'] for payload in self.named('toast')]

    def clear(self):
        self.events = []


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app


@pytest.fixture
def store(app):
    return app.extensions['docstore']


@pytest.fixture
def http(app):
    return app.test_client()


@pytest.fixture
def published():
    return Recorder()


@pytest.fixture
def accounts(app):
    admin = create_account('Admin@Example.com', 'admin-pass', 'admin', 'Ada')
    supervisor = create_account('sup@example.com', 'sup-pass', 'supervisor', 'Sam')
    return {'admin': admin, 'supervisor': supervisor}


@pytest.fixture
def admin_user():
    return CurrentUser(id='a1', role='admin', email='admin@example.com', name='Ada')


@pytest.fixture
def supervisor_user():
    return CurrentUser(id='s1', role='supervisor', email='sup@example.com', name='Sam')
