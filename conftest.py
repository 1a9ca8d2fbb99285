import pytest

from config import TestingConfig
from clubportal import create_app
from clubportal.identity import IdentityClient
from clubportal.services import UserDirectory

DEFAULT_PASSWORD = 'secret123'


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Creates an identity account plus its role record, without touching any session."""
    def _make_user(role, username, email=None, password=DEFAULT_PASSWORD, created_by=None):
        email = email or f'{username}@example.org'
        account = IdentityClient({}).sign_up(email, password)
        return UserDirectory().create_record(account.uid, email, username, role, created_by or account.uid)
    return _make_user


@pytest.fixture
def login(client):
    def _login(email, password=DEFAULT_PASSWORD):
        return client.post('/login', data={'email': email, 'password': password})
    return _login
