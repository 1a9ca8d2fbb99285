from datetime import timedelta
from unittest import mock

import pytest

from database import db
from clubportal.api.tokens import resolve_token
from clubportal.api_client import ApiClient, ApiError
from clubportal.models import ApiToken
from clubportal.permissions import ADMIN, MEMBER
from clubportal import services
from clubportal.utils import utcnow

PROJECT = {
    'title': 'Blood Donation',
    'category': 'Health',
    'image': 'https://example.org/blood.jpg',
    'year': 2025,
    'summary': '52 pints collected.',
}


class FlaskResponse:
    def __init__(self, response):
        self.status_code = response.status_code
        self.ok = response.status_code < 400
        self._response = response

    def json(self):
        data = self._response.get_json(silent=True)
        if data is None:
            raise ValueError("No JSON body")
        return data


class FlaskSession:
    """Just enough of requests.Session to point an ApiClient at the test client."""

    def __init__(self, client):
        self.client = client

    def request(self, method, url, json=None, headers=None, timeout=None):
        path = url.replace('http://portal.test', '', 1)
        return FlaskResponse(self.client.open(path, method=method, json=json, headers=headers))


@pytest.fixture
def api(client):
    return ApiClient(base_url='http://portal.test/api', session=FlaskSession(client))


@pytest.fixture
def ram(make_user):
    return make_user(ADMIN, 'ram', password='secret')


def auth(token):
    return {'Authorization': f'Bearer {token}'}


def test_login_returns_token_and_user(client, ram):
    response = client.post('/api/auth/login', json={'username': 'ram', 'password': 'secret'})
    assert response.status_code == 200
    body = response.get_json()
    assert body['user'] == {'uid': ram['uid'], 'email': 'ram@example.org', 'username': 'ram', 'role': ADMIN}

    me = client.get('/api/auth/me', headers=auth(body['token']))
    assert me.get_json()['username'] == 'ram'


def test_login_failure_message(client, ram):
    response = client.post('/api/auth/login', json={'username': 'ram', 'password': 'wrong'})
    assert response.status_code == 401
    assert response.get_json() == {'message': 'Invalid username or password'}

    response = client.post('/api/auth/login', json={})
    assert response.status_code == 400


def test_client_login_attaches_the_bearer_token(api, ram):
    user = api.login('ram', 'secret')
    assert user['role'] == ADMIN
    assert api.token_store['token']
    assert api.api_fetch('/auth/me')['uid'] == ram['uid']


def test_client_raises_the_server_message(api, ram):
    with pytest.raises(ApiError) as excinfo:
        api.login('ram', 'wrong')
    assert str(excinfo.value) == 'Invalid username or password'
    assert excinfo.value.status_code == 401
    assert 'token' not in api.token_store


def test_client_falls_back_to_the_status_code():
    session = mock.Mock()
    session.request.return_value = mock.Mock(ok=False, status_code=502, json=mock.Mock(side_effect=ValueError))
    api = ApiClient(base_url='http://portal.test/api', token_store={'token': 'abc'}, session=session)

    with pytest.raises(ApiError, match='HTTP 502'):
        api.api_fetch('projects')

    method, url = session.request.call_args.args
    assert (method, url) == ('GET', 'http://portal.test/api/projects')
    headers = session.request.call_args.kwargs['headers']
    assert headers['Authorization'] == 'Bearer abc'
    assert headers['Content-Type'] == 'application/json'


def test_logout_revokes_the_token(api, ram):
    api.login('ram', 'secret')
    token = api.token_store['token']
    api.logout()

    assert api.current_user is None
    assert resolve_token(token) is None


def test_project_crud(client, api, make_user):
    make_user(MEMBER, 'hari', password='secret')
    api.login('hari', 'secret')

    created = api.api_fetch('/projects', method='POST', json=PROJECT)
    assert created['year'] == '2025'
    assert [p['id'] for p in client.get('/api/projects').get_json()] == [created['id']]
    assert len(api.api_fetch('/projects/_dashboard/all')) == 1

    updated = api.api_fetch(f"/projects/{created['id']}", method='PATCH', json={'title': 'Blood Drive'})
    assert updated['title'] == 'Blood Drive'
    assert updated['summary'] == PROJECT['summary']

    api.api_fetch(f"/projects/{created['id']}", method='DELETE')
    assert services.projects().list() == []

    with pytest.raises(ApiError) as excinfo:
        api.api_fetch(f"/projects/{created['id']}", method='DELETE')
    assert excinfo.value.status_code == 404


def test_writes_require_a_token(client):
    response = client.post('/api/projects', json=PROJECT)
    assert response.status_code == 401
    assert response.get_json() == {'message': 'Authentication required'}

    assert client.get('/api/events/_dashboard/all').status_code == 401
    assert client.get('/api/projects', headers=auth('bogus')).status_code == 200


def test_invalid_payload_is_rejected(api, ram):
    api.login('ram', 'secret')
    with pytest.raises(ApiError) as excinfo:
        api.api_fetch('/events', method='POST', json={'title': 'No date', 'date': 'soon'})
    assert excinfo.value.status_code == 400
    assert 'date' in str(excinfo.value)


def test_expired_tokens_are_discarded(app, ram):
    db.session.add(ApiToken(token='old', uid=ram['uid'], expires_at=utcnow() - timedelta(minutes=1)))
    db.session.commit()

    assert resolve_token('old') is None
    assert db.session.query(ApiToken).filter_by(token='old').first() is None


def test_site_settings_are_public(client):
    response = client.get('/api/site-settings')
    assert response.status_code == 200
    assert response.get_json()['about_us_title'] == 'About Us'


def test_stored_token_wins_over_caller_headers():
    session = mock.Mock()
    session.request.return_value = mock.Mock(ok=True, status_code=200, json=mock.Mock(return_value={}))
    api = ApiClient(base_url='http://portal.test/api', token_store={'token': 'abc'}, session=session)

    api.api_fetch('auth/me', headers={'Authorization': 'Bearer stale', 'X-Trace': '1'})

    headers = session.request.call_args.kwargs['headers']
    assert headers['Authorization'] == 'Bearer abc'
    assert headers['X-Trace'] == '1'


def test_unknown_api_paths_answer_with_json(client):
    response = client.get('/api/sponsors')
    assert response.status_code == 404
    assert response.get_json() == {'message': 'Not found'}

    response = client.put('/api/projects')
    assert response.status_code == 405
    assert response.get_json() == {'message': 'Method not allowed'}

    response = client.get('/sponsors')
    assert response.status_code == 404
    assert response.get_json(silent=True) is None


def test_issuing_a_token_purges_expired_ones(client, ram):
    db.session.add(ApiToken(token='old', uid=ram['uid'], expires_at=utcnow() - timedelta(minutes=1)))
    db.session.commit()

    response = client.post('/api/auth/login', json={'username': 'ram', 'password': 'secret'})
    assert response.status_code == 200
    tokens = [t.token for t in db.session.query(ApiToken).all()]
    assert tokens == [response.get_json()['token']]
