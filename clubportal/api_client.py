# clubportal/api_client.py

"""HTTP client for the portal's JSON API.

Used by scripts and by any front end that talks to ``/api`` instead of
rendering the server-side screens. The bearer token and the signed-in
user live in ``token_store`` (a dict by default) under ``token`` and
``user``.
"""

import logging

import requests

from config import Config

logger = logging.getLogger(__name__)

TOKEN_KEY = 'token'
USER_KEY = 'user'


class ApiError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class ApiClient:

    def __init__(self, base_url=None, token_store=None, session=None, timeout=10):
        self.base_url = (base_url or Config.PORTAL_API_URL).rstrip('/')
        self.token_store = token_store if token_store is not None else {}
        self.session = session or requests.Session()
        self.timeout = timeout

    def api_fetch(self, path, method='GET', json=None, headers=None):
        """
        Sends a JSON request to ``path`` and returns the decoded body.
        Raises ApiError with the server's ``message`` (or ``HTTP <status>``)
        for any non-2xx response.
        """
        request_headers = {'Content-Type': 'application/json'}
        request_headers.update(headers or {})
        token = self.token_store.get(TOKEN_KEY)
        if token:
            request_headers['Authorization'] = f'Bearer {token}'

        url = f"{self.base_url}/{path.lstrip('/')}"
        response = self.session.request(method, url, json=json, headers=request_headers, timeout=self.timeout)

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.ok:
            message = (data.get('message') if isinstance(data, dict) else None) or f"HTTP {response.status_code}"
            logger.info(f"{method} {path} failed: {message}")
            raise ApiError(message, response.status_code)
        return data

    def login(self, username, password):
        data = self.api_fetch('/auth/login', method='POST', json={'username': username, 'password': password})
        self.token_store[TOKEN_KEY] = data['token']
        self.token_store[USER_KEY] = data['user']
        return data['user']

    def logout(self):
        try:
            if self.token_store.get(TOKEN_KEY):
                self.api_fetch('/auth/logout', method='POST')
        finally:
            self.token_store.pop(TOKEN_KEY, None)
            self.token_store.pop(USER_KEY, None)

    @property
    def current_user(self):
        return self.token_store.get(USER_KEY)
