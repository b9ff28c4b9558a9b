"""
API Helper
Centralised HTTP wrapper for every backend call.

Handles bearer-token injection, JSON bodies and turns every failure into an
``ApiError`` carrying a human-readable message.
"""
import logging

import requests


logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = 'Network error: Unable to reach the server'


class ApiError(Exception):
    """A failed API call. ``status`` is None when the server was never reached."""

    def __init__(self, message, status=None, payload=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload or {}

    @property
    def is_auth_error(self):
        return self.status in (401, 403)

    @property
    def is_network_error(self):
        return self.status is None


class ApiClient:
    """Thin wrapper around a ``requests.Session`` bound to the API base URL."""

    def __init__(self, base_url, timeout=None, http=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.http = http or requests.Session()
        self.http.headers['Content-Type'] = 'application/json'
        self.http.headers['Accept'] = 'application/json'

    # ── Token ────────────────────────────────────────────────────────────

    def set_token(self, token):
        if token:
            self.http.headers['Authorization'] = f'Bearer {token}'
        else:
            self.http.headers.pop('Authorization', None)

    @property
    def has_token(self):
        return 'Authorization' in self.http.headers

    # ── Requests ─────────────────────────────────────────────────────────

    def request(self, method, endpoint, json=None):
        """Make a request and return the parsed JSON body.

        Raises ``ApiError`` for transport failures and non-2xx answers.
        """
        url = f'{self.base_url}{endpoint}'
        try:
            response = self.http.request(method, url, json=json, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error('%s %s failed: %s', method, endpoint, e)
            raise ApiError(NETWORK_ERROR_MESSAGE) from e

        data = self._parse(response)
        if not response.ok:
            message = data.get('message') or data.get('error') or \
                f'Request failed with status {response.status_code}'
            logger.warning('%s %s -> %s: %s', method, endpoint, response.status_code, message)
            raise ApiError(message, status=response.status_code, payload=data)
        return data

    @staticmethod
    def _parse(response):
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {'data': data}

    def get(self, endpoint):
        return self.request('GET', endpoint)

    def post(self, endpoint, json=None):
        return self.request('POST', endpoint, json=json if json is not None else {})

    def delete(self, endpoint):
        return self.request('DELETE', endpoint)
