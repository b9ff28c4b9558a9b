"""
Session / auth state for the client.

An ``AuthSession`` owns the bearer token and the cached user. It is created
once per tab and handed to the router guard and the views; nothing reads the
token from anywhere else.
"""
import logging

from client.api import ApiError
from client.routes import Path


logger = logging.getLogger(__name__)

TOKEN_KEY = 'auth_token'
USER_KEY = 'myhome_session'


class AuthSession:
    """Bearer token + cached user, persisted in a ``LocalStorage``."""

    def __init__(self, api, storage):
        self.api = api
        self.storage = storage
        self.last_error = None
        self.api.set_token(self.token)

    # ── Local state ──────────────────────────────────────────────────────

    @property
    def token(self):
        return self.storage.get_item(TOKEN_KEY)

    def is_logged_in(self):
        """Optimistic check against local state only."""
        return bool(self.token)

    def get_current_user(self):
        return self.storage.get_item(USER_KEY)

    def _save(self, token, user):
        if token:
            self.storage.set_item(TOKEN_KEY, token)
            self.api.set_token(token)
            # The cached user belongs to the previous token
            self.storage.remove_item(USER_KEY)
        if user:
            self.storage.set_item(USER_KEY, user)

    def _clear(self):
        self.storage.remove_item(TOKEN_KEY)
        self.storage.remove_item(USER_KEY)
        self.api.set_token(None)

    # ── Backend calls ────────────────────────────────────────────────────

    def _authenticate(self, endpoint, body, action):
        try:
            data = self.api.post(endpoint, json=body)
        except ApiError as e:
            logger.info('%s failed for %s: %s', action, body.get('email'), e.message)
            return {'success': False, 'error': e.message}

        if not data.get('token'):
            return {'success': False, 'error': 'The server did not return a session token'}
        self._save(data['token'], data.get('user'))
        logger.info('%s succeeded for %s', action, body.get('email'))
        return {'success': True, 'user': data.get('user')}

    def login(self, email, password):
        """Returns ``{'success': True, 'user': ...}`` or ``{'success': False, 'error': ...}``."""
        return self._authenticate('/auth/login', {'email': email, 'password': password}, 'Login')

    def register(self, email, password, name=None):
        body = {'email': email, 'password': password}
        if name:
            body['name'] = name
        return self._authenticate('/auth/register', body, 'Registration')

    def logout(self):
        """Forget the token locally. The server keeps no session to invalidate."""
        user = self.get_current_user() or {}
        self._clear()
        logger.info('User logged out: %s', user.get('email', 'unknown'))

    def verify_auth(self):
        """Confirm with the backend that the token is still accepted.

        A 401/403 clears the local session. Network and server failures deny
        access but keep the token so the next navigation can retry.
        """
        self.last_error = None
        if not self.token:
            return False
        try:
            data = self.api.get('/auth/me')
        except ApiError as e:
            self.last_error = e.message
            if e.is_auth_error:
                logger.info('Token rejected by server, clearing session')
                self._clear()
            else:
                logger.warning('Could not verify session: %s', e.message)
            return False

        if data.get('user'):
            self.storage.set_item(USER_KEY, data['user'])
        return True

    def require_auth(self, router, redirect_path=Path.LOGIN):
        """Verify the session, redirecting to *redirect_path* when it fails.

        Returns True if the caller may proceed.
        """
        if self.verify_auth():
            return True
        logger.info('Authentication required, redirecting to %s', redirect_path.value)
        router.navigate(redirect_path)
        return False
