"""
Tests for AuthSession: login, registration, logout and backend verification.
"""
import pytest
import requests

from client.api import ApiClient, NETWORK_ERROR_MESSAGE
from client.dom import Window
from client.local_storage import FileLocalStorage
from client.router import Router
from client.routes import Path
from client.session import AuthSession, TOKEN_KEY, USER_KEY
from conftest import PASSWORD, DownAdapter


@pytest.fixture
def session(api, storage):
    return AuthSession(api, storage)


@pytest.fixture
def ab_user(make_user):
    return make_user('a@b.com', 'Alex B')


class TestLogin:
    def test_login_persists_token_and_user(self, session, storage, ab_user):
        result = session.login('a@b.com', PASSWORD)

        assert result['success'] is True
        assert result['user']['email'] == 'a@b.com'
        assert session.is_logged_in() is True
        assert storage.get_item(TOKEN_KEY)
        assert session.get_current_user()['email'] == 'a@b.com'
        assert session.api.has_token

    def test_bad_password_reports_error(self, session, ab_user):
        result = session.login('a@b.com', 'wrong-password')

        assert result == {'success': False, 'error': 'Invalid email or password'}
        assert session.is_logged_in() is False

    def test_logout_clears_everything(self, session, storage, ab_user):
        session.login('a@b.com', PASSWORD)

        session.logout()

        assert session.is_logged_in() is False
        assert session.get_current_user() is None
        assert TOKEN_KEY not in storage
        assert session.api.has_token is False

    def test_login_after_logout(self, session, ab_user):
        session.login('a@b.com', PASSWORD)
        session.logout()

        assert session.login('a@b.com', PASSWORD)['success'] is True
        assert session.is_logged_in() is True

    def test_new_token_without_user_drops_cached_user(self, session, storage, ab_user, monkeypatch):
        session.login('a@b.com', PASSWORD)
        monkeypatch.setattr(session.api, 'post', lambda endpoint, json=None: {'token': 'fresh-token'})

        result = session.login('someone@else.com', PASSWORD)

        assert result['success'] is True
        assert storage.get_item(TOKEN_KEY) == 'fresh-token'
        assert session.get_current_user() is None
        assert USER_KEY not in storage


class TestRegister:
    def test_register_logs_in(self, session):
        result = session.register('new@myhome.io', 'secret1', name='Nina')

        assert result['success'] is True
        assert result['user']['name'] == 'Nina'
        assert session.is_logged_in() is True

    def test_short_password_rejected_without_token(self, session, storage):
        result = session.register('a@b.com', '123')

        assert result['success'] is False
        assert 'at least 6 characters' in result['error']
        assert storage.get_item(TOKEN_KEY) is None
        assert session.is_logged_in() is False

    def test_duplicate_email(self, session, ab_user):
        result = session.register('a@b.com', 'secret1')

        assert result == {'success': False, 'error': 'Email already registered'}


class TestVerifyAuth:
    def test_valid_token_verifies_and_refreshes_user(self, session, storage, ab_user):
        session.login('a@b.com', PASSWORD)
        storage.set_item(USER_KEY, {'email': 'stale@myhome.io'})

        assert session.verify_auth() is True
        assert session.get_current_user()['email'] == 'a@b.com'
        assert session.last_error is None

    def test_no_token_fails_without_request(self, session):
        assert session.verify_auth() is False
        assert session.last_error is None

    def test_rejected_token_clears_session(self, api, storage):
        storage.set_item(TOKEN_KEY, 'not-a-real-token')
        storage.set_item(USER_KEY, {'email': 'a@b.com'})
        session = AuthSession(api, storage)

        assert session.verify_auth() is False
        assert session.is_logged_in() is False
        assert session.get_current_user() is None
        assert session.last_error == 'Authentication required'

    def test_network_failure_denies_but_keeps_token(self, storage):
        http = requests.Session()
        http.mount('http://down.test', DownAdapter())
        storage.set_item(TOKEN_KEY, 'kept-token')
        session = AuthSession(ApiClient('http://down.test', http=http), storage)

        assert session.verify_auth() is False
        assert session.is_logged_in() is True
        assert session.last_error == NETWORK_ERROR_MESSAGE

    def test_session_restored_from_storage(self, api, storage, ab_user):
        AuthSession(api, storage).login('a@b.com', PASSWORD)

        restored = AuthSession(ApiClient(api.base_url, http=api.http), storage)

        assert restored.is_logged_in() is True
        assert restored.verify_auth() is True


class TestRequireAuth:
    def test_redirects_to_login(self, session):
        window = Window(hash='#/items')
        router = Router(window)

        assert session.require_auth(router) is False
        assert window.location.hash == '#/login'

    def test_custom_redirect(self, session):
        window = Window(hash='#/items')
        router = Router(window)

        session.require_auth(router, redirect_path=Path.REGISTER)

        assert window.location.hash == '#/register'

    def test_allows_verified_session(self, session, ab_user):
        session.login('a@b.com', PASSWORD)
        window = Window(hash='#/items')

        assert session.require_auth(Router(window)) is True
        assert window.location.hash == '#/items'


def test_file_storage_survives_restart(tmp_path):
    path = tmp_path / 'nested' / 'session.json'
    first = FileLocalStorage(str(path))
    first.set_item(TOKEN_KEY, 'abc')
    first.set_item(USER_KEY, {'email': 'a@b.com'})

    second = FileLocalStorage(str(path))

    assert second.get_item(TOKEN_KEY) == 'abc'
    assert second.get_item(USER_KEY) == {'email': 'a@b.com'}

    second.remove_item(TOKEN_KEY)
    assert FileLocalStorage(str(path)).get_item(TOKEN_KEY) is None


def test_file_storage_ignores_corrupt_file(tmp_path):
    path = tmp_path / 'session.json'
    path.write_text('{not json', encoding='utf-8')

    assert FileLocalStorage(str(path)).get_item(TOKEN_KEY) is None
