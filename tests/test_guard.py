"""
Tests for the auth guard around protected routes.
"""
import pytest
import requests

from client.api import ApiClient, NETWORK_ERROR_MESSAGE
from client.dom import Window
from client.guard import protected_route
from client.local_storage import LocalStorage
from client.notify import Toaster
from client.router import Router
from client.routes import Path
from client.session import AuthSession, TOKEN_KEY
from conftest import PASSWORD, DownAdapter


PAGE = '<html><body><div id="app"><main id="view"></main></div></body></html>'


@pytest.fixture
def window():
    return Window(PAGE, hash='#/items')


@pytest.fixture
def router(window):
    return Router(window)


@pytest.fixture
def session(api, storage):
    return AuthSession(api, storage)


@pytest.fixture
def seen():
    return []


@pytest.fixture
def routes(router, session, seen):
    router.register(Path.HOME, protected_route(lambda c: seen.append(Path.HOME) or '<p>home</p>', session, router))
    router.register(Path.ITEMS, protected_route(lambda c: seen.append(Path.ITEMS) or '<p id="secret">items</p>',
                                                session, router))
    router.register(Path.LOGIN, lambda c: seen.append(Path.LOGIN) or '<form id="login-form"></form>')
    return router


def test_wrapper_is_marked_protected(router, session):
    def handler(container):
        return 'x'

    guarded = protected_route(handler, session, router)

    assert guarded.is_protected is True
    assert guarded.__name__ == 'handler'


def test_never_invoked_without_session(routes, window, seen):
    routes.start()
    window.run_until_idle()

    assert Path.ITEMS not in seen
    assert seen == [Path.LOGIN]
    assert window.location.hash == '#/login'
    assert window.get_element_by_id('secret') is None


def test_invoked_once_with_session(routes, window, session, user, seen):
    session.login(user.email, PASSWORD)

    routes.start()
    window.run_until_idle()

    assert seen == [Path.ITEMS]
    assert window.get_element_by_id('secret') is not None


def test_session_expiring_between_navigations(routes, window, session, user, storage, seen):
    session.login(user.email, PASSWORD)
    routes.start()
    storage.set_item(TOKEN_KEY, 'revoked')
    session.api.set_token('revoked')

    routes.navigate(Path.HOME)
    window.run_until_idle()

    assert seen == [Path.ITEMS, Path.LOGIN]
    assert session.is_logged_in() is False


def test_network_failure_shows_toast_and_keeps_token(window, router):
    http = requests.Session()
    http.mount('http://down.test', DownAdapter())
    storage = LocalStorage({TOKEN_KEY: 'some-token'})
    session = AuthSession(ApiClient('http://down.test', http=http), storage)
    toaster = Toaster(window)
    calls = []
    router.register(Path.ITEMS, protected_route(lambda c: calls.append(c), session, router, toaster))
    router.register(Path.LOGIN, lambda c: '<p>login</p>')

    router.start()
    window.run_until_idle()

    assert calls == []
    assert toaster.current == NETWORK_ERROR_MESSAGE
    assert storage.get_item(TOKEN_KEY) == 'some-token'


def test_handler_skipped_when_navigation_moved_on(window, router, seen):
    class MovingSession:
        """Verifies, but another navigation happens while it does."""
        last_error = None

        def require_auth(self, router):
            router.navigate(Path.LOGIN)
            return True

    router.register(Path.ITEMS, protected_route(lambda c: seen.append(Path.ITEMS), MovingSession(), router))
    router.register(Path.LOGIN, lambda c: seen.append(Path.LOGIN))

    router.start()
    window.run_until_idle()

    assert seen == [Path.LOGIN]
