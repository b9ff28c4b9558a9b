"""
Tests for the shell controller and the client start-up sequence.
"""
import logging

from client import nav
from client.dom import Window
from client.routes import Path
from conftest import PASSWORD


def _header(tab):
    return tab.window.get_element_by_id('app-header')


class TestStartup:
    def test_empty_hash_logged_out_goes_to_login(self, tab):
        tab.init()
        tab.window.run_until_idle()

        assert tab.window.location.hash == '#/login'
        assert tab.shell.last_category == 'auth'
        assert tab.window.get_element_by_id('login-form') is not None

    def test_empty_hash_logged_in_goes_to_home(self, tab, user):
        tab.session.login(user.email, PASSWORD)

        tab.init()
        tab.window.run_until_idle()

        assert tab.window.location.hash == '#/home'
        assert tab.shell.last_category == 'app'
        assert _header(tab) is not None

    def test_protected_path_logged_out_lands_on_login(self, tab):
        tab.window.location.replace('#/items')

        tab.init()
        tab.window.run_until_idle()

        assert tab.window.location.hash == '#/login'
        assert tab.window.get_element_by_id('login-form') is not None
        assert tab.window.query_selector('.app-nav') is None
        assert _header(tab) is None
        assert tab.window.get_element_by_id('items-list') is None
        assert tab.router.current() is Path.LOGIN

    def test_public_path_logged_in_goes_home(self, tab, user):
        tab.session.login(user.email, PASSWORD)
        tab.window.location.replace('#/register')

        tab.init()
        tab.window.run_until_idle()

        assert tab.window.location.hash == '#/home'
        assert tab.router.current() is Path.HOME

    def test_missing_app_root_is_logged(self, http, storage, caplog):
        from client.app import create_client
        tab = create_client(base_url='http://testserver', storage=storage, http=http,
                            window=Window('<html><body></body></html>'))

        with caplog.at_level(logging.ERROR):
            tab.init()

        assert '#app element not found' in caplog.text


class TestShellSwap:
    def test_header_survives_app_navigation(self, signed_in_tab):
        tab = signed_in_tab
        header = _header(tab)
        renders = tab.shell.renders

        for path in (Path.ITEMS, Path.FAMILY, Path.SETTINGS, Path.ADD_ITEM, Path.HOME):
            tab.navigate(path)
            assert _header(tab) is header, f'header re-rendered on the way to {path.value}'

        assert tab.shell.renders == renders

    def test_nav_highlight_tracks_route(self, signed_in_tab):
        tab = signed_in_tab
        assert nav.active_path(tab.window.document) is Path.HOME

        tab.navigate(Path.FAMILY)

        assert nav.active_path(tab.window.document) is Path.FAMILY
        assert len(tab.window.query_selector_all('.' + nav.ACTIVE_CLASS)) == 1

    def test_logout_swaps_to_auth_shell(self, signed_in_tab):
        tab = signed_in_tab

        tab.header.logout()
        tab.window.run_until_idle()

        assert tab.window.location.hash == '#/login'
        assert tab.shell.last_category == 'auth'
        assert _header(tab) is None
        assert tab.session.is_logged_in() is False

    def test_login_swaps_to_app_shell_with_logout_button(self, tab, user):
        tab.init()
        tab.window.run_until_idle()
        assert tab.window.get_element_by_id('header-logout-btn') is None

        tab.session.login(user.email, PASSWORD)
        tab.navigate(Path.HOME)

        assert tab.shell.last_category == 'app'
        assert tab.window.get_element_by_id('header-logout-btn') is not None
        assert tab.window.get_element_by_id('view') is not None

    def test_switch_between_public_screens_keeps_auth_shell(self, tab):
        tab.init()
        tab.window.run_until_idle()
        renders = tab.shell.renders

        tab.navigate(Path.REGISTER)

        assert tab.shell.renders == renders
        assert tab.window.get_element_by_id('register-form') is not None
