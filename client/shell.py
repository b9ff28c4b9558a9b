"""
Shell controller: which chrome wraps the ``#view`` container.

Public screens (login/register) get the bare auth shell; everything else gets
the app shell (header, content area, bottom nav). The chrome is only replaced
when a navigation crosses between the two; within the app shell only the nav
highlight is updated, so the header and floating button stay mounted.
"""
import logging

from client import nav
from client.routes import Path, PUBLIC_PATHS, PROTECTED_PATHS, SHELL_APP, SHELL_AUTH, shell_category
from client.dom import set_inner_html
from client import templating


logger = logging.getLogger(__name__)

APP_ID = 'app'


class ShellController:
    def __init__(self, window, router, session, header):
        self.window = window
        self.router = router
        self.session = session
        self.header = header
        self.last_category = None
        self.renders = 0

    # ── Rendering ────────────────────────────────────────────────────────

    def _root(self):
        root = self.window.get_element_by_id(APP_ID)
        if root is None:
            logger.error('[Shell] #%s element not found', APP_ID)
        return root

    def render_shell(self):
        """Header + content area + bottom nav, for authenticated screens."""
        root = self._root()
        if root is None:
            return False
        markup = templating.render(
            'shell.html',
            header=self.header.render(),
            active=Path.parse(self.router.get_current_path()),
        )
        set_inner_html(root, markup)
        self.last_category = SHELL_APP
        self.renders += 1
        return True

    def render_auth_shell(self):
        """Bare content area for the login/register screens."""
        root = self._root()
        if root is None:
            return False
        set_inner_html(root, templating.render('auth_shell.html'))
        self.last_category = SHELL_AUTH
        self.renders += 1
        return True

    def render_appropriate_shell(self):
        if shell_category(self.router.get_current_path()) == SHELL_AUTH:
            return self.render_auth_shell()
        return self.render_shell()

    def update_nav_active(self, path):
        nav.highlight(self.window.document, path)

    # ── Lifecycle ────────────────────────────────────────────────────────

    def on_hashchange(self, event=None):
        path = self.router.get_current_path()
        category = shell_category(path)
        if category != self.last_category:
            logger.debug('[Shell] Switching %s -> %s shell for %s', self.last_category, category, path)
            self.render_appropriate_shell()
        elif category == SHELL_APP:
            self.update_nav_active(path)

    def init(self):
        """Pick the first shell, then start listening and start the router.

        Must run after the routes are registered.
        """
        logged_in = self.session.is_logged_in()
        location = self.window.location

        if location.hash in ('', '#', '#/'):
            location.replace('#' + (Path.HOME if logged_in else Path.LOGIN).value)

        current = Path.parse(self.router.get_current_path())
        if not logged_in and current in PROTECTED_PATHS:
            location.replace('#' + Path.LOGIN.value)
            self.render_auth_shell()
        elif logged_in and current in PUBLIC_PATHS:
            location.replace('#' + Path.HOME.value)
            self.render_shell()
        else:
            self.render_appropriate_shell()

        # Registered before the router's listener so #view exists when it resolves
        self.window.add_event_listener('hashchange', self.on_hashchange)
        self.router.start()
        logger.info('[App] MyHome client initialized at %s', self.router.get_current_path())
