"""
Router - hash-based SPA router

Usage::

    router = Router(window)
    router.register(Path.HOME, HomeView(ctx).render)
    router.start()
"""
import logging

from client import nav
from client.dom import set_inner_html, add_class, remove_class
from client.routes import Path, DEFAULT_PATH


logger = logging.getLogger(__name__)

VIEW_ID = 'view'


class RouteError(ValueError):
    """Raised for paths the client does not know about."""


class Router:
    """Maps fragment paths to view handlers and renders them into ``#view``."""

    def __init__(self, window, default_path=DEFAULT_PATH):
        self.window = window
        self.default_path = Path.parse(default_path)
        if self.default_path is None:
            raise RouteError(f'Unknown default path: {default_path!r}')
        self._routes = {}
        self._current = None
        self._generation = 0
        self._started = False

    # ── Table ────────────────────────────────────────────────────────────

    def register(self, path, handler):
        """Associate *path* with *handler*; registering a path again replaces it."""
        route = Path.parse(path)
        if route is None:
            raise RouteError(f'Cannot register unknown path {path!r}')
        self._routes[route] = handler

    @property
    def paths(self):
        return frozenset(self._routes)

    # ── Navigation ───────────────────────────────────────────────────────

    @property
    def generation(self):
        """Bumped by every hash change and resolution; older outcomes are stale."""
        return self._generation

    def navigate(self, path):
        """Point the location at *path*; the ``hashchange`` event resolves it.

        Navigating to the path already shown changes nothing, so an in-flight
        resolution of that path stays current.
        """
        route = Path.parse(path)
        target = route.value if route is not None else str(path)
        if self.window.location.assign('#' + target):
            self._generation += 1

    def get_current_path(self):
        """Path portion of the location fragment, or the default path."""
        fragment = self.window.location.hash.lstrip('#').split('?', 1)[0]
        return fragment or self.default_path.value

    def current(self):
        return self._current

    def resolve(self, event=None):
        """Render the handler registered for the current path.

        Returns True when a view was rendered.
        """
        self._generation += 1
        generation = self._generation

        path = self.get_current_path()
        route = Path.parse(path)
        handler = self._routes.get(route)

        # Always re-fetch the container, the shell may have been re-rendered
        container = self.window.get_element_by_id(VIEW_ID)
        if container is None:
            logger.error('[Router] #%s element not found, cannot render %s', VIEW_ID, path)
            return False

        if handler is None:
            if route == self.default_path:
                raise RouteError(f'No handler registered for the default path {path}')
            logger.warning('[Router] No route for %s, falling back to %s', path, self.default_path.value)
            self.navigate(self.default_path)
            return False

        result = handler(container)

        if generation != self._generation:
            # The handler navigated elsewhere (e.g. the auth guard redirected)
            logger.debug('[Router] Dropping stale resolution of %s', path)
            return False

        self._current = route
        if isinstance(result, str):
            set_inner_html(container, result)

        remove_class(container, 'view-enter')
        add_class(container, 'view-enter')

        nav.highlight(self.window.document, route)
        return True

    def start(self):
        """Listen for ``hashchange`` and resolve the current location once."""
        if not self._started:
            self.window.add_event_listener('hashchange', self.resolve)
            self._started = True
        return self.resolve()
