"""
MyHome client application.

Wires the API client, session, router, guard, shell and views together for
one browser tab::

    client = create_client()
    client.init()
    client.window.run_until_idle()
"""
import logging

from config import ClientConfig
from client.api import ApiClient
from client.components import Header
from client.dom import Window
from client.guard import protected_route
from client.local_storage import FileLocalStorage
from client.notify import Toaster
from client.router import Router
from client.routes import Path, PUBLIC_PATHS
from client.session import AuthSession
from client.shell import ShellController
from client.store import ItemStore
from client.views import (
    AddItemView, FamilyView, HomeView, ItemsView, LoginView, RegisterView, SettingsView,
)


logger = logging.getLogger(__name__)


class MyHomeClient:
    """One tab of the single-page app."""

    def __init__(self, api, storage, window=None, config=ClientConfig):
        self.config = config
        self.version = config.APP_VERSION
        self.window = window or Window()
        self.api = api
        self.session = AuthSession(api, storage)
        self.store = ItemStore(api)
        self.toaster = Toaster(self.window)
        self.router = Router(self.window)
        self.header = Header(self.session, self.router, self.toaster)
        self.shell = ShellController(self.window, self.router, self.session, self.header)

        self.views = {
            Path.LOGIN: LoginView(self),
            Path.REGISTER: RegisterView(self),
            Path.HOME: HomeView(self),
            Path.ITEMS: ItemsView(self),
            Path.ADD_ITEM: AddItemView(self),
            Path.FAMILY: FamilyView(self),
            Path.SETTINGS: SettingsView(self),
        }
        self.register_routes()

    def register_routes(self):
        for path, view in self.views.items():
            if path in PUBLIC_PATHS:
                self.router.register(path, view.render)
            else:
                self.router.register(path, protected_route(view.render, self.session, self.router, self.toaster))

    def view(self, path):
        return self.views[Path.parse(path)]

    def init(self):
        """Render the first shell and resolve the current location."""
        return self.shell.init()

    def navigate(self, path):
        """Navigate and let the resulting ``hashchange`` settle."""
        self.router.navigate(path)
        self.window.run_until_idle()


def create_client(base_url=None, storage=None, window=None, http=None, config=ClientConfig):
    """Build a client against *base_url* (``MYHOME_API_URL`` by default).

    *http* may be a preconfigured ``requests.Session``; *storage* defaults to
    the JSON session file from the configuration.
    """
    api = ApiClient(base_url or config.API_BASE_URL, timeout=config.API_TIMEOUT, http=http)
    if storage is None:
        storage = FileLocalStorage(config.SESSION_FILE)
    logger.debug('Creating client for %s', api.base_url)
    return MyHomeClient(api, storage, window=window, config=config)
