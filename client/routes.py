"""
The client's route paths.
"""
from enum import Enum


class Path(str, Enum):
    HOME = '/home'
    ITEMS = '/items'
    ADD_ITEM = '/add-item'
    FAMILY = '/family'
    SETTINGS = '/settings'
    LOGIN = '/login'
    REGISTER = '/register'

    @classmethod
    def parse(cls, value):
        """Return the ``Path`` for *value* (``'#/home'``, ``'home'``, ``'/home'``), or None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        value = value.strip().lstrip('#').split('?', 1)[0]
        if value and not value.startswith('/'):
            value = '/' + value
        try:
            return cls(value)
        except ValueError:
            return None


DEFAULT_PATH = Path.HOME

# Screens shown without the app chrome and reachable without a session
PUBLIC_PATHS = frozenset({Path.LOGIN, Path.REGISTER})
PROTECTED_PATHS = frozenset(p for p in Path if p not in PUBLIC_PATHS)

SHELL_AUTH = 'auth'
SHELL_APP = 'app'


def shell_category(path):
    """'auth' for the public screens, 'app' for everything else (unknown paths included)."""
    return SHELL_AUTH if Path.parse(path) in PUBLIC_PATHS else SHELL_APP
