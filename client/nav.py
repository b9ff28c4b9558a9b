"""
Bottom navigation: the items it shows and the active-item highlight.
"""
from client.dom import toggle_class
from client.routes import Path


ACTIVE_CLASS = 'app-nav__item--active'
ITEM_SELECTOR = 'a.app-nav__item'

# (path, label, icon); the add button sits in the middle without a label
NAV_ITEMS = [
    (Path.HOME, 'Home', 'home'),
    (Path.ITEMS, 'Items', 'grid'),
    (Path.ADD_ITEM, None, 'plus'),
    (Path.FAMILY, 'Family', 'users'),
    (Path.SETTINGS, 'Settings', 'settings'),
]


def href_for(path):
    return '#' + Path.parse(path).value


def highlight(document, active_path):
    """Mark the nav item pointing at *active_path* as active, and only that one.

    Returns the number of nav items found.
    """
    route = Path.parse(active_path)
    active_href = href_for(route) if route is not None else None
    items = document.select(ITEM_SELECTOR)
    for item in items:
        href = item.get('href')
        if not href:
            continue
        toggle_class(item, ACTIVE_CLASS, href == active_href)
    return len(items)


def active_path(document):
    """The path of the currently highlighted nav item, or None."""
    for item in document.select(ITEM_SELECTOR):
        if ACTIVE_CLASS in (item.get('class') or []):
            return Path.parse(item.get('href'))
    return None
