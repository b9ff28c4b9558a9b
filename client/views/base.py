"""
Base class for the screens rendered into ``#view``.
"""
import logging

from client import templating
from client.dom import add_class, remove_class, get_value


logger = logging.getLogger(__name__)

ERROR_CLASS = 'form-input--error'


class View:
    """A screen. ``render(container)`` returns its markup for the router to inject.

    The container of the last render is kept so that the user actions
    (``submit``, ``select_room`` ...) can read and update the mounted markup.
    """
    template = None

    def __init__(self, app):
        self.app = app
        self.container = None

    @property
    def api(self):
        return self.app.api

    @property
    def session(self):
        return self.app.session

    @property
    def router(self):
        return self.app.router

    @property
    def toaster(self):
        return self.app.toaster

    def render(self, container):
        self.container = container
        return self.markup()

    def markup(self, **context):
        return templating.render(self.template, **context)

    # ── Form helpers ─────────────────────────────────────────────────────

    def field(self, element_id):
        if self.container is None:
            return None
        return self.container.find(id=element_id)

    def value(self, element_id, strip=True):
        value = get_value(self.field(element_id))
        return value.strip() if strip else value

    def clear_errors(self):
        if self.container is None:
            return
        for element in self.container.select('.' + ERROR_CLASS):
            remove_class(element, ERROR_CLASS)

    def invalid(self, element_id, message):
        """Highlight *element_id* and explain why in a toast. Always returns False."""
        element = self.field(element_id)
        if element is not None:
            add_class(element, ERROR_CLASS)
        self.toaster.error(message)
        logger.debug('Validation failed on #%s: %s', element_id, message)
        return False
