"""
Toast notifications.
"""
import logging

from client.dom import parse_fragment, add_class, remove_class


logger = logging.getLogger(__name__)

TOAST_DURATION_MS = 2500
TOAST_FADE_MS = 400


class Toaster:
    """Shows one transient toast at a time at the bottom of the page."""

    def __init__(self, window):
        self.window = window
        self.history = []

    def show(self, message, kind='success', duration_ms=TOAST_DURATION_MS):
        for existing in self.window.document.select('.toast'):
            existing.extract()

        toast = parse_fragment('<div></div>').div
        toast['class'] = ['toast', f'toast--{kind}', 'toast--visible']
        toast.string = message
        self.window.body.append(toast)
        self.history.append((kind, message))
        log = logger.warning if kind == 'error' else logger.info
        log('[Toast] %s', message)

        self.window.call_later(duration_ms, self._hide, toast)
        return toast

    def _hide(self, toast):
        remove_class(toast, 'toast--visible')
        add_class(toast, 'toast--leaving')
        self.window.call_later(TOAST_FADE_MS, toast.extract)

    def error(self, message):
        return self.show(message, 'error')

    @property
    def last(self):
        return self.history[-1] if self.history else None

    @property
    def current(self):
        """Text of the toast on screen, or None."""
        toast = self.window.query_selector('.toast')
        return toast.get_text() if toast is not None else None
