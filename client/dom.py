"""
Browser window model for the single-page client.

The document is a BeautifulSoup tree, so markup produced by the views is
real HTML that can be queried and mutated. Events and timers run on a
cooperative single-threaded loop: listeners are queued and executed by
``run_until_idle()``; timers are cosmetic and only run on ``run_timers()``.
"""
import logging
from collections import defaultdict, deque

from bs4 import BeautifulSoup


logger = logging.getLogger(__name__)

BLANK_PAGE = '<html><head><title>MyHome</title></head><body><div id="app"></div></body></html>'

# Guards against a listener that keeps re-queueing work forever
MAX_TASKS_PER_RUN = 1000


def parse_fragment(markup):
    return BeautifulSoup(markup or '', 'html.parser')


def set_inner_html(element, markup):
    """Replace the children of *element* with the parsed *markup*."""
    element.clear()
    fragment = parse_fragment(markup)
    for child in list(fragment.contents):
        element.append(child.extract())
    return element


def has_class(element, name):
    return name in (element.get('class') or [])


def add_class(element, name):
    classes = list(element.get('class') or [])
    if name not in classes:
        classes.append(name)
    element['class'] = classes


def remove_class(element, name):
    classes = [c for c in (element.get('class') or []) if c != name]
    if classes:
        element['class'] = classes
    elif element.has_attr('class'):
        del element['class']


def toggle_class(element, name, force):
    if force:
        add_class(element, name)
    else:
        remove_class(element, name)


class Location:
    """The ``window.location`` fragment. Assigning a new hash queues ``hashchange``."""

    def __init__(self, window, hash=''):
        self._window = window
        self._hash = self._normalize(hash)

    @staticmethod
    def _normalize(value):
        value = value or ''
        if value and not value.startswith('#'):
            value = '#' + value
        return value

    @property
    def hash(self):
        return self._hash

    @hash.setter
    def hash(self, value):
        self.assign(value)

    def assign(self, value):
        """Set the fragment; fires ``hashchange`` only when it actually changes."""
        value = self._normalize(value)
        if value == self._hash:
            return False
        old = self._hash
        self._hash = value
        self._window.dispatch_event('hashchange', old_hash=old, new_hash=value)
        return True

    def replace(self, value):
        """Set the fragment without firing ``hashchange`` (``history.replaceState``)."""
        self._hash = self._normalize(value)


class Event:
    def __init__(self, type, **detail):
        self.type = type
        self.detail = detail

    def __repr__(self):
        return f'<Event {self.type} {self.detail}>'


class Window:
    """A browser tab: document, location, event listeners, task queue and timers."""

    def __init__(self, markup=BLANK_PAGE, hash=''):
        self.document = BeautifulSoup(markup, 'html.parser')
        self.location = Location(self, hash)
        self._listeners = defaultdict(list)
        self._tasks = deque()
        self._timers = []
        self._clock = 0.0

    # ── DOM ──────────────────────────────────────────────────────────────

    @property
    def body(self):
        return self.document.body or self.document

    def get_element_by_id(self, element_id):
        return self.document.find(id=element_id)

    def query_selector(self, selector):
        return self.document.select_one(selector)

    def query_selector_all(self, selector):
        return self.document.select(selector)

    # ── Events ───────────────────────────────────────────────────────────

    def add_event_listener(self, event_type, listener):
        self._listeners[event_type].append(listener)

    def remove_event_listener(self, event_type, listener):
        if listener in self._listeners[event_type]:
            self._listeners[event_type].remove(listener)

    def dispatch_event(self, event_type, **detail):
        """Queue every listener of *event_type*; they run on the next ``run_until_idle``."""
        event = Event(event_type, **detail)
        for listener in list(self._listeners[event_type]):
            self._tasks.append((listener, (event,)))
        return event

    def call_soon(self, callback, *args):
        self._tasks.append((callback, args))

    @property
    def pending_tasks(self):
        return len(self._tasks)

    def run_until_idle(self):
        """Drain the task queue, including tasks queued while draining.

        Returns the number of tasks run.
        """
        count = 0
        while self._tasks:
            if count >= MAX_TASKS_PER_RUN:
                raise RuntimeError(f'Event loop did not settle after {count} tasks')
            callback, args = self._tasks.popleft()
            callback(*args)
            count += 1
        return count

    # ── Timers ───────────────────────────────────────────────────────────

    def call_later(self, delay_ms, callback, *args):
        """Schedule a best-effort callback; nothing may depend on it for correctness."""
        self._timers.append((self._clock + delay_ms, callback, args))

    @property
    def pending_timers(self):
        return len(self._timers)

    def run_timers(self, until_ms=None):
        """Fire due timers in deadline order, then drain the task queue."""
        self._timers.sort(key=lambda timer: timer[0])
        while self._timers and (until_ms is None or self._timers[0][0] <= self._clock + until_ms):
            deadline, callback, args = self._timers.pop(0)
            self._clock = max(self._clock, deadline)
            callback(*args)
        self.run_until_idle()


def get_value(element):
    """Current value of an ``input``, ``textarea`` or ``select`` element."""
    if element is None:
        return ''
    if element.name == 'textarea':
        return element.get_text()
    if element.name == 'select':
        option = element.find('option', selected=True) or element.find('option')
        if option is None:
            return ''
        return option.get('value', option.get_text())
    return element.get('value', '')


def set_value(element, value):
    """Set what the user typed or picked; the inverse of ``get_value``."""
    value = '' if value is None else str(value)
    if element.name == 'textarea':
        element.string = value
    elif element.name == 'select':
        for option in element.find_all('option'):
            if option.get('value', option.get_text()) == value:
                option['selected'] = ''
            elif option.has_attr('selected'):
                del option['selected']
    else:
        element['value'] = value
    return element
