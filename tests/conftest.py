"""
Shared pytest fixtures for the MyHome test suite.

All tests run against an in-memory SQLite database (TestingConfig).
A single app context is pushed for the whole session so that SQLAlchemy
objects remain attached throughout.  After each test, clean_db wipes all
rows so tests are fully independent.

Every HTTP request runs in its own app context, as it would under a real
server, so Flask-Login never reuses the user loaded for a previous request.
"""
from urllib.parse import urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter
from flask.testing import FlaskClient
from requests.structures import CaseInsensitiveDict

from app import create_app
from extensions import db as _db


API_URL = 'http://testserver'
PASSWORD = 'secret1'


class FreshContextClient(FlaskClient):
    """Test client that pushes a fresh app context for each request."""

    def open(self, *args, **kwargs):
        with self.application.app_context():
            return super().open(*args, **kwargs)


class DownAdapter(BaseAdapter):
    """Transport for a server that cannot be reached."""

    def send(self, request, **kwargs):
        raise requests.exceptions.ConnectionError('connection refused')

    def close(self):
        pass


class FlaskAdapter(BaseAdapter):
    """``requests`` transport that answers from the Flask app instead of a socket."""

    def __init__(self, app):
        super().__init__()
        self.client = app.test_client()

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        url = urlsplit(request.url)
        path = url.path + (f'?{url.query}' if url.query else '')
        headers = {k: v for k, v in request.headers.items() if k.lower() != 'content-length'}
        body = request.body.encode('utf-8') if isinstance(request.body, str) else request.body

        answer = self.client.open(path, method=request.method, headers=headers, data=body)

        response = requests.Response()
        response.status_code = answer.status_code
        response.reason = answer.status.split(' ', 1)[-1]
        response.headers = CaseInsensitiveDict(answer.headers)
        response._content = answer.get_data()
        response.encoding = 'utf-8'
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


# ---------------------------------------------------------------------------
# Application / database lifecycle
# ---------------------------------------------------------------------------

@pytest.fixture(scope='session')
def app():
    """Create a test Flask application with an in-memory SQLite database."""
    application = create_app('testing')
    application.test_client_class = FreshContextClient
    ctx = application.app_context()
    ctx.push()
    _db.create_all()
    yield application
    _db.session.remove()
    _db.drop_all()
    ctx.pop()


@pytest.fixture(autouse=True)
def clean_db(app):
    """Wipe every table after each test so tests never share state."""
    yield
    _db.session.rollback()
    for table in reversed(_db.metadata.sorted_tables):
        _db.session.execute(table.delete())
    _db.session.commit()
    _db.session.expunge_all()


@pytest.fixture
def client(app):
    return app.test_client()


# ---------------------------------------------------------------------------
# Common model helpers
# ---------------------------------------------------------------------------

def _make_user(email, name, password=PASSWORD):
    """A committed user who owns a fresh personal home."""
    from models.users import User
    from services.home_service import HomeService
    u = User(email=email, name=name)
    u.set_password(password)
    _db.session.add(u)
    _db.session.flush()
    HomeService.create_personal_home(u)
    _db.session.commit()
    return u


def _auth_headers(user):
    from utils.tokens import issue_token
    return {'Authorization': f'Bearer {issue_token(user)}'}


@pytest.fixture
def make_user(app):
    return _make_user


@pytest.fixture
def auth_headers(app):
    return _auth_headers


@pytest.fixture
def user(app):
    return _make_user('owner@myhome.io', 'Olivia Owner')


@pytest.fixture
def home(user):
    return user.home


@pytest.fixture
def other_user(app):
    return _make_user('other@myhome.io', 'Oscar Other')


@pytest.fixture
def headers(user):
    return _auth_headers(user)


# ---------------------------------------------------------------------------
# Single-page client
# ---------------------------------------------------------------------------

@pytest.fixture
def http(app):
    """A ``requests`` session whose calls to API_URL reach the test app."""
    session = requests.Session()
    session.mount(API_URL, FlaskAdapter(app))
    return session


@pytest.fixture
def api(http):
    from client.api import ApiClient
    return ApiClient(API_URL, http=http)


@pytest.fixture
def storage():
    from client.local_storage import LocalStorage
    return LocalStorage()


@pytest.fixture
def tab(http, storage):
    """A browser tab running the client, not yet initialised."""
    from client.app import create_client
    return create_client(base_url=API_URL, storage=storage, http=http)


@pytest.fixture
def signed_in_tab(tab, user):
    """A tab holding a valid session for ``user``, started on #/home."""
    result = tab.session.login(user.email, PASSWORD)
    assert result['success'], result
    tab.window.location.replace('#/home')
    tab.init()
    tab.window.run_until_idle()
    return tab
