"""
App header: title and, for a signed-in user, the logout button.
"""
import logging

from client import templating
from client.routes import Path


logger = logging.getLogger(__name__)


class Header:
    def __init__(self, session, router, toaster, title='MyHome'):
        self.session = session
        self.router = router
        self.toaster = toaster
        self.title = title

    def render(self):
        return templating.render(
            'components/header.html',
            title=self.title,
            show_logout=self.session.is_logged_in(),
        )

    def logout(self):
        """Drop the session and go to the login screen."""
        self.session.logout()
        self.toaster.show('Logged out')
        self.router.navigate(Path.LOGIN)
