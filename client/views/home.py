"""
Home screen: item count, the most recent items and the add button.
"""
import logging

from client.api import ApiError
from client.components import render_grid
from client.routes import Path
from client.views.base import View


logger = logging.getLogger(__name__)

MAX_RECENT = 4


class HomeView(View):
    template = 'views/home.html'

    def markup(self):
        try:
            items = self.app.store.get_all()
        except ApiError as e:
            logger.warning('Could not load items: %s', e.message)
            self.toaster.error(e.message)
            items = []
        recent = items[:MAX_RECENT]
        return super().markup(total=len(items), recent=recent, cards=render_grid(recent))

    def view_all(self):
        self.router.navigate(Path.ITEMS)
