"""
Items screen: every item of the home, filterable by room, with delete.
"""
import logging

from client import templating
from client.api import ApiError
from client.dom import parse_fragment, set_inner_html
from client.store import ItemStore
from client.views.base import View


logger = logging.getLogger(__name__)

ALL_ROOMS = 'All'
DIALOG_ID = 'delete-dialog'


class ItemsView(View):
    template = 'views/items.html'

    def __init__(self, app):
        super().__init__(app)
        self.items = []
        self.active_room = ALL_ROOMS

    def load(self):
        try:
            self.items = self.app.store.get_all()
        except ApiError as e:
            logger.warning('Could not load items: %s', e.message)
            self.toaster.error(e.message)
            self.items = []
        return self.items

    def render(self, container):
        self.active_room = ALL_ROOMS
        self.load()
        return super().render(container)

    def markup(self):
        rooms = ItemStore.rooms(self.items)
        if self.active_room not in rooms:
            self.active_room = ALL_ROOMS
        return super().markup(
            items=self.items,
            rooms=rooms,
            active_room=self.active_room,
            filtered=ItemStore.filter_by_room(self.items, self.active_room),
        )

    def refresh(self):
        """Re-render into the mounted container without a navigation."""
        if self.container is not None:
            set_inner_html(self.container, self.markup())

    def select_room(self, room):
        self.active_room = room
        self.refresh()

    # ── Delete ───────────────────────────────────────────────────────────

    def _find(self, item_id):
        return next((item for item in self.items if item.get('id') == item_id), None)

    def request_delete(self, item_id):
        """Open the confirmation dialog for *item_id*."""
        item = self._find(item_id)
        if item is None or self.container is None:
            return False
        self.cancel_delete()
        dialog = parse_fragment(templating.render('views/delete_dialog.html', item=item))
        self.container.append(dialog.find(id=DIALOG_ID).extract())
        return True

    def cancel_delete(self):
        dialog = self.field(DIALOG_ID)
        if dialog is not None:
            dialog.extract()

    def confirm_delete(self):
        dialog = self.field(DIALOG_ID)
        if dialog is None:
            return False
        item_id = int(dialog['data-item-id'])
        dialog.extract()
        try:
            self.app.store.delete_item(item_id)
        except ApiError as e:
            self.toaster.error(e.message)
            return False
        self.toaster.show('Item deleted')
        self.load()
        self.refresh()
        return True
