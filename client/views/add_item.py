"""
Add Item screen: name, room, optional category, notes and photo.
"""
import logging

from client.api import ApiError
from client.routes import Path
from client.store import image_data_url
from client.views.base import View


logger = logging.getLogger(__name__)

CATEGORY_OPTIONS = [
    'Sofa', 'Chair', 'Table', 'Bed', 'Wardrobe', 'Shelf', 'Desk',
    'Cabinet', 'Lamp', 'Rug', 'Mirror', 'Appliance', 'Decor', 'Other',
]
ROOM_OPTIONS = [
    'Living Room', 'Bedroom', 'Kitchen', 'Bathroom', 'Dining Room',
    'Office', 'Garage', 'Balcony', 'Hallway', 'Other',
]
MAX_IMAGE_BYTES = 2 * 1024 * 1024


class AddItemView(View):
    template = 'views/add_item.html'

    def __init__(self, app):
        super().__init__(app)
        self.image = None

    def render(self, container):
        self.image = None
        return super().render(container)

    def markup(self):
        return super().markup(rooms=ROOM_OPTIONS, categories=CATEGORY_OPTIONS, image=self.image)

    def _update_preview(self):
        placeholder = self.field('upload-placeholder')
        preview = self.field('image-preview')
        img = self.field('preview-image')
        if placeholder is None or preview is None:
            return
        if self.image:
            placeholder['style'] = 'display: none;'
            preview.attrs.pop('style', None)
            img['src'] = self.image
        else:
            placeholder.attrs.pop('style', None)
            preview['style'] = 'display: none;'
            img['src'] = ''

    def attach_image(self, data, mime_type='image/jpeg'):
        """Attach a photo from raw bytes; it is sent with the item as a data URL."""
        if not mime_type.startswith('image/'):
            self.toaster.error('Please choose an image file')
            return False
        if len(data) > MAX_IMAGE_BYTES:
            self.toaster.error('Image is too large (max 2 MB)')
            return False
        self.image = image_data_url(data, mime_type)
        self._update_preview()
        return True

    def remove_image(self):
        self.image = None
        self._update_preview()

    def submit(self):
        self.clear_errors()
        item = {
            'name': self.value('item-name'),
            'room': self.value('item-room'),
            'category': self.value('item-category'),
            'notes': self.value('item-notes'),
            'image': self.image,
        }
        if not item['name']:
            return self.invalid('item-name', 'Please enter a name')
        if not item['room']:
            return self.invalid('item-room', 'Please choose a room')

        try:
            created = self.app.store.add_item(item)
        except ApiError as e:
            self.toaster.error(e.message)
            return False

        logger.debug('Added %s', created)
        self.toaster.show('Item added!')
        self.router.navigate(Path.ITEMS)
        return True
