"""
Storage - API-backed CRUD for furniture items.

All calls raise ``ApiError`` on failure; views decide how to surface it.
"""
import base64
import logging


logger = logging.getLogger(__name__)


def image_data_url(data, mime_type='image/jpeg'):
    """Encode raw image bytes the way ``FileReader.readAsDataURL`` does."""
    return f'data:{mime_type};base64,{base64.b64encode(data).decode("ascii")}'


class ItemStore:
    def __init__(self, api):
        self.api = api

    def get_all(self):
        """All items of the current home, newest first."""
        return self.api.get('/api/items').get('items', [])

    def get_by_id(self, item_id):
        return self.api.get(f'/api/items/{item_id}').get('item')

    def add_item(self, item):
        """Create an item; only the known fields are sent."""
        body = {
            'name': item.get('name', ''),
            'room': item.get('room', ''),
            'category': item.get('category') or '',
            'notes': item.get('notes') or '',
            'image': item.get('image') or '',
        }
        created = self.api.post('/api/items', json=body).get('item')
        logger.info('Item created: %s', created and created.get('id'))
        return created

    def delete_item(self, item_id):
        self.api.delete(f'/api/items/{item_id}')
        logger.info('Item deleted: %s', item_id)
        return True

    @staticmethod
    def rooms(items):
        """``['All']`` followed by the sorted distinct rooms in *items*."""
        return ['All'] + sorted({item.get('room') for item in items if item.get('room')})

    @staticmethod
    def filter_by_room(items, room):
        if room == 'All':
            return list(items)
        return [item for item in items if item.get('room') == room]
