"""
Item Service
CRUD for furniture items, always scoped to the current user's home
"""
from extensions import db
from models.items import Item
from utils.db_helpers import home_query, home_get, get_home_id


class ItemService:
    """Service for the home inventory"""

    @staticmethod
    def list_items():
        """All items of the current home, newest first"""
        return home_query(Item).order_by(Item.created_at.desc(), Item.id.desc()).all()

    @staticmethod
    def get_item(item_id):
        return home_get(Item, item_id)

    @staticmethod
    def create_item(name, room, created_by, category=None, notes='', image=''):
        """Create an item in the current home and return it"""
        item = Item(
            home_id=get_home_id(),
            name=name.strip(),
            room=room.strip(),
            category=(category or '').strip() or None,
            notes=(notes or '').strip(),
            image=image or '',
            created_by_id=created_by.id,
        )
        db.session.add(item)
        db.session.commit()
        return item

    @staticmethod
    def delete_item(item_id):
        """Delete an item of the current home. Returns False if it is not ours."""
        item = home_get(Item, item_id)
        if item is None:
            return False
        db.session.delete(item)
        db.session.commit()
        return True
