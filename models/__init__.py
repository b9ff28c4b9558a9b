# Models package - Import all models for Flask-SQLAlchemy

from models.home import Home
from models.items import Item
from models.users import User

__all__ = [
    'Home',
    'Item',
    'User',
]
