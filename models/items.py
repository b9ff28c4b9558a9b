"""
Furniture items tracked inside a home
"""
from datetime import datetime
from extensions import db


class Item(db.Model):
    """A piece of furniture (or anything else) recorded in a home's inventory"""
    __tablename__ = 'items'

    id = db.Column(db.Integer, primary_key=True)
    home_id = db.Column(db.Integer, db.ForeignKey('homes.id'), nullable=False, index=True)

    name = db.Column(db.String(100), nullable=False)
    category = db.Column(db.String(50))
    room = db.Column(db.String(50), nullable=False)
    notes = db.Column(db.String(500), default='')
    # Data URL or remote URL of the photo
    image = db.Column(db.Text, default='')

    created_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    home = db.relationship('Home', back_populates='items')
    created_by = db.relationship('User', foreign_keys=[created_by_id])

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category or '',
            'room': self.room,
            'notes': self.notes or '',
            'image': self.image or '',
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'created_by': self.created_by_id,
        }

    def __repr__(self):
        return f'<Item {self.name} ({self.room})>'
