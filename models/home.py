"""
Home model for shared inventories.
A Home groups users together into one item pool. The owner issues a
rotating invite code that lets other users join.
"""
import secrets
import string
from datetime import datetime, timezone
from extensions import db


INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits
INVITE_CODE_LENGTH = 16
INVITE_CODE_GROUP = 4


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize_invite_code(code):
    """Strip dashes/whitespace and upper-case *code*; returns '' for junk input."""
    if not code:
        return ''
    return ''.join(ch for ch in str(code).upper() if ch in INVITE_CODE_ALPHABET)


def format_invite_code(code):
    """Render a stored code as XXXX-XXXX-XXXX-XXXX."""
    code = normalize_invite_code(code)
    return '-'.join(code[i:i + INVITE_CODE_GROUP] for i in range(0, len(code), INVITE_CODE_GROUP))


class Home(db.Model):
    """Represents a household sharing a single inventory."""
    __tablename__ = 'homes'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, default='My Home')
    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)

    invite_code = db.Column(db.String(INVITE_CODE_LENGTH), unique=True, nullable=True, index=True)
    invite_code_expires_at = db.Column(db.DateTime, nullable=True)

    # Relationships
    members = db.relationship('User', back_populates='home', lazy='dynamic')
    items = db.relationship('Item', back_populates='home', lazy='dynamic',
                            cascade='all, delete-orphan')

    @property
    def owner(self):
        from models.users import ROLE_OWNER
        return self.members.filter_by(role=ROLE_OWNER).first()

    @property
    def has_valid_invite_code(self):
        """True if a code has been issued and has not expired."""
        return (self.invite_code is not None
                and self.invite_code_expires_at is not None
                and _utcnow() <= self.invite_code_expires_at)

    def rotate_invite_code(self, lifetime):
        """Issue a fresh invite code, replacing any previous one."""
        while True:
            code = ''.join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))
            if Home.query.filter_by(invite_code=code).first() is None:
                break
        self.invite_code = code
        self.invite_code_expires_at = _utcnow() + lifetime
        return code

    def to_dict(self, include_code=False):
        data = {
            'id': self.id,
            'name': self.name,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'invite_code': None,
        }
        if include_code and self.has_valid_invite_code:
            data['invite_code'] = format_invite_code(self.invite_code)
            data['invite_code_expires_at'] = self.invite_code_expires_at.isoformat()
        return data

    def __repr__(self):
        return f'<Home {self.name}>'
