"""
Home Service
Personal homes, invite codes and the join/leave/remove membership flows
"""
from datetime import datetime

from flask import current_app

from extensions import db
from models.home import Home, normalize_invite_code, INVITE_CODE_LENGTH
from models.items import Item
from models.users import User, ROLE_OWNER, ROLE_MEMBER


class HomeServiceError(Exception):
    """A membership operation was refused; carries the HTTP status to answer with."""

    def __init__(self, message, status_code=400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class HomeService:
    """Service for home membership and invite codes"""

    @staticmethod
    def default_home_name(user):
        return f"{user.name}'s Home"

    @staticmethod
    def create_personal_home(user):
        """Give *user* a fresh home they own. Does not commit."""
        home = Home(name=HomeService.default_home_name(user))
        db.session.add(home)
        db.session.flush()
        user.home_id = home.id
        user.role = ROLE_OWNER
        user.joined_at = datetime.utcnow()
        return home

    @staticmethod
    def rotate_invite_code(home):
        """Issue a new invite code for *home*, invalidating the previous one."""
        code = home.rotate_invite_code(current_app.config['INVITE_CODE_LIFETIME'])
        db.session.commit()
        current_app.logger.info(f'Invite code rotated for home {home.id}')
        return code

    @staticmethod
    def find_home_by_code(code):
        """Return the home whose live invite code is *code*, or ``None``.

        Accepts codes with or without dashes, in any case.
        """
        code = normalize_invite_code(code)
        if len(code) != INVITE_CODE_LENGTH:
            return None
        home = Home.query.filter_by(invite_code=code).first()
        if home is None or not home.has_valid_invite_code:
            return None
        return home

    @staticmethod
    def join_home(user, code):
        """Move *user* into the home identified by *code* as a member.

        A user who is alone in their previous home brings its items along and
        the empty home is dissolved. An owner with other members must remove
        them first.
        """
        if not normalize_invite_code(code):
            raise HomeServiceError('Invite code is required', 400)

        target = HomeService.find_home_by_code(code)
        if target is None:
            raise HomeServiceError('Invite code is invalid or expired', 404)
        if target.id == user.home_id:
            raise HomeServiceError('You are already a member of this home', 400)

        previous = user.home
        if previous is not None:
            others = previous.members.filter(User.id != user.id).count()
            if others and user.role == ROLE_OWNER:
                raise HomeServiceError(
                    'Remove the other members of your home before joining another one', 409)

        user.home_id = target.id
        user.role = ROLE_MEMBER
        user.joined_at = datetime.utcnow()
        db.session.flush()

        if previous is not None and previous.members.count() == 0:
            moved = Item.query.filter_by(home_id=previous.id).update(
                {Item.home_id: target.id}, synchronize_session=False)
            db.session.delete(previous)
            current_app.logger.info(
                f'Home {previous.id} dissolved; {moved} item(s) moved to home {target.id}')

        db.session.commit()
        current_app.logger.info(f'User {user.id} joined home {target.id}')
        return target

    @staticmethod
    def leave_home(user):
        """Take a member out of their home and give them a new personal one."""
        if user.home_id is None:
            raise HomeServiceError('You do not belong to a home', 400)
        if user.role == ROLE_OWNER:
            raise HomeServiceError('Owners cannot leave their own home', 400)

        old_home_id = user.home_id
        home = HomeService.create_personal_home(user)
        db.session.commit()
        current_app.logger.info(f'User {user.id} left home {old_home_id}')
        return home

    @staticmethod
    def remove_member(owner, member_id):
        """Remove *member_id* from *owner*'s home."""
        if member_id == owner.id:
            raise HomeServiceError('You cannot remove yourself from your home', 400)

        member = db.session.get(User, member_id)
        if member is None or member.home_id != owner.home_id:
            raise HomeServiceError('Member not found', 404)

        HomeService.create_personal_home(member)
        db.session.commit()
        current_app.logger.info(f'User {member.id} removed from home {owner.home_id}')
        return member
