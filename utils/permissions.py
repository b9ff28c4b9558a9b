"""
Permission helpers for home membership roles.

    role      can do
    ────────  ─────────────────────────────────────────────
    owner     everything a member can, plus rotate the invite code
              and remove members
    member    read/add/delete the home's items, leave the home
"""
from functools import wraps

from flask import abort
from flask_login import current_user


def require_owner():
    """Abort with 403 if the current user does not own their home."""
    if not current_user.is_authenticated or not current_user.is_owner:
        abort(403, description='Only the home owner can do that')


def owner_required(view):
    """Route decorator form of :func:`require_owner`."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        require_owner()
        return view(*args, **kwargs)
    return wrapped


def require_home():
    """Abort with 409 when an authenticated user has no home yet."""
    if current_user.home_id is None:
        abort(409, description='You do not belong to a home')
