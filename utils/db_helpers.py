"""
Database query helpers for home-scoped multi-tenancy.

All items in this application belong to a Home. Every query against a
home-owned model should go through these helpers so that one home can never
see another home's records.

Usage
-----
In any blueprint route or service function::

    from utils.db_helpers import home_query, home_get_or_404, get_home_id

    # List all items belonging to the current home
    items = home_query(Item).order_by(Item.created_at.desc()).all()

    # Fetch a single record safely (raises 404 if not found *or* wrong home)
    item = home_get_or_404(Item, item_id)
"""

from flask_login import current_user


# ---------------------------------------------------------------------------
# Core helpers
# ---------------------------------------------------------------------------

def get_home_id():
    """Return ``current_user.home_id``, or ``None`` if not authenticated."""
    if current_user.is_authenticated:
        return current_user.home_id
    return None


def home_query(model):
    """Return a SQLAlchemy query pre-filtered to the current home.

    Examples::

        home_query(Item).all()
        home_query(Item).filter_by(room='Bedroom').count()
    """
    if not hasattr(model, 'home_id'):
        raise AttributeError(
            f"home_query() called on {model.__name__} but it has no home_id column."
        )
    hid = get_home_id()
    if hid is None:
        # Return a query that always yields zero rows rather than leaking data
        return model.query.filter(model.id == -1)
    return model.query.filter_by(home_id=hid)


def home_get(model, record_id):
    """Fetch a single record by *record_id*, scoped to the current home.

    Returns ``None`` if the record does not exist or belongs to another home.
    """
    hid = get_home_id()
    if hid is None:
        return None
    return model.query.filter_by(id=record_id, home_id=hid).first()


def home_get_or_404(model, record_id):
    """Like ``home_get`` but aborts with 404 if nothing is found."""
    record = home_get(model, record_id)
    if record is None:
        from flask import abort
        abort(404, description=f'{model.__name__} not found')
    return record
