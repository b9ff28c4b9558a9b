from flask import Blueprint
from flask_login import login_required

items_bp = Blueprint('items', __name__, url_prefix='/api/items')

# Require authentication for all routes in this blueprint
@items_bp.before_request
@login_required
def require_login():
    pass

from . import routes  # noqa: E402,F401
