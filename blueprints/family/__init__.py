"""Family blueprint – shared homes and invite codes."""
from flask import Blueprint
from flask_login import login_required

family_bp = Blueprint('family', __name__, url_prefix='/family')

# Every family route acts on the caller's own membership
@family_bp.before_request
@login_required
def require_login():
    pass

from . import routes  # noqa: E402,F401
