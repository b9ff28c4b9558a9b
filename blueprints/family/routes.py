"""
Family blueprint routes.

Owner-only routes:
  GET|POST /family/invite-code      – issue a new invite code (replaces the old one)
  DELETE   /family/members/<id>     – remove a member from the home

Any logged-in user:
  GET  /family/home                 – the caller's home and its members
  GET  /family/verify-code/<code>   – check an invite code before joining
  POST /family/join                 – join the home behind an invite code
  POST /family/leave                – members leave and get a personal home back
"""
from flask import jsonify, abort
from flask_login import current_user

from blueprints.family import family_bp
from .forms import JoinHomeForm
from models.home import format_invite_code
from models.users import User
from services.home_service import HomeService, HomeServiceError
from utils.permissions import owner_required, require_home


def _member_dict(user):
    return {
        'id': user.id,
        'email': user.email,
        'name': user.name,
        'role': user.role,
        'joined_at': user.joined_at.isoformat() if user.joined_at else None,
    }


def _service_abort(error):
    abort(error.status_code, description=error.message)


@family_bp.route('/home', methods=['GET'])
def home():
    require_home()
    home = current_user.home
    members = home.members.order_by(User.joined_at, User.id).all()
    return jsonify(
        home=home.to_dict(include_code=current_user.is_owner),
        members=[_member_dict(m) for m in members],
        isOwner=current_user.is_owner,
    )


@family_bp.route('/invite-code', methods=['GET', 'POST'])
@owner_required
def invite_code():
    home = current_user.home
    code = HomeService.rotate_invite_code(home)
    return jsonify(
        invite_code=format_invite_code(code),
        expires_at=home.invite_code_expires_at.isoformat(),
    )


@family_bp.route('/verify-code/<code>', methods=['GET'])
def verify_code(code):
    home = HomeService.find_home_by_code(code)
    if home is None:
        return jsonify(valid=False)
    return jsonify(valid=True, home_name=home.name,
                   is_current_home=home.id == current_user.home_id)


@family_bp.route('/join', methods=['POST'])
def join():
    form = JoinHomeForm()
    if not form.validate_on_submit():
        abort(400, description=form.first_error())
    try:
        home = HomeService.join_home(current_user, form.invite_code.data)
    except HomeServiceError as e:
        _service_abort(e)
    return jsonify(message=f'Welcome to {home.name}!', home=home.to_dict())


@family_bp.route('/leave', methods=['POST'])
def leave():
    try:
        home = HomeService.leave_home(current_user)
    except HomeServiceError as e:
        _service_abort(e)
    return jsonify(message='You left the home', home=home.to_dict())


@family_bp.route('/members/<int:member_id>', methods=['DELETE'])
@owner_required
def remove_member(member_id):
    try:
        member = HomeService.remove_member(current_user, member_id)
    except HomeServiceError as e:
        _service_abort(e)
    return jsonify(message=f'{member.name} has been removed from the home')
