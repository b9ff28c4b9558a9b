"""
Authentication Routes
Register, login and token verification for the bearer-token API
"""
from datetime import datetime
from flask import jsonify, abort, current_app
from flask_login import login_required, current_user
from . import auth_bp
from .forms import LoginForm, RegisterForm
from models.users import User
from services.home_service import HomeService
from extensions import db, limiter
from utils.tokens import issue_token


def _auth_response(user, status=200):
    return jsonify(token=issue_token(user), user=user.to_dict()), status


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("10 per minute")
def register():
    """Create an account with its own personal home"""
    form = RegisterForm()
    if not form.validate_on_submit():
        abort(400, description=form.first_error())

    email = form.email.data.strip().lower()
    if User.query.filter_by(email=email).first():
        abort(400, description='Email already registered')

    user = User(
        email=email,
        name=(form.name.data or '').strip() or email.split('@')[0],
        is_active=True,
    )
    user.set_password(form.password.data)
    db.session.add(user)
    db.session.flush()
    HomeService.create_personal_home(user)
    db.session.commit()

    current_app.logger.info(f'User registered: {email}')
    return _auth_response(user, 201)


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")  # Rate limit login attempts
def login():
    """Exchange email + password for a bearer token"""
    form = LoginForm()
    if not form.validate_on_submit():
        abort(400, description=form.first_error())

    email = form.email.data.strip().lower()
    password = form.password.data

    user = User.query.filter_by(email=email).first()
    if user is None:
        # Generic error to prevent user enumeration
        abort(401, description='Invalid email or password')

    if user.is_locked():
        minutes_left = int((user.locked_until - datetime.utcnow()).total_seconds() / 60) + 1
        abort(403, description=f'Account temporarily locked due to multiple failed login attempts. '
                              f'Try again in {minutes_left} minutes.')

    if not user.is_active:
        abort(403, description='This account has been deactivated.')

    if not user.check_password(password):
        user.record_failed_login()
        current_app.logger.warning(f'Failed login for {email} ({user.failed_login_attempts} attempts)')
        abort(401, description='Invalid email or password')

    user.update_last_login()
    user.reset_failed_logins()
    current_app.logger.info(f'User logged in: {email}')
    return _auth_response(user)


@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    """Confirm the bearer token and return its user"""
    return jsonify(user=current_user.to_dict())
