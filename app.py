import os
import logging
import click
from logging.handlers import RotatingFileHandler
from flask import Flask, jsonify
from sqlalchemy.exc import OperationalError
from werkzeug.exceptions import HTTPException
from config import config
from extensions import db, migrate, login_manager, limiter


def configure_logging(app):
    """Configure application logging"""
    if not app.debug and not app.testing:
        # Create logs directory if it doesn't exist
        if not os.path.exists('logs'):
            os.mkdir('logs')

        # File handler for errors
        file_handler = RotatingFileHandler(
            'logs/myhome.log',
            maxBytes=10240000,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s '
            '[in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('MyHome API startup')
    else:
        # Development logging to console
        app.logger.setLevel(logging.DEBUG)
        app.logger.info('MyHome API startup (DEBUG mode)')


def create_app(config_name=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # Configure logging
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    limiter.init_app(app)

    # Add security and CORS headers
    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        headers = app.config.get('SECURITY_HEADERS', {})
        for header, value in headers.items():
            response.headers[header] = value
        origins = app.config.get('CORS_ORIGINS')
        if origins:
            response.headers['Access-Control-Allow-Origin'] = origins
            response.headers['Access-Control-Allow-Headers'] = 'Authorization, Content-Type'
            response.headers['Access-Control-Allow-Methods'] = 'GET, POST, DELETE, OPTIONS'
        return response

    # Bearer-token authentication for Flask-Login
    @login_manager.request_loader
    def load_user_from_request(request):
        import jwt
        from models.users import User
        from utils.tokens import bearer_token_from_header, decode_token

        token = bearer_token_from_header(request.headers.get('Authorization'))
        if token is None:
            return None
        try:
            payload = decode_token(token)
            user_id = int(payload['sub'])
        except (jwt.PyJWTError, KeyError, ValueError):
            return None
        user = db.session.get(User, user_id)
        if user is None or not user.is_active:
            return None
        return user

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify(message='Authentication required'), 401

    # Import models to ensure they're registered with SQLAlchemy
    with app.app_context():
        import models  # noqa: F401

    # Register blueprints
    from blueprints.auth import auth_bp
    from blueprints.items import items_bp
    from blueprints.family import family_bp
    from blueprints.health import health_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(items_bp)
    app.register_blueprint(family_bp)
    app.register_blueprint(health_bp)

    # Create database tables
    with app.app_context():
        if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') \
                and ':memory:' not in app.config['SQLALCHEMY_DATABASE_URI']:
            os.makedirs(app.instance_path, exist_ok=True)
        db.create_all()

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_commands(app)

    return app


def register_error_handlers(app):
    """Register global error handlers; every error leaves as JSON {message}"""

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify(message=error.description or error.name), error.code

    @app.errorhandler(429)
    def rate_limited(error):
        return jsonify(message='Too many requests. Please slow down.'), 429

    @app.errorhandler(OperationalError)
    def database_unavailable(error):
        db.session.rollback()
        app.logger.error(f'Database unavailable: {error}')
        return jsonify(message='Database unavailable. Please try again later.'), 503

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.error(f'Internal Server Error: {error}')
        return jsonify(message='Internal server error'), 500


def register_commands(app):
    """Register Flask CLI commands."""

    @app.cli.group()
    def users():
        """Inspect and manage user accounts."""
        pass

    @users.command('list')
    def list_users():
        """List all users with their home and role."""
        from models.users import User
        accounts = User.query.order_by(User.id).all()
        if not accounts:
            click.echo('No users found.')
            return
        click.echo(f'{"ID":<5} {"Email":<40} {"Home":<6} {"Role":<8} {"Active":<8}')
        click.echo('-' * 70)
        for u in accounts:
            click.echo(f'{u.id:<5} {u.email:<40} {str(u.home_id):<6} {u.role:<8} {str(u.is_active):<8}')

    @users.command('unlock')
    @click.argument('email')
    def unlock_user(email):
        """Clear failed logins and lockout for the user with EMAIL."""
        from models.users import User
        user = User.query.filter_by(email=email.strip().lower()).first()
        if not user:
            click.echo(f'ERROR: No user found with email "{email}"', err=True)
            return
        user.reset_failed_logins()
        click.echo(f'SUCCESS: "{user.email}" unlocked.')

    @app.cli.group()
    def homes():
        """Inspect homes and invite codes."""
        pass

    @homes.command('list')
    def list_homes():
        """List all homes with member and item counts."""
        from models.home import Home
        all_homes = Home.query.order_by(Home.id).all()
        if not all_homes:
            click.echo('No homes found.')
            return
        click.echo(f'{"ID":<5} {"Name":<30} {"Members":<8} {"Items":<8}')
        click.echo('-' * 55)
        for h in all_homes:
            click.echo(f'{h.id:<5} {h.name:<30} {h.members.count():<8} {h.items.count():<8}')

    @homes.command('rotate-code')
    @click.argument('home_id', type=int)
    def rotate_code(home_id):
        """Issue a new invite code for HOME_ID."""
        from models.home import Home, format_invite_code
        from services.home_service import HomeService
        home = db.session.get(Home, home_id)
        if home is None:
            click.echo(f'ERROR: No home with id {home_id}', err=True)
            return
        code = HomeService.rotate_invite_code(home)
        click.echo(f'SUCCESS: New invite code for "{home.name}": {format_invite_code(code)}')


if __name__ == '__main__':
    app = create_app()
    # SECURITY: Only bind to localhost in development
    # Never use 0.0.0.0 with debug mode - it exposes the debugger to the network
    app.run(host='127.0.0.1', port=5000, debug=True)
