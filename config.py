import os
from datetime import timedelta


class Config:
    """Base configuration"""

    # Secret key for session management
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Bearer tokens
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or SECRET_KEY
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRES_IN = timedelta(days=7)

    # Database configuration
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(os.path.abspath(os.path.dirname(__file__)), 'instance', 'myhome.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False  # Set to True for SQL query logging during development

    # Rate Limiting
    RATELIMIT_STORAGE_URI = 'memory://'
    RATELIMIT_STRATEGY = 'fixed-window'
    RATELIMIT_HEADERS_ENABLED = True

    # Security Headers
    SECURITY_HEADERS = {
        'Strict-Transport-Security': 'max-age=31536000; includeSubDomains',
        'X-Content-Type-Options': 'nosniff',
        'X-Frame-Options': 'SAMEORIGIN',
        'Referrer-Policy': 'strict-origin-when-cross-origin'
    }

    # The single-page client is served from another origin during development
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')

    # Flask-Migrate configuration
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }

    # Password Requirements
    PASSWORD_MIN_LENGTH = 6
    PASSWORD_REQUIRE_UPPERCASE = False
    PASSWORD_REQUIRE_LOWERCASE = False
    PASSWORD_REQUIRE_DIGIT = False
    PASSWORD_REQUIRE_SPECIAL = False

    # Login Security
    MAX_LOGIN_ATTEMPTS = 5
    LOCKOUT_DURATION = timedelta(minutes=15)

    # Family sharing
    INVITE_CODE_LIFETIME = timedelta(days=7)

    # Item images are stored inline as data URLs
    MAX_IMAGE_BYTES = 2 * 1024 * 1024
    MAX_CONTENT_LENGTH = 4 * 1024 * 1024


class DevelopmentConfig(Config):
    """Development configuration"""
    # Safe for localhost development, but disable before sharing/deploying
    DEBUG = True
    SQLALCHEMY_ECHO = False  # Set to True only when debugging SQL queries


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False

    # MUST set these environment variables in production
    SECRET_KEY = os.environ.get('SECRET_KEY')  # Generate with: python -c 'import secrets; print(secrets.token_hex(32))'
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or os.environ.get('SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or os.environ.get('SQLALCHEMY_DATABASE_URI')
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '')

    PREFERRED_URL_SCHEME = 'https'

    # Validate required settings
    @classmethod
    def init_app(cls, app):
        Config.init_app(app)

        if not app.config.get('JWT_SECRET_KEY'):
            raise ValueError("JWT_SECRET_KEY (or SECRET_KEY) environment variable must be set in production!")

        # Warn if using SQLite in production
        if 'sqlite' in (app.config.get('SQLALCHEMY_DATABASE_URI') or ''):
            import warnings
            warnings.warn("Using SQLite in production is not recommended. Use PostgreSQL or MySQL.")


# Add init_app to base config
Config.init_app = classmethod(lambda cls, app: None)


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RATELIMIT_ENABLED = False
    JWT_SECRET_KEY = 'testing-jwt-secret-key-of-sufficient-length'


class ClientConfig:
    """Settings for the single-page client controller"""
    API_BASE_URL = os.environ.get('MYHOME_API_URL') or 'http://127.0.0.1:5000'
    # None means requests wait indefinitely, same as the browser client
    API_TIMEOUT = float(os.environ['MYHOME_API_TIMEOUT']) if os.environ.get('MYHOME_API_TIMEOUT') else None
    SESSION_FILE = os.environ.get('MYHOME_SESSION_FILE') or \
        os.path.join(os.path.expanduser('~'), '.myhome', 'session.json')
    APP_VERSION = '1.0.0'


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
