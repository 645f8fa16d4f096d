"""
AutoStudio - Configuration
Environment-based configuration for different deployment stages
"""
import os
from datetime import timedelta


def _database_uri(default: str) -> str:
    """Resolve DATABASE_URL, handling the postgres:// prefix used by hosting providers"""
    db_url = os.environ.get('DATABASE_URL', '')
    if not db_url:
        return default
    if db_url.startswith('postgres://'):
        db_url = db_url.replace('postgres://', 'postgresql+psycopg://', 1)
    elif db_url.startswith('postgresql://'):
        db_url = db_url.replace('postgresql://', 'postgresql+psycopg://', 1)
    return db_url


class BaseConfig:
    """Base configuration"""

    # Flask - Secret key (required in production)
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')

    _is_production = os.environ.get('RENDER') or os.environ.get('FLASK_ENV') == 'production'
    if SECRET_KEY == 'dev-secret-key-change-in-production' and _is_production:
        import warnings
        warnings.warn("SECRET_KEY is using default dev value in production! Set SECRET_KEY env var.")

    # CORS
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')

    # Persistence - 'database' (SQLAlchemy) or 'file' (JSON blobs in DATA_DIR)
    STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'database')
    DATA_DIR = os.environ.get('DATA_DIR', './data')

    @property
    def SQLALCHEMY_DATABASE_URI(self):
        """Get database URI, falling back to SQLite for local development"""
        return _database_uri('sqlite:///autostudio.db')

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }

    # Gemini
    GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY', '')
    GEMINI_API_BASE = os.environ.get('GEMINI_API_BASE', 'https://generativelanguage.googleapis.com/v1beta')

    # Model selection
    SEARCH_MODEL = os.environ.get('SEARCH_MODEL', 'gemini-3-flash-preview')
    FALLBACK_MODEL = os.environ.get('FALLBACK_MODEL', 'gemini-flash-latest')
    ARTICLE_MODEL = os.environ.get('ARTICLE_MODEL', 'gemini-3-flash-preview')
    ARTICLE_PRO_MODEL = os.environ.get('ARTICLE_PRO_MODEL', 'gemini-3-pro-preview')
    AUDIT_MODEL = os.environ.get('AUDIT_MODEL', 'gemini-3-flash-preview')
    IMAGE_MODEL = os.environ.get('IMAGE_MODEL', 'gemini-2.5-flash-image')
    PROXY_MODEL = os.environ.get('PROXY_MODEL', 'gemini-1.5-flash')

    # Orchestration policy
    PRIMARY_TIMEOUT = float(os.environ.get('PRIMARY_TIMEOUT', '25'))
    FALLBACK_BACKOFF = float(os.environ.get('FALLBACK_BACKOFF', '1.5'))
    FALLBACK_ATTEMPTS = int(os.environ.get('FALLBACK_ATTEMPTS', '3'))
    REQUEST_TIMEOUT = float(os.environ.get('REQUEST_TIMEOUT', '180'))  # long article drafts

    # Member store
    MEMBER_WRITE_DELAY = float(os.environ.get('MEMBER_WRITE_DELAY', '0.8'))
    DEFAULT_ADMIN_KEY = os.environ.get('DEFAULT_ADMIN_KEY', 'admin123')

    # Trend auto-refresh
    SCHEDULER_ENABLED = os.environ.get('SCHEDULER_ENABLED', 'true').lower() == 'true'
    AUTO_REFRESH_MINUTES = int(os.environ.get('AUTO_REFRESH_MINUTES', '5'))

    # WordPress
    WP_TIMEOUT = int(os.environ.get('WP_TIMEOUT', '30'))

    # Activity log
    ACTIVITY_LOG_SIZE = int(os.environ.get('ACTIVITY_LOG_SIZE', '200'))

    # Rate limiting
    RATE_LIMIT_ENABLED = os.environ.get('RATE_LIMIT_ENABLED', 'true').lower() == 'true'
    RATE_LIMIT_DEFAULTS = os.environ.get('RATE_LIMIT_DEFAULTS', '200 per day;50 per hour')

    # JWT Auth
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY', SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.environ.get('JWT_EXPIRES_HOURS', '24')))


class DevelopmentConfig(BaseConfig):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(BaseConfig):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    @property
    def SQLALCHEMY_DATABASE_URI(self):
        """Production requires DATABASE_URL"""
        return _database_uri('')


class TestingConfig(BaseConfig):
    """Testing configuration"""
    DEBUG = True
    TESTING = True

    @property
    def SQLALCHEMY_DATABASE_URI(self):
        """Always in-memory SQLite"""
        return 'sqlite:///:memory:'

    STORAGE_BACKEND = 'database'
    GEMINI_API_KEY = 'test-key'
    MEMBER_WRITE_DELAY = 0.0
    FALLBACK_BACKOFF = 0.0
    PRIMARY_TIMEOUT = 2.0
    SCHEDULER_ENABLED = False
    RATE_LIMIT_ENABLED = False
    JWT_SECRET_KEY = 'test-jwt-secret'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config():
    """Get current config object"""
    env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
