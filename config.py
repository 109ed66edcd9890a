import os


def _env_flag(name, default='true'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')

    # Database Settings
    _database_url = os.environ.get('DATABASE_URL')
    if not _database_url:
        # Assemble from individual PG* variables if DATABASE_URL is missing
        pg_user = os.environ.get('PGUSER')
        pg_pass = os.environ.get('PGPASSWORD')
        pg_host = os.environ.get('PGHOST')
        pg_port = os.environ.get('PGPORT')
        pg_db = os.environ.get('PGDATABASE')
        if all([pg_user, pg_pass, pg_host, pg_port, pg_db]):
            _database_url = f"postgresql://{pg_user}:{pg_pass}@{pg_host}:{pg_port}/{pg_db}"

    if _database_url and _database_url.startswith("postgres://"):
        _database_url = _database_url.replace("postgres://", "postgresql://", 1)

    SQLALCHEMY_DATABASE_URI = _database_url or 'sqlite:///portfolio.db'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    MAX_CONTENT_LENGTH = 10 * 1024 * 1024  # 10MB
    JSON_AS_ASCII = False

    # Admin Settings
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')

    # Contact notification e-mail
    NOTIFICATIONS_ENABLED = _env_flag('NOTIFICATIONS_ENABLED')
    EMAIL_HOST = os.environ.get('EMAIL_HOST', 'smtp.gmail.com')
    EMAIL_PORT = int(os.environ.get('EMAIL_PORT', '587'))
    EMAIL_USER = os.environ.get('EMAIL_USER')
    EMAIL_PASSWORD = os.environ.get('EMAIL_PASSWORD')
    EMAIL_FROM = os.environ.get('EMAIL_FROM')
    EMAIL_TO = os.environ.get('EMAIL_TO')
    EMAIL_TIMEOUT = float(os.environ.get('EMAIL_TIMEOUT', '10'))
    EMAIL_USE_TLS = _env_flag('EMAIL_USE_TLS')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = False
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # For in-memory SQLite during tests, keep engine options empty to avoid
    # passing invalid pool settings like pool_size to SQLite's StaticPool.
    SQLALCHEMY_ENGINE_OPTIONS = {}
    NOTIFICATIONS_ENABLED = False
    ADMIN_USERNAME = 'admin'
    ADMIN_PASSWORD = 'admin-secret'


class ClientConfig:
    """Settings for the submission client (the browser-side controller)"""

    API_BASE_URL = os.environ.get('PORTFOLIO_API_URL', 'http://localhost:3000/api')
    REQUEST_TIMEOUT = float(os.environ.get('PORTFOLIO_REQUEST_TIMEOUT', '10'))
    FALLBACK_PATH = os.environ.get('PORTFOLIO_FALLBACK_PATH', 'local_storage.json')
    BANNER_TIMEOUT = 5  # seconds


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}

def get_config(config_name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
