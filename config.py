import os
from datetime import timedelta


class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///league.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Identity tokens
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or 'dev-jwt-secret-change-in-production'
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRES_IN = timedelta(minutes=int(os.environ.get('JWT_EXPIRES_MINUTES', 480)))

    # Password hashing cost
    BCRYPT_ROUNDS = int(os.environ.get('BCRYPT_ROUNDS', 12))

    # Domain policy
    ADMIN_OVERRIDE_ACTIONS = ('create', 'update', 'delete')
    TEAM_ENFORCE_MEMBER_ROLES = True
    GAME_ALLOW_RESULT_RESET = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_JSON = False

    # Rate limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = 'memory://'
    LOGIN_RATE_LIMIT = '10 per minute'


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    JWT_SECRET_KEY = 'test-jwt-secret'
    BCRYPT_ROUNDS = 4
    RATELIMIT_ENABLED = False
    LOG_LEVEL = 'WARNING'


class ProductionConfig(Config):
    DEBUG = False
    LOG_JSON = True


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig,
}
