import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from constants import CLERK_API_URL


def _database_url() -> str:
    # Fix Heroku postgres:// URL to postgresql://
    database_url = os.environ.get('DATABASE_URL') or 'sqlite:///recipe_box.db'
    if database_url.startswith('postgres://'):
        database_url = database_url.replace('postgres://', 'postgresql://', 1)
    return database_url


def _split_origins(raw: str) -> Tuple[str, ...]:
    origins = tuple(origin.strip() for origin in raw.split(',') if origin.strip())
    return origins or ('*',)


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, built once at startup and passed down."""

    env: str = 'development'
    secret_key: str = 'dev-secret-key'
    database_url: str = 'sqlite:///recipe_box.db'
    clerk_secret_key: Optional[str] = None
    clerk_api_url: str = CLERK_API_URL
    api_base_url: str = 'http://localhost:3000'
    cors_origins: Tuple[str, ...] = field(default=('*',))
    port: int = 3000

    @classmethod
    def from_env(cls) -> 'Settings':
        """Read settings from the environment (and .env, once loaded)."""
        return cls(
            env=os.environ.get('FLASK_ENV', 'development'),
            secret_key=os.environ.get('SECRET_KEY') or 'dev-secret-key',
            database_url=_database_url(),
            clerk_secret_key=os.environ.get('CLERK_SECRET_KEY') or None,
            clerk_api_url=os.environ.get('CLERK_API_URL', CLERK_API_URL),
            api_base_url=os.environ.get('API_URL', 'http://localhost:3000'),
            cors_origins=_split_origins(os.environ.get('CORS_ORIGINS', '*')),
            port=int(os.environ.get('PORT') or 3000),
        )


class Config:
    """Base configuration"""
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = 'memory://'


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    RATELIMIT_ENABLED = False


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
