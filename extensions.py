"""
Flask extensions initialization.

This module centralizes all Flask extension instances to avoid circular imports
and make dependency injection easier.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_talisman import Talisman
from flask_migrate import Migrate
from flask_cors import CORS

from constants import DEFAULT_RATE_LIMITS, REQUEST_ID_HEADER

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
cors = CORS()

# Rate limiting configuration
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=DEFAULT_RATE_LIMITS,
)

# Security headers configuration
talisman = Talisman()


def init_extensions(app, settings):
    """
    Initialize all Flask extensions with the app instance.

    Args:
        app: Flask application instance
        settings: Settings the app was built from
    """
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    cors.init_app(
        app,
        origins=list(settings.cors_origins),
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )

    # Only enable Talisman in production
    if not app.config.get('DEBUG', False):
        talisman.init_app(
            app,
            # JSON API: nothing to load, nothing to frame
            content_security_policy={'default-src': "'none'"},
            force_https=True,
            strict_transport_security=True,
            strict_transport_security_max_age=31536000,
        )
