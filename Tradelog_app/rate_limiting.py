# Tradelog_app/rate_limiting.py
"""
Rate limiting with Flask-Limiter; in-memory by default, Redis via
RATE_LIMIT_STORAGE_URI
"""

from flask_limiter.util import get_remote_address


def rate_limit_key():
    """Bearer user when the token verifies, otherwise the client address"""
    from .errors import InvalidToken
    from .tokens import bearer_token_from_request, verify

    token = bearer_token_from_request()
    if token:
        try:
            return f"user:{verify(token)['id']}"
        except InvalidToken:
            pass
    return get_remote_address()


def setup_rate_limiting(app):
    """Bind the shared limiter to the app"""
    from .extensions import limiter

    storage_uri = app.config.get('RATELIMIT_STORAGE_URI', 'memory://')
    if storage_uri.startswith('memory://'):
        app.logger.warning("Rate limiting using in-memory storage - not suitable for multi-worker production")
    else:
        app.logger.info("Rate limiting using external storage backend")

    limiter.init_app(app)
    return limiter
