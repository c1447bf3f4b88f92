# Tradelog_app/tokens.py
"""
Bearer token issue/verify (HS256 JWT) and the ``token_required`` guard.

The signing key is resolved once by ``configure_signing_key`` during app
creation. Outside production a fixed development key is installed with a
warning; in production a missing key aborts startup.
"""

from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt
from flask import current_app, g, request

from .extensions import db
from .errors import InvalidToken

DEV_SIGNING_KEY = "tradelog-dev-only-signing-key"


def configure_signing_key(app):
    if app.config.get('JWT_SECRET_KEY'):
        return
    if app.config.get('TRADELOG_ENV') == 'production':
        raise RuntimeError(
            "TRADELOG_JWT_SECRET must be set when TRADELOG_ENV=production"
        )
    app.config['JWT_SECRET_KEY'] = DEV_SIGNING_KEY
    app.logger.warning(
        "⚠️ TRADELOG_JWT_SECRET not set - using development signing key (DEV ONLY)"
    )


def issue(user_id, email):
    now = datetime.now(timezone.utc)
    ttl = timedelta(hours=current_app.config.get('TOKEN_TTL_HOURS', 24))
    payload = {
        'id': user_id,
        'email': email,
        'iat': now,
        'exp': now + ttl,
    }
    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET_KEY'],
        algorithm=current_app.config.get('JWT_ALGORITHM', 'HS256'),
    )


def verify(token):
    """Decode a token into its claims.

    Bad signature, malformed input and expiry all raise the same InvalidToken.
    """
    if not token:
        raise InvalidToken()
    try:
        claims = jwt.decode(
            token,
            current_app.config['JWT_SECRET_KEY'],
            algorithms=[current_app.config.get('JWT_ALGORITHM', 'HS256')],
            options={'require': ['exp', 'iat']},
        )
    except jwt.InvalidTokenError:
        raise InvalidToken()

    if not isinstance(claims.get('id'), int) or not claims.get('email'):
        raise InvalidToken()
    return claims


def bearer_token_from_request():
    auth = request.headers.get('Authorization', '')
    scheme, _, token = auth.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def token_required(view_func):
    @wraps(view_func)
    def wrapped(*args, **kwargs):
        from .models import User

        token = bearer_token_from_request()
        if token is None:
            raise InvalidToken("Missing token")
        claims = verify(token)
        if db.session.get(User, claims['id']) is None:
            raise InvalidToken()
        g.current_user = claims
        return view_func(*args, **kwargs)
    return wrapped
