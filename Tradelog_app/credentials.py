# Tradelog_app/credentials.py

from flask import current_app
from sqlalchemy.exc import IntegrityError

from .extensions import db
from .errors import DuplicateEmailError, InvalidCredentials
from .models import User
from .validation import validate_email, validate_password


def register(email, password):
    """Create a user and return its id"""
    email = validate_email(email)
    password = validate_password(password, current_app.config.get('PASSWORD_MIN_LENGTH', 6))

    if User.query.filter_by(email=email).first():
        raise DuplicateEmailError()

    user = User(email=email)
    user.set_password(password, method=current_app.config.get('PASSWORD_HASH_METHOD', 'scrypt'))
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # lost a race with a concurrent registration for the same email
        db.session.rollback()
        raise DuplicateEmailError()

    current_app.logger.info("User registered", extra={'user_id': user.id})
    return user.id


def authenticate(email, password):
    """Return the user for valid credentials.

    Unknown email, wrong password and missing fields all raise the same
    InvalidCredentials so callers cannot probe which accounts exist.
    """
    if not isinstance(email, str) or not isinstance(password, str):
        raise InvalidCredentials()

    user = User.query.filter_by(email=email.strip()).first()
    if user is None or not user.check_password(password):
        raise InvalidCredentials()
    return user


def delete_user(user_id):
    """Remove a user; their trades go with them. Returns False if absent."""
    user = db.session.get(User, user_id)
    if user is None:
        return False
    db.session.delete(user)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info("User deleted", extra={'user_id': user_id})
    return True
