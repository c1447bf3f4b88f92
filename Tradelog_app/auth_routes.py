# Tradelog_app/auth_routes.py

from flask import Blueprint, request, jsonify, current_app

from . import credentials, tokens
from .extensions import limiter
from .validation import require_json_object

auth = Blueprint('auth', __name__, url_prefix='/auth')


def _auth_limit():
    return current_app.config.get('RATE_LIMIT_AUTH', '10/minute')


@auth.route('/register', methods=['POST'])
@limiter.limit(_auth_limit)
def register():
    """Create an account"""
    data = require_json_object(request.get_json(silent=True))
    credentials.register(data.get('email'), data.get('password'))
    return jsonify({'success': True, 'message': 'User registered'})


@auth.route('/login', methods=['POST'])
@limiter.limit(_auth_limit)
def login():
    """Exchange email/password for a bearer token"""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        data = {}
    user = credentials.authenticate(data.get('email'), data.get('password'))
    token = tokens.issue(user.id, user.email)
    current_app.logger.info("User logged in", extra={'user_id': user.id})
    return jsonify({'success': True, 'token': token})
