# Tradelog_app/security_middleware.py
"""
Security headers and request size limits
"""

import os
from flask import request, abort


def setup_security_headers(app):
    """Setup security headers middleware"""

    csp = os.environ.get('SECURITY_CSP', "default-src 'none'; frame-ancestors 'none'")

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Referrer-Policy'] = 'no-referrer'
        response.headers['Content-Security-Policy'] = csp
        # bearer-token responses are per-user
        if request.path.startswith(('/api/trades', '/auth/')):
            response.headers['Cache-Control'] = 'no-store'
        return response


def setup_request_size_limits(app):
    """Setup request size limiting middleware"""

    max_content_length = app.config.get('MAX_CONTENT_LENGTH') or 1024 * 1024
    app.config['MAX_CONTENT_LENGTH'] = max_content_length

    @app.before_request
    def limit_request_size():
        if request.content_length and request.content_length > max_content_length:
            abort(413, "Request entity too large")


def setup_security_middleware(app):
    """Setup all security middleware"""
    setup_security_headers(app)
    setup_request_size_limits(app)

    app.logger.info("Security middleware configured", extra={
        'max_request_bytes': app.config.get('MAX_CONTENT_LENGTH'),
    })
