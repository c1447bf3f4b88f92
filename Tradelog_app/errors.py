# Tradelog_app/errors.py
"""
Error taxonomy and the JSON error boundary.

Every failure leaves the API as ``{"success": false, "message": ...}``.
Unexpected exceptions are logged with their traceback and answered with a
generic 500 so nothing internal reaches the client.
"""

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException


class TradelogError(Exception):
    """Base class for errors that carry a client-safe message and HTTP status."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self):
        return jsonify({'success': False, 'message': self.message}), self.status_code


class ValidationError(TradelogError):
    status_code = 400
    default_message = "Invalid request"


class DuplicateEmailError(TradelogError):
    status_code = 400
    default_message = "User already exists"


class InvalidCredentials(TradelogError):
    status_code = 401
    default_message = "Invalid credentials"


class InvalidToken(TradelogError):
    status_code = 401
    default_message = "Invalid token"


class NotFoundOrForbidden(TradelogError):
    status_code = 404
    default_message = "Trade not found"


class InternalError(TradelogError):
    status_code = 500


def register_error_handlers(app):
    """Install the JSON error boundary on the app"""

    @app.errorhandler(TradelogError)
    def handle_tradelog_error(error):
        if error.status_code >= 500:
            current_app.logger.error(f"Internal error: {error.message}")
            return InternalError().to_response()
        current_app.logger.info("Request rejected", extra={
            'error': error.__class__.__name__,
            'status': error.status_code,
        })
        return error.to_response()

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        message = error.description if error.code != 500 else InternalError.default_message
        return jsonify({'success': False, 'message': message}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        current_app.logger.exception(f"Unhandled exception: {error.__class__.__name__}")
        return InternalError().to_response()
