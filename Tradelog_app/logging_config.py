# Tradelog_app/logging_config.py
"""
Structured JSON logging configuration with request ID propagation and secret filtering
"""

import re
import logging
import time
import uuid
from flask import request, g, has_request_context
from pythonjsonlogger.json import JsonFormatter


class SecretMaskingFilter(logging.Filter):
    """Filter to mask secrets in log messages"""

    # Pattern to match secret-like field names (case insensitive)
    SECRET_PATTERNS = [
        re.compile(r'(password|secret|token|authorization|bearer)[\'"]*\s*[:=]\s*[\'"]?([^\'",\s]+)', re.IGNORECASE),
        re.compile(r'("password"|"secret"|"token"|"authorization")\s*:\s*"([^"]+)"', re.IGNORECASE),
    ]

    def _mask(self, text):
        for pattern in self.SECRET_PATTERNS:
            text = pattern.sub(r'\1: ****', text)
        return text

    def filter(self, record):
        if isinstance(record.msg, str):
            record.msg = self._mask(record.msg)

        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                self._mask(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        return True


class RequestIDFormatter(JsonFormatter):
    """JSON formatter that includes request context"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = self.formatTime(record, self.datefmt)

        if has_request_context():
            log_record['request_id'] = getattr(g, 'request_id', None)
            log_record['path'] = request.path
            log_record['method'] = request.method
            log_record['remote_addr'] = request.remote_addr

            current_user = getattr(g, 'current_user', None)
            if current_user and 'user_id' not in log_record:
                log_record['user_id'] = current_user.get('id')


def setup_logging(app):
    """Setup structured JSON logging for the application"""

    formatter = RequestIDFormatter(
        '%(timestamp)s %(levelname)s %(name)s %(message)s',
        rename_fields={
            'levelname': 'level',
            'name': 'logger',
        }
    )

    if app.logger.handlers:
        handler = app.logger.handlers[0]
    else:
        handler = logging.StreamHandler()
        app.logger.addHandler(handler)

    handler.setFormatter(formatter)
    if not any(isinstance(f, SecretMaskingFilter) for f in handler.filters):
        handler.addFilter(SecretMaskingFilter())

    log_level = app.config.get('LOG_LEVEL', 'INFO')
    app.logger.setLevel(getattr(logging, log_level, logging.INFO))
    handler.setLevel(getattr(logging, log_level, logging.INFO))

    app.logger.info("Structured JSON logging configured", extra={
        'log_level': log_level,
        'handler_class': handler.__class__.__name__
    })


def generate_request_id():
    return str(uuid.uuid4())


def setup_request_id_middleware(app):
    """Generate/propagate X-Request-ID and log one line per request"""

    @app.before_request
    def assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or generate_request_id()
        g.request_started = time.time()

    @app.after_request
    def log_and_tag_response(response):
        if hasattr(g, 'request_id'):
            response.headers['X-Request-ID'] = g.request_id
        elapsed_ms = (time.time() - g.request_started) * 1000 if hasattr(g, 'request_started') else None
        app.logger.info(f"➡️ [{request.method}] {request.path}", extra={
            'status': response.status_code,
            'duration_ms': round(elapsed_ms, 2) if elapsed_ms is not None else None,
        })
        return response
