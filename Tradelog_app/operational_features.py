# Tradelog_app/operational_features.py
"""
Integration module for all operational features.
Installs logging, security headers, rate limiting, metrics and health routes.
"""

from flask import Flask


def setup_operational_features(app: Flask):
    """
    Setup all operational features for the Flask app and return a summary
    of what was enabled.
    """

    # 1. Structured logging and request ID propagation
    from .logging_config import setup_logging, setup_request_id_middleware
    setup_logging(app)
    setup_request_id_middleware(app)

    # 2. Security middleware
    from .security_middleware import setup_security_middleware
    setup_security_middleware(app)

    # 3. Rate limiting
    from .rate_limiting import setup_rate_limiting
    setup_rate_limiting(app)

    # 4. Metrics if enabled
    from .metrics_setup import setup_metrics
    metrics_enabled = setup_metrics(app)

    # 5. Health and metrics endpoints
    from .health_routes import health_bp
    from .metrics_routes import metrics_bp
    app.register_blueprint(health_bp)
    app.register_blueprint(metrics_bp)

    app.logger.info("🚀 Operational features setup complete!")

    return {
        'logging': True,
        'security': True,
        'rate_limiting': bool(app.config.get('RATELIMIT_ENABLED')),
        'metrics': metrics_enabled,
        'health_endpoints': ['/api/health', '/healthz', '/livez', '/readyz'],
    }
