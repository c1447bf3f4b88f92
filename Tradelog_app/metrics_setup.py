# Tradelog_app/metrics_setup.py
"""
Prometheus metrics setup and initialization
"""

import time

from flask import current_app, g, request
from prometheus_client import Counter, Histogram, Info

# Registered once per process; apps created later only attach hooks.
REQUEST_COUNT = Counter(
    'tradelog_http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)
REQUEST_LATENCY = Histogram(
    'tradelog_http_request_duration_seconds',
    'HTTP request latency',
    ['method', 'endpoint']
)
TRADE_MUTATIONS = Counter(
    'tradelog_trade_mutations_total',
    'Trade create/update/delete operations',
    ['operation']
)
APP_INFO = Info('tradelog_app', 'Application information')


def record_trade_mutation(operation):
    if current_app.config.get('METRICS_ENABLED'):
        TRADE_MUTATIONS.labels(operation=operation).inc()


def setup_metrics(app):
    """Attach request metrics hooks if enabled"""

    if not app.config.get('METRICS_ENABLED'):
        app.logger.info("Metrics disabled - set ENABLE_METRICS=true to enable")
        return False

    APP_INFO.info({
        'version': app.config.get('APP_VERSION', 'unknown'),
        'environment': app.config.get('TRADELOG_ENV', 'unknown'),
    })

    @app.before_request
    def start_timer():
        g.start_time = time.time()

    @app.after_request
    def record_request(response):
        if hasattr(g, 'start_time'):
            duration = time.time() - g.start_time
            endpoint = request.endpoint or 'unknown'
            REQUEST_COUNT.labels(
                method=request.method,
                endpoint=endpoint,
                status=response.status_code
            ).inc()
            REQUEST_LATENCY.labels(method=request.method, endpoint=endpoint).observe(duration)
        return response

    app.logger.info("Prometheus metrics initialized")
    return True
