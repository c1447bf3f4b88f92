# Tradelog_app/metrics_routes.py
"""
Prometheus metrics endpoint, opt-in via ENABLE_METRICS=true
"""

from flask import Blueprint, Response, current_app
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from werkzeug.exceptions import NotFound

metrics_bp = Blueprint('metrics', __name__)


@metrics_bp.route('/metrics', methods=['GET'])
def prometheus_metrics():
    """Returns 404 while metrics are disabled"""
    if not current_app.config.get('METRICS_ENABLED'):
        raise NotFound("Metrics endpoint is disabled")
    return Response(generate_latest(), content_type=CONTENT_TYPE_LATEST)
