# Tradelog_app/health_routes.py
"""
Health and observability endpoints for operational monitoring
"""

from datetime import datetime, timezone
from flask import Blueprint, jsonify, current_app

from .extensions import db

health_bp = Blueprint('health', __name__)


def _now():
    return datetime.now(timezone.utc).isoformat()


def _check_database():
    db.session.execute(db.text('SELECT 1'))


@health_bp.route('/api/health', methods=['GET'])
def api_health():
    """Public health probe used by the dashboard"""
    return jsonify({'success': True, 'timestamp': _now()})


@health_bp.route('/healthz', methods=['GET'])
def health_check():
    """
    Fast, in-process health check - returns ok + version + time
    This should always be fast and not depend on external services.
    """
    return jsonify({
        'success': True,
        'status': 'ok',
        'version': current_app.config.get('APP_VERSION', 'unknown'),
        'timestamp': _now(),
        'service': 'tradelog'
    })


@health_bp.route('/livez', methods=['GET'])
def liveness_check():
    """Liveness check - always returns ok if process is alive"""
    return jsonify({'success': True, 'status': 'ok', 'timestamp': _now()})


@health_bp.route('/readyz', methods=['GET'])
def readiness_check():
    """Readiness check - verifies DB connectivity"""
    checks = {'database': False}
    overall_status = 'ok'

    try:
        _check_database()
        checks['database'] = True
    except Exception as e:
        current_app.logger.error(f"Database health check failed: {e}")
        db.session.rollback()
        overall_status = 'error'

    response_data = {
        'success': overall_status == 'ok',
        'status': overall_status,
        'timestamp': _now(),
        'checks': checks
    }
    status_code = 200 if overall_status == 'ok' else 503
    return jsonify(response_data), status_code
