# tests/test_operational_features.py
"""
Tests for operational features (health endpoints, headers, metrics, rate limiting, logging)
"""

import logging
from unittest.mock import patch

from Tradelog_app.logging_config import SecretMaskingFilter
from conftest import make_app


def test_api_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    data = response.get_json()
    assert data['success'] is True
    assert 'timestamp' in data


def test_healthz_and_livez():
    app = make_app(APP_VERSION='test-1.0')
    client = app.test_client()

    data = client.get('/healthz').get_json()
    assert data['status'] == 'ok'
    assert data['version'] == 'test-1.0'
    assert data['service'] == 'tradelog'

    response = client.get('/livez')
    assert response.status_code == 200
    assert response.get_json()['status'] == 'ok'


def test_readyz_checks_database(client):
    response = client.get('/readyz')
    assert response.status_code == 200
    assert response.get_json()['checks'] == {'database': True}


def test_readyz_reports_database_failure(client):
    with patch('Tradelog_app.health_routes._check_database', side_effect=RuntimeError('down')):
        response = client.get('/readyz')
    assert response.status_code == 503
    data = response.get_json()
    assert data['status'] == 'error'
    assert data['success'] is False


def test_security_headers_present(client):
    response = client.get('/api/health')
    assert response.headers['X-Frame-Options'] == 'DENY'
    assert response.headers['X-Content-Type-Options'] == 'nosniff'
    assert 'Content-Security-Policy' in response.headers


def test_request_id_is_echoed_or_generated(client):
    response = client.get('/api/health', headers={'X-Request-ID': 'abc-123'})
    assert response.headers['X-Request-ID'] == 'abc-123'

    response = client.get('/api/health')
    assert len(response.headers['X-Request-ID']) == 36


def test_unknown_route_and_wrong_method_are_json(client):
    response = client.get('/api/nope')
    assert response.status_code == 404
    assert response.get_json()['success'] is False

    response = client.patch('/api/trades')
    assert response.status_code == 405
    assert response.get_json()['success'] is False


def test_oversized_body_is_rejected():
    app = make_app(MAX_CONTENT_LENGTH=64)
    client = app.test_client()
    response = client.post('/auth/register', json={'email': 'a@x.com', 'password': 'x' * 200})
    assert response.status_code == 413


def test_metrics_disabled_by_default(client):
    assert client.get('/metrics').status_code == 404


def test_metrics_enabled():
    app = make_app(METRICS_ENABLED=True)
    client = app.test_client()
    client.get('/api/health')
    response = client.get('/metrics')
    assert response.status_code == 200
    assert b'tradelog_http_requests_total' in response.data


def test_auth_routes_are_rate_limited():
    app = make_app(RATELIMIT_ENABLED=True, RATE_LIMIT_AUTH='2/minute')
    client = app.test_client()
    body = {'email': 'limit@x.com', 'password': 'wrong-pass'}

    assert client.post('/auth/login', json=body).status_code == 401
    assert client.post('/auth/login', json=body).status_code == 401
    response = client.post('/auth/login', json=body)
    assert response.status_code == 429
    assert response.get_json()['success'] is False


def test_secret_masking_filter():
    record = logging.LogRecord(
        'test', logging.INFO, __file__, 1,
        'login attempt password=hunter22 token: abc.def.ghi', None, None,
    )
    SecretMaskingFilter().filter(record)
    assert 'hunter22' not in record.msg
    assert 'abc.def.ghi' not in record.msg
