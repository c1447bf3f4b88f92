# tests/conftest.py
import pytest

from Tradelog_app import create_app

TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'JWT_SECRET_KEY': 'test-secret',
    'TRADELOG_ENV': 'development',
    'RATELIMIT_ENABLED': False,
    'METRICS_ENABLED': False,
    # fast hashes; production default is scrypt
    'PASSWORD_HASH_METHOD': 'pbkdf2:sha256:1000',
    'LOG_LEVEL': 'WARNING',
}

SAMPLE_TRADE = {
    'date': '2024-01-05',
    'symbol': 'aapl',
    'strikePrice': 150,
    'optionType': 'Call',
    'quantity': 2,
    'buyPrice': 1.5,
    'sellPrice': 2.0,
    'pl': 1.0,
    'returnPct': 33.33,
}


def make_app(**overrides):
    config = dict(TEST_CONFIG)
    config.update(overrides)
    return create_app(config)


@pytest.fixture
def app():
    app = make_app()
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def login_headers(client, email='a@x.com', password='secret1'):
    """Register (if needed) and log in; returns bearer headers"""
    client.post('/auth/register', json={'email': email, 'password': password})
    response = client.post('/auth/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.get_json()
    return {'Authorization': f"Bearer {response.get_json()['token']}"}


@pytest.fixture
def auth_headers(client):
    return login_headers(client)


@pytest.fixture
def sample_trade():
    return dict(SAMPLE_TRADE)
