# tests/test_client_integration.py
"""
TradeApiClient and TradeDashboard driven against the real app through the
Flask test client.
"""

from dataclasses import replace
from datetime import date
from urllib.parse import urlsplit

import pytest
import requests

from Tradelog_app.dashboard import (
    ApiError, Notifier, SessionExpired, TokenStore, TradeApiClient, TradeDashboard, TradeFormInput,
)


class FlaskResponse:
    def __init__(self, response):
        self.status_code = response.status_code
        self.ok = response.status_code < 400
        self._response = response

    def json(self):
        data = self._response.get_json(silent=True)
        if data is None:
            raise ValueError("No JSON body")
        return data


class FlaskSession:
    """Just enough of requests.Session for TradeApiClient"""

    def __init__(self, test_client):
        self.test_client = test_client

    def request(self, method, url, json=None, headers=None, timeout=None):
        path = urlsplit(url).path
        response = self.test_client.open(path, method=method, json=json, headers=headers)
        return FlaskResponse(response)


class DownSession:
    def request(self, *args, **kwargs):
        raise requests.ConnectionError("connection refused")


@pytest.fixture
def token_store(tmp_path):
    return TokenStore(tmp_path / 'session.json')


@pytest.fixture
def api(client, token_store):
    return TradeApiClient(base_url='http://testserver', token_store=token_store,
                          session=FlaskSession(client))


def test_full_scenario(api, token_store):
    api.register('trader@x.com', 'secret1')
    api.login('trader@x.com', 'secret1')
    assert api.is_logged_in
    assert token_store.email == 'trader@x.com'

    board = TradeDashboard(api, notifier=Notifier(), today=lambda: date(2024, 1, 10))
    board.load()
    assert board.view.page_info == "No trades"

    form = TradeFormInput(date=date(2024, 1, 5), symbol='aapl', strike_price=150.0,
                          option_type='Call', quantity=2, buy_price=1.5, sell_price=2.0)
    assert board.save_trade(form) is True

    row = board.view.rows[0]
    assert row.symbol == 'AAPL'
    assert row.pl == pytest.approx(1.0)
    assert row.return_pct == pytest.approx(33.33, abs=0.01)
    assert board.view.summary.win_rate == 100.0

    edit = board.dispatch('edit', row.id)
    assert board.save_trade(replace(edit, sell_price=1.0)) is True
    assert board.view.rows[0].pl == pytest.approx(-1.0)
    assert board.view.summary.wins == 0

    assert board.dispatch('delete', row.id) is True
    assert board.view.rows == ()


def test_login_failure_raises_api_error(api, token_store):
    with pytest.raises(ApiError) as exc:
        api.login('nobody@x.com', 'secret1')
    assert exc.value.status_code == 401
    assert exc.value.message == 'Invalid credentials'
    assert token_store.token is None


def test_validation_message_is_surfaced(api):
    api.register('v@x.com', 'secret1')
    api.login('v@x.com', 'secret1')
    with pytest.raises(ApiError) as exc:
        api.create_trade({'symbol': 'AAPL'})
    assert exc.value.status_code == 400
    assert 'Missing required field' in exc.value.message


def test_rejected_token_clears_session(api, token_store):
    token_store.save('not.a.jwt', 'ghost@x.com')
    with pytest.raises(SessionExpired):
        api.list_trades()
    assert token_store.token is None
    assert not api.is_logged_in


def test_no_token_means_session_expired(api):
    with pytest.raises(SessionExpired):
        api.list_trades()


def test_unreachable_server(token_store):
    api = TradeApiClient(base_url='http://127.0.0.1:9', token_store=token_store, session=DownSession())
    with pytest.raises(ApiError) as exc:
        api.health()
    assert exc.value.status_code == 0


def test_health(api):
    assert api.health()['success'] is True


def test_logout_forgets_token(api, token_store):
    api.register('out@x.com', 'secret1')
    api.login('out@x.com', 'secret1')
    api.logout()
    assert token_store.load() == (None, None)


def test_corrupt_session_file_is_ignored(token_store):
    token_store.path.write_text('{not json')
    assert token_store.load() == (None, None)


def test_session_file_is_owner_only(token_store):
    token_store.save('abc', 'p@x.com')
    assert token_store.path.stat().st_mode & 0o777 == 0o600
    assert token_store.load() == ('abc', 'p@x.com')

    token_store.path.chmod(0o644)
    token_store.save('def', 'p@x.com')
    assert token_store.path.stat().st_mode & 0o777 == 0o600
