# tests/test_trades_api.py
"""
Owner-scoped trade CRUD over the JSON API
"""

import pytest

from conftest import login_headers


def _create(client, headers, trade):
    response = client.post('/api/trades', json=trade, headers=headers)
    assert response.status_code == 200, response.get_json()
    return response.get_json()['id']


def test_scenario_symbol_is_upper_cased(client, auth_headers, sample_trade):
    response = client.post('/api/trades', json=sample_trade, headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()['success'] is True

    response = client.get('/api/trades', headers=auth_headers)
    assert response.status_code == 200
    rows = response.get_json()
    assert len(rows) == 1
    assert rows[0]['symbol'] == 'AAPL'


def test_round_trip_preserves_fields(client, auth_headers, sample_trade):
    trade_id = _create(client, auth_headers, sample_trade)
    row = client.get('/api/trades', headers=auth_headers).get_json()[0]

    assert row['id'] == trade_id
    assert row['trade_date'] == '2024-01-05'
    assert row['symbol'] == 'AAPL'
    assert row['strike_price'] == 150
    assert row['option_type'] == 'Call'
    assert row['quantity'] == 2
    assert row['buy_price'] == 1.5
    assert row['sell_price'] == 2.0
    assert row['pl'] == 1.0
    assert row['return_pct'] == 33.33
    assert row['created_at']


def test_client_sent_pl_is_stored_as_given(client, auth_headers, sample_trade):
    # pl/returnPct deliberately inconsistent with the prices
    sample_trade.update(pl=999.0, returnPct=-5.0)
    _create(client, auth_headers, sample_trade)
    row = client.get('/api/trades', headers=auth_headers).get_json()[0]
    assert row['pl'] == 999.0
    assert row['return_pct'] == -5.0


def test_list_orders_by_trade_date_then_id_descending(client, auth_headers, sample_trade):
    ids = {}
    for key, day in [('old', '2024-01-01'), ('new_a', '2024-03-01'), ('new_b', '2024-03-01'), ('mid', '2024-02-01')]:
        ids[key] = _create(client, auth_headers, dict(sample_trade, date=day))

    rows = client.get('/api/trades', headers=auth_headers).get_json()
    assert [r['id'] for r in rows] == [ids['new_b'], ids['new_a'], ids['mid'], ids['old']]


def test_trades_are_invisible_to_other_users(client, sample_trade):
    alice = login_headers(client, 'alice@x.com', 'secret1')
    bob = login_headers(client, 'bob@x.com', 'secret2')

    _create(client, alice, sample_trade)
    _create(client, alice, dict(sample_trade, symbol='msft'))

    assert client.get('/api/trades', headers=bob).get_json() == []
    assert len(client.get('/api/trades', headers=alice).get_json()) == 2


def test_put_on_another_users_trade_returns_404(client, sample_trade):
    alice = login_headers(client, 'alice@x.com', 'secret1')
    bob = login_headers(client, 'bob@x.com', 'secret2')
    trade_id = _create(client, alice, sample_trade)

    response = client.put(f'/api/trades/{trade_id}', json=dict(sample_trade, symbol='hack'), headers=bob)
    assert response.status_code == 404
    assert response.get_json() == {'success': False, 'message': 'Trade not found'}

    # identical to a trade that never existed
    missing = client.put('/api/trades/99999', json=sample_trade, headers=bob)
    assert missing.status_code == 404
    assert missing.get_json() == response.get_json()

    row = client.get('/api/trades', headers=alice).get_json()[0]
    assert row['symbol'] == 'AAPL'


def test_delete_on_another_users_trade_returns_404(client, sample_trade):
    alice = login_headers(client, 'alice@x.com', 'secret1')
    bob = login_headers(client, 'bob@x.com', 'secret2')
    trade_id = _create(client, alice, sample_trade)

    response = client.delete(f'/api/trades/{trade_id}', headers=bob)
    assert response.status_code == 404
    assert len(client.get('/api/trades', headers=alice).get_json()) == 1


def test_update_replaces_all_mutable_fields(client, auth_headers, sample_trade):
    trade_id = _create(client, auth_headers, sample_trade)
    replacement = {
        'date': '2024-02-10', 'symbol': 'spy', 'strikePrice': 480.5, 'optionType': 'Put',
        'quantity': 3, 'buyPrice': 4.0, 'sellPrice': 3.0, 'pl': -3.0, 'returnPct': -25.0,
    }
    response = client.put(f'/api/trades/{trade_id}', json=replacement, headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json() == {'success': True}

    row = client.get('/api/trades', headers=auth_headers).get_json()[0]
    assert row['id'] == trade_id
    assert row['trade_date'] == '2024-02-10'
    assert row['symbol'] == 'SPY'
    assert row['option_type'] == 'Put'
    assert row['quantity'] == 3
    assert row['pl'] == -3.0


def test_update_validates_like_create(client, auth_headers, sample_trade):
    trade_id = _create(client, auth_headers, sample_trade)
    response = client.put(f'/api/trades/{trade_id}', json=dict(sample_trade, quantity=0), headers=auth_headers)
    assert response.status_code == 400
    row = client.get('/api/trades', headers=auth_headers).get_json()[0]
    assert row['quantity'] == 2


def test_delete_is_physical(client, auth_headers, sample_trade):
    trade_id = _create(client, auth_headers, sample_trade)
    response = client.delete(f'/api/trades/{trade_id}', headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json() == {'success': True}
    assert client.get('/api/trades', headers=auth_headers).get_json() == []

    again = client.delete(f'/api/trades/{trade_id}', headers=auth_headers)
    assert again.status_code == 404


@pytest.mark.parametrize('override', [
    {'quantity': 0},
    {'quantity': -1},
    {'quantity': 1.5},
    {'strikePrice': 0},
    {'buyPrice': -1},
    {'sellPrice': 0},
    {'optionType': 'Straddle'},
    {'optionType': 'call'},
    {'date': 'yesterday'},
    {'symbol': '   '},
    {'pl': 'lots'},
    {'date': None},
    {'quantity': 10**19},
    {'quantity': 2**31},
    {'strikePrice': 10**400},
    {'buyPrice': 100000000},
    {'pl': -10**11},
    {'returnPct': 10000},
    {'sellPrice': '1e400'},
])
def test_create_validation_errors(client, auth_headers, sample_trade, override):
    response = client.post('/api/trades', json=dict(sample_trade, **override), headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json()['success'] is False
    assert client.get('/api/trades', headers=auth_headers).get_json() == []


def test_create_missing_field(client, auth_headers, sample_trade):
    del sample_trade['returnPct']
    response = client.post('/api/trades', json=sample_trade, headers=auth_headers)
    assert response.status_code == 400
    assert 'returnPct' in response.get_json()['message']


def test_create_rejects_non_object_body(client, auth_headers):
    response = client.post('/api/trades', json=[1, 2, 3], headers=auth_headers)
    assert response.status_code == 400


def test_auth_is_checked_before_validation(client, sample_trade):
    response = client.post('/api/trades', json={'nonsense': True})
    assert response.status_code == 401


def test_deleting_user_cascades_to_trades(app, client, auth_headers, sample_trade):
    from Tradelog_app.credentials import delete_user
    from Tradelog_app.models import Trade, User

    _create(client, auth_headers, sample_trade)
    _create(client, auth_headers, sample_trade)

    with app.app_context():
        user = User.query.filter_by(email='a@x.com').one()
        assert Trade.query.filter_by(user_id=user.id).count() == 2
        assert delete_user(user.id) is True
        assert Trade.query.count() == 0
        assert delete_user(user.id) is False


def test_storage_failure_returns_generic_500(client, auth_headers, sample_trade):
    from unittest.mock import patch

    with patch('Tradelog_app.api_routes.TradeRepository.list_for_user',
               side_effect=RuntimeError('connection to db-host:3306 lost')):
        response = client.get('/api/trades', headers=auth_headers)

    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'message': 'Internal server error'}
    assert 'db-host' not in response.get_data(as_text=True)
