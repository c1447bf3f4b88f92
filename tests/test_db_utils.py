# tests/test_db_utils.py
import sqlite3

from sqlalchemy import inspect

from Tradelog_app.db_utils import owner_column_ddl
from Tradelog_app.extensions import db
from conftest import make_app

LEGACY_TRADES = """
CREATE TABLE trades (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    trade_date DATE NOT NULL,
    symbol VARCHAR(50) NOT NULL,
    strike_price NUMERIC(10, 2) NOT NULL,
    option_type VARCHAR(4) NOT NULL,
    quantity INTEGER NOT NULL,
    buy_price NUMERIC(10, 2) NOT NULL,
    sell_price NUMERIC(10, 2) NOT NULL,
    pl NUMERIC(12, 2) NOT NULL,
    return_pct NUMERIC(6, 2) NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""


def _columns(app, table):
    with app.app_context():
        return {col['name'] for col in inspect(db.engine).get_columns(table)}


def test_legacy_trades_table_gains_owner_column(tmp_path):
    path = tmp_path / 'legacy.db'
    conn = sqlite3.connect(path)
    conn.execute(LEGACY_TRADES)
    conn.commit()
    conn.close()

    app = make_app(SQLALCHEMY_DATABASE_URI=f"sqlite:///{path}")
    assert 'user_id' in _columns(app, 'trades')
    assert _columns(app, 'users') >= {'id', 'email', 'password_hash'}


def test_schema_bootstrap_is_idempotent(tmp_path):
    uri = f"sqlite:///{tmp_path / 'tradelog.db'}"
    make_app(SQLALCHEMY_DATABASE_URI=uri)
    app = make_app(SQLALCHEMY_DATABASE_URI=uri)

    with app.app_context():
        indexes = {ix['name'] for ix in inspect(db.engine).get_indexes('trades')}
    assert 'idx_trades_user_id' in indexes
    assert 'idx_trades_trade_date' in indexes


def test_foreign_keys_are_enforced(app):
    with app.app_context():
        value = db.session.execute(db.text('PRAGMA foreign_keys')).scalar()
    assert value == 1


def test_owner_column_on_mysql_adds_explicit_foreign_key():
    statements = owner_column_ddl('mysql')
    assert statements[0] == "ALTER TABLE trades ADD COLUMN user_id INTEGER"
    assert 'ADD CONSTRAINT' in statements[1]
    assert 'FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE' in statements[1]


def test_owner_column_on_sqlite_is_inline():
    statements = owner_column_ddl('sqlite')
    assert len(statements) == 1
    assert 'REFERENCES users(id) ON DELETE CASCADE' in statements[0]


def test_bootstrap_leaves_no_pooled_connection(tmp_path):
    app = make_app(SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'tradelog.db'}")
    with app.app_context():
        assert db.engine.pool.checkedin() == 0
        assert db.engine.pool.checkedout() == 0


def test_in_memory_database_survives_bootstrap(client):
    response = client.post('/auth/register', json={'email': 'm@x.com', 'password': 'secret1'})
    assert response.status_code == 200
