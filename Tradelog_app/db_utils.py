# Tradelog_app/db_utils.py
"""
Schema bootstrap: tables, legacy column upgrade, indices and SQLite PRAGMAs
"""

from flask import current_app
from sqlalchemy import event, inspect

from .extensions import db

SQLITE_PRAGMAS = [
    "PRAGMA journal_mode=WAL",     # concurrent readers
    "PRAGMA synchronous=NORMAL",
    "PRAGMA temp_store=MEMORY",
    "PRAGMA busy_timeout=30000",   # 30s
    "PRAGMA foreign_keys=ON",      # ON DELETE CASCADE
]

INDICES = [
    "CREATE INDEX IF NOT EXISTS idx_trades_user_id ON trades(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_trades_trade_date ON trades(trade_date)",
]


def _is_sqlite():
    return db.engine.dialect.name == 'sqlite'


def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    try:
        for pragma in SQLITE_PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()


def register_sqlite_pragmas():
    """Apply PRAGMAs on every new SQLite connection.

    Must run before the first connection is opened; in-memory databases
    keep a single connection for their whole life.
    """
    if not _is_sqlite():
        return
    if not event.contains(db.engine, "connect", _set_sqlite_pragma):
        event.listen(db.engine, "connect", _set_sqlite_pragma)


def owner_column_ddl(dialect_name):
    """Statements that add trades.user_id with a cascading foreign key.

    SQLite only accepts the constraint inline; MySQL parses an inline
    REFERENCES and ignores it, so the key is added as its own constraint.
    """
    if dialect_name == 'sqlite':
        return [
            "ALTER TABLE trades ADD COLUMN user_id INTEGER "
            "REFERENCES users(id) ON DELETE CASCADE"
        ]
    return [
        "ALTER TABLE trades ADD COLUMN user_id INTEGER",
        "ALTER TABLE trades ADD CONSTRAINT fk_trades_user "
        "FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE",
    ]


def ensure_trade_owner_column():
    """Older trades tables predate per-user ownership; add user_id if missing"""
    inspector = inspect(db.engine)
    if 'trades' not in inspector.get_table_names():
        return False
    columns = {col['name'] for col in inspector.get_columns('trades')}
    if 'user_id' in columns:
        return False

    current_app.logger.warning("⚙️ Adding user_id column to trades...")
    with db.engine.begin() as conn:
        for statement in owner_column_ddl(db.engine.dialect.name):
            conn.execute(db.text(statement))
    current_app.logger.info("✅ user_id column added and linked to users table")
    return True


def ensure_database_indices():
    created = 0
    for index_sql in INDICES:
        db.session.execute(db.text(index_sql))
        created += 1
    db.session.commit()
    current_app.logger.debug("Database indices verified", extra={'total_indices': created})


def release_connections():
    """Close pooled connections so forked workers open their own.

    An in-memory SQLite database lives only as long as its one connection
    and is left alone.
    """
    url = db.engine.url
    if _is_sqlite() and url.database in (None, '', ':memory:'):
        return False
    db.session.remove()
    db.engine.dispose()
    return True


def ensure_schema():
    """Create tables and bring legacy schemas up to date"""
    db.create_all()
    ensure_trade_owner_column()
    ensure_database_indices()
    current_app.logger.info("✅ Users & Trades tables ready!")
