# Tradelog_app/__init__.py

from pathlib import Path

import click
from flask import Flask

from .extensions import db
from .models import User, Trade


def _database_engine_options(app):
    """SSL for networked databases; SQLite gets a busy timeout instead"""
    uri = app.config['SQLALCHEMY_DATABASE_URI']
    options = dict(app.config.get('SQLALCHEMY_ENGINE_OPTIONS') or {})

    if uri.startswith('sqlite'):
        options.setdefault('connect_args', {'timeout': 30})
    elif app.config.get('DB_CA_CERT_CONTENT'):
        # PyMySQL wants a CA file path; materialize PEM text from the environment
        ca_path = Path(app.instance_path) / 'db-ca.pem'
        ca_path.parent.mkdir(parents=True, exist_ok=True)
        ca_path.write_text(app.config['DB_CA_CERT_CONTENT'])
        options.setdefault('connect_args', {'ssl': {'ca': str(ca_path)}})
    elif app.config.get('DB_CA_CERT'):
        options.setdefault('connect_args', {'ssl': {'ca': app.config['DB_CA_CERT']}})
    else:
        app.logger.warning("⚠️ No database CA cert configured - TLS verification disabled (DEV ONLY)")

    app.config['SQLALCHEMY_ENGINE_OPTIONS'] = options


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_pyfile('config.py')
    if test_config:
        app.config.update(test_config)

    from .operational_features import setup_operational_features
    setup_operational_features(app)

    from .tokens import configure_signing_key
    configure_signing_key(app)

    _database_engine_options(app)
    db.init_app(app)

    from .errors import register_error_handlers
    register_error_handlers(app)

    from .auth_routes import auth
    from .api_routes import api
    app.register_blueprint(auth)
    app.register_blueprint(api)

    from .db_utils import register_sqlite_pragmas, ensure_schema, release_connections
    with app.app_context():
        register_sqlite_pragmas()
        ensure_schema()
        # gunicorn preloads the app; workers must not inherit this connection
        release_connections()

    register_cli(app)
    return app


def register_cli(app):

    @app.cli.command('init-db')
    def init_db_command():
        """Create tables and indices"""
        from .db_utils import ensure_schema
        ensure_schema()
        click.echo("✅ Database ready")

    @app.cli.command('delete-user')
    @click.argument('email')
    def delete_user_command(email):
        """Delete a user and all of their trades"""
        from .credentials import delete_user
        user = User.query.filter_by(email=email).first()
        if user is None or not delete_user(user.id):
            raise click.ClickException(f"No user with email {email}")
        click.echo(f"🗑️ Deleted {email} and their trades")
