# Tradelog_app/extensions.py

from flask_sqlalchemy import SQLAlchemy
from flask_limiter import Limiter

from .rate_limiting import rate_limit_key

db = SQLAlchemy()
limiter = Limiter(key_func=rate_limit_key)
