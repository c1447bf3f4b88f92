# Tradelog_app/config.py
import os
import logging
from pathlib import Path

# ===== Runtime mode =====
# "production" requires TRADELOG_JWT_SECRET; anything else is local development
TRADELOG_ENV = os.environ.get("TRADELOG_ENV", "development").strip().lower()
APP_VERSION = os.environ.get("APP_VERSION", "unknown")

# ===== Database =====
BASE_DIR = Path(__file__).resolve().parents[1]

# Support optional TRADELOG_DB_PATH env to override absolute path
TRADELOG_DB_PATH = os.environ.get('TRADELOG_DB_PATH')
if TRADELOG_DB_PATH:
    DB_PATH = Path(TRADELOG_DB_PATH).resolve()
else:
    DB_PATH = BASE_DIR / "instance" / "tradelog.db"

SQLALCHEMY_DATABASE_URI = os.environ.get("TRADELOG_DATABASE_URL") or f"sqlite:///{DB_PATH.as_posix()}"
SQLALCHEMY_TRACK_MODIFICATIONS = False

# Ensure instance directory exists for the default SQLite file
if not os.environ.get("TRADELOG_DATABASE_URL"):
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)

SQLALCHEMY_ENGINE_OPTIONS = {
    "pool_pre_ping": True,
}

# TLS for networked databases (MySQL via PyMySQL)
DB_CA_CERT = os.environ.get("TRADELOG_DB_CA_CERT")
DB_CA_CERT_CONTENT = os.environ.get("TRADELOG_DB_CA_CERT_CONTENT")

logger = logging.getLogger(__name__)
logger.info(f"📁 Database resolved to: {SQLALCHEMY_DATABASE_URI.split('@')[-1]}")

# ===== Tokens / passwords =====
JWT_SECRET_KEY = os.environ.get("TRADELOG_JWT_SECRET") or os.environ.get("JWT_SECRET")
JWT_ALGORITHM = "HS256"
TOKEN_TTL_HOURS = int(os.environ.get("TOKEN_TTL_HOURS", 24))

PASSWORD_MIN_LENGTH = 6
PASSWORD_HASH_METHOD = os.environ.get("PASSWORD_HASH_METHOD", "scrypt")

# ===== Request handling =====
MAX_CONTENT_LENGTH = int(os.environ.get("MAX_REQUEST_BYTES", 1024 * 1024))  # 1MB

# ===== Rate limiting (Flask-Limiter reads RATELIMIT_*) =====
RATELIMIT_ENABLED = os.environ.get("RATELIMIT_ENABLED", "true").lower() == "true"
RATELIMIT_STORAGE_URI = os.environ.get("RATE_LIMIT_STORAGE_URI", "memory://")
RATELIMIT_DEFAULT = os.environ.get("RATE_LIMITS_GLOBAL", "200/minute")
RATELIMIT_HEADERS_ENABLED = True
RATE_LIMIT_AUTH = os.environ.get("RATE_LIMITS_AUTH", "10/minute")

# ===== Observability =====
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
METRICS_ENABLED = os.environ.get("ENABLE_METRICS", "").lower() == "true"

DEBUG = False
