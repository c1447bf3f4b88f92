#!/usr/bin/env python3
"""
Gunicorn configuration for the trade log API

Usage:
    TRADELOG_ENV=production TRADELOG_JWT_SECRET=... gunicorn -c gunicorn.conf.py run:app
"""

import multiprocessing
import os

# =============================================================================
# Server
# =============================================================================

# Bind to localhost only - put a reverse proxy in front for external access
bind = os.environ.get("GUNICORN_BIND", "127.0.0.1:8000")

# (2 x CPU cores) + 1, capped for a single small server
workers = min(multiprocessing.cpu_count() * 2 + 1, 4)
worker_class = "sync"
threads = 2

# Restart workers periodically
max_requests = 1000
max_requests_jitter = 100
timeout = 60
graceful_timeout = 30
keepalive = 5

# Schema bootstrap runs once in the master before forking
preload_app = True

# =============================================================================
# Logging (application logs are JSON via Tradelog_app.logging_config)
# =============================================================================

access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()

proc_name = "tradelog"

# =============================================================================
# Request limits
# =============================================================================

limit_request_line = 4094
limit_request_field_size = 8190
limit_request_fields = 100


def on_starting(server):
    server.log.info("Starting trade log API")
    if os.environ.get('TRADELOG_ENV', 'development').lower() != 'production':
        server.log.warning("TRADELOG_ENV is not 'production' - development signing key may be in use")


def when_ready(server):
    server.log.info("Trade log API is ready to accept connections")


def on_exit(server):
    server.log.info("Trade log API is shutting down")
