# Tradelog_app/dashboard/client.py
"""
HTTP client for the trade log API.

The token and email of the logged-in user are cached in a small JSON file
(``TokenStore``); a missing token or a 401 from a protected route raises
``SessionExpired`` so the caller can send the user back to login.
"""

import json
import logging
import os
from pathlib import Path

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_SESSION_FILE = Path.home() / ".tradelog" / "session.json"


class ApiError(Exception):
    def __init__(self, status_code, message):
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{status_code}] {message}")


class SessionExpired(ApiError):
    def __init__(self, message="Session expired. Please login again."):
        super().__init__(401, message)


class TokenStore:
    def __init__(self, path=None):
        self.path = Path(path or os.environ.get('TRADELOG_SESSION_FILE') or DEFAULT_SESSION_FILE)

    def load(self):
        """Return (token, email); (None, None) when nothing is stored"""
        try:
            data = json.loads(self.path.read_text())
        except FileNotFoundError:
            return None, None
        except (ValueError, OSError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return None, None
        return data.get('token'), data.get('email')

    def save(self, token, email):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # owner-only from creation; fchmod covers a file left by an older version
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w') as f:
            os.fchmod(f.fileno(), 0o600)
            json.dump({'token': token, 'email': email}, f)

    def clear(self):
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

    @property
    def token(self):
        return self.load()[0]

    @property
    def email(self):
        return self.load()[1]


class TradeApiClient:
    def __init__(self, base_url=None, token_store=None, session=None, timeout=10):
        self.base_url = (base_url or os.environ.get('TRADELOG_API_URL') or DEFAULT_API_URL).rstrip('/')
        self.token_store = token_store or TokenStore()
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, auth=True, payload=None):
        headers = {'Content-Type': 'application/json'}
        if auth:
            token = self.token_store.token
            if not token:
                raise SessionExpired()
            headers['Authorization'] = f"Bearer {token}"

        try:
            response = self.session.request(
                method, f"{self.base_url}{path}",
                json=payload, headers=headers, timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"[{method}] {path} failed: {e}")
            raise ApiError(0, "Could not reach the server")

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code == 401 and auth:
            self.token_store.clear()
            raise SessionExpired()
        if not response.ok:
            message = data.get('message') if isinstance(data, dict) else None
            raise ApiError(response.status_code, message or f"Request failed ({response.status_code})")
        return data

    # ---------- auth ----------
    def register(self, email, password):
        return self._request('POST', '/auth/register', auth=False,
                             payload={'email': email, 'password': password})

    def login(self, email, password):
        data = self._request('POST', '/auth/login', auth=False,
                             payload={'email': email, 'password': password})
        self.token_store.save(data['token'], email)
        return data['token']

    def logout(self):
        self.token_store.clear()

    @property
    def is_logged_in(self):
        return bool(self.token_store.token)

    # ---------- trades ----------
    def list_trades(self):
        return self._request('GET', '/api/trades')

    def create_trade(self, payload):
        return self._request('POST', '/api/trades', payload=payload)

    def update_trade(self, trade_id, payload):
        return self._request('PUT', f'/api/trades/{trade_id}', payload=payload)

    def delete_trade(self, trade_id):
        return self._request('DELETE', f'/api/trades/{trade_id}')

    def health(self):
        return self._request('GET', '/api/health', auth=False)
