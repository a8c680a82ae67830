from __future__ import annotations

import hashlib
import threading
from typing import Optional


def compute_checksum(api_key: str, request_token: str, api_secret: str) -> str:
    """SHA-256 hex digest of ``api_key + request_token + api_secret``.

    The three values are concatenated as-is, with no separators, and hashed as
    UTF-8. The server recomputes the same digest during the token exchange.
    """

    return hashlib.sha256((api_key + request_token + api_secret).encode("utf-8")).hexdigest()


class Credentials:
    """API key and access token for one client session.

    The access token is swapped under a lock so a reader racing with ``clear``
    sees either the old token or none, never a mix.
    """

    def __init__(self, api_key: str, access_token: Optional[str] = None) -> None:
        self._api_key = api_key
        self._access_token = access_token or None
        self._lock = threading.Lock()

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def access_token(self) -> Optional[str]:
        with self._lock:
            return self._access_token

    def set_access_token(self, access_token: Optional[str]) -> None:
        with self._lock:
            self._access_token = access_token or None

    def clear(self) -> None:
        with self._lock:
            self._access_token = None

    def auth_header(self) -> Optional[str]:
        """Return ``"api_key:access_token"`` or ``None`` when either is missing."""

        with self._lock:
            token = self._access_token
        if not self._api_key or not token:
            return None
        return f"{self._api_key}:{token}"

    def __repr__(self) -> str:
        state = "authenticated" if self.auth_header() else "anonymous"
        return f"Credentials(api_key={self._api_key!r}, {state})"
