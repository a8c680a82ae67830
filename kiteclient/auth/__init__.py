"""Authentication helpers (credentials, checksum, manual login, env tokens)."""

from .credentials import Credentials, compute_checksum
from .manual import manual_exchange_request_token
from .tokens import get_access_token

__all__ = ["Credentials", "compute_checksum", "manual_exchange_request_token", "get_access_token"]
