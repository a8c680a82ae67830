from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://api.kite.trade"
DEFAULT_LOGIN_URL = "https://kite.trade/connect/login"
DEFAULT_TIMEOUT = 7.0  # seconds
API_VERSION = 3


def load_env(path: Optional[str] = None) -> bool:
    """Load a .env file into the process environment without overriding existing values."""

    return load_dotenv(path, override=False)


def getenv(key: str, default: Optional[str] = None, *aliases: str) -> Optional[str]:
    """Return first non-empty env var among key and aliases."""

    for k in (key, *aliases):
        v = os.getenv(k)
        if v not in (None, ""):
            return v
    return default


def getenv_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(key)
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "on"}


def getenv_float(key: str, default: float) -> float:
    v = os.getenv(key)
    if v in (None, ""):
        return default
    try:
        return float(v)
    except ValueError:
        raise ValueError(f"Environment variable {key} must be a number, got {v!r}") from None
