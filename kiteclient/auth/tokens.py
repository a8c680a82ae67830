from __future__ import annotations

import os
from typing import Optional

DEFAULT_ACCESS_TOKEN_KEYS = ("KITE_ACCESS_TOKEN", "BROKER_ACCESS_TOKEN")


def get_access_token(*keys: str) -> Optional[str]:
    """Return first non-empty env value for provided keys."""

    for k in keys or DEFAULT_ACCESS_TOKEN_KEYS:
        v = os.getenv(k)
        if v:
            return v
    return None
