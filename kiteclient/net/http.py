from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional

import requests

from ..core.enums import HttpMethod
from ..core.errors import NetworkException, TimeoutException
from ..core.schemas import RawResponse
from ..config import DEFAULT_TIMEOUT


def _clean(params: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    # requests renders list values as repeated keys; None values are dropped
    out: dict[str, Any] = {}
    for k, v in (params or {}).items():
        if v is None:
            continue
        if isinstance(v, (list, tuple)):
            v = [x.value if isinstance(x, Enum) else x for x in v]
        elif isinstance(v, Enum):
            v = v.value
        out[k] = v
    return out


def send(
    session: requests.Session,
    method: HttpMethod,
    url: str,
    *,
    headers: Optional[Mapping[str, str]] = None,
    params: Optional[Mapping[str, Any]] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> RawResponse:
    """Perform one HTTP call and return the raw response.

    GET/DELETE parameters travel in the query string, POST/PUT parameters as a
    form-encoded body. Transport failures are raised as ``TimeoutException`` or
    ``NetworkException``; HTTP error statuses are returned, not raised.
    """

    cleaned = _clean(params)
    try:
        r = session.request(
            method.value,
            url,
            headers=dict(headers or {}),
            params=None if method.has_body else cleaned,
            data=cleaned if method.has_body else None,
            timeout=timeout,
        )
    except requests.Timeout as e:
        raise TimeoutException(f"{method.value} {url} timed out after {timeout}s", context={"url": url}) from e
    except requests.RequestException as e:
        raise NetworkException(f"{method.value} {url} failed: {e}", context={"url": url}) from e

    return RawResponse(
        status_code=r.status_code,
        content_type=r.headers.get("Content-Type", ""),
        headers=dict(r.headers),
        body=r.content or b"",
    )
