from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from ..auth.credentials import Credentials
from ..logging import get_logger
from .enums import ErrorKind
from .errors import EXCEPTIONS_BY_KIND, ApiError, GeneralException

logger = get_logger(__name__)

# error_type values the API is known to send
SERVER_KINDS: Dict[str, ErrorKind] = {
    kind.value: kind
    for kind in (
        ErrorKind.TOKEN,
        ErrorKind.USER,
        ErrorKind.ORDER,
        ErrorKind.INPUT,
        ErrorKind.NETWORK,
        ErrorKind.DATA,
        ErrorKind.GENERAL,
    )
}


def payload_from_body(body: Optional[str]) -> Dict[str, Any]:
    """Extract the error envelope from a response body; ``{}`` when it is not a JSON object."""

    if not body:
        return {}
    try:
        payload = json.loads(body)
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


class ErrorClassifier:
    """Maps broker error envelopes to typed ``ApiError`` instances."""

    def classify(
        self,
        payload: Mapping[str, Any],
        *,
        raw_body: Optional[str] = None,
        status_code: Optional[int] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ApiError:
        error_type = payload.get("error_type")
        message = payload.get("message") or raw_body or (f"HTTP {status_code}" if status_code else "Unknown error")
        message = str(message)
        context: Dict[str, Any] = {"error_type": error_type}

        kind = SERVER_KINDS.get(error_type) if isinstance(error_type, str) else None
        if kind is None:
            if error_type:
                message = f"{error_type}: {message}"
            cls: type[ApiError] = GeneralException
        else:
            cls = EXCEPTIONS_BY_KIND[kind]

        return cls(message, raw_body=raw_body, status_code=status_code, headers=headers, context=context)

    def handle(
        self,
        payload: Mapping[str, Any],
        credentials: Credentials,
        *,
        raw_body: Optional[str] = None,
        status_code: Optional[int] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ApiError:
        """Classify ``payload`` and apply its side effect on ``credentials``."""

        error = self.classify(payload, raw_body=raw_body, status_code=status_code, headers=headers)
        if error.kind is ErrorKind.TOKEN:
            logger.info("Session token rejected (%s); clearing access token", error.message)
            credentials.clear()
        return error
