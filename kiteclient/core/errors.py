from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .enums import ErrorKind


class KiteError(Exception):
    """Base error for kiteclient."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, *, context: Optional[dict[str, Any]] = None) -> None:  # noqa: D401
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ValidationError(KiteError):
    """Client-side contract violation, raised before any network call."""


class RouteDefinitionError(ValidationError):
    """A route template is malformed."""


class UnknownRouteError(ValidationError):
    """Route name is not present in the route table."""

    kind = ErrorKind.UNKNOWN_ROUTE


class MissingParameterError(ValidationError):
    """A route placeholder has no matching parameter."""

    kind = ErrorKind.MISSING_PARAMETER


class ApiError(KiteError):
    """Error surfaced from a call to the API.

    Carries the classified ``kind`` together with whatever the server sent back,
    so callers can log the original response without re-reading it.
    """

    kind = ErrorKind.GENERAL

    def __init__(
        self,
        message: str,
        *,
        raw_body: Optional[str] = None,
        status_code: Optional[int] = None,
        headers: Optional[Mapping[str, str]] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, context=context)
        self.raw_body = raw_body
        self.status_code = status_code
        self.headers: Dict[str, str] = dict(headers or {})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r}, status_code={self.status_code!r})"


class TokenException(ApiError):
    """Session expired or invalidated; the stored access token is cleared."""

    kind = ErrorKind.TOKEN


class UserException(ApiError):
    """Account or user related error."""

    kind = ErrorKind.USER


class OrderException(ApiError):
    """Order placement or fetch failed."""

    kind = ErrorKind.ORDER


class InputException(ApiError):
    """Missing or invalid request parameters."""

    kind = ErrorKind.INPUT


class NetworkException(ApiError):
    """Upstream or transport network failure."""

    kind = ErrorKind.NETWORK


class DataException(ApiError):
    """Internal broker error while fetching data."""

    kind = ErrorKind.DATA


class GeneralException(ApiError):
    """Unclassified error."""

    kind = ErrorKind.GENERAL


class TimeoutException(ApiError):
    """No response within the configured timeout."""

    kind = ErrorKind.TIMEOUT


class ParseError(ApiError):
    """Response body could not be decoded."""

    kind = ErrorKind.PARSE


EXCEPTIONS_BY_KIND: Dict[ErrorKind, type[ApiError]] = {
    cls.kind: cls
    for cls in (
        TokenException,
        UserException,
        OrderException,
        InputException,
        NetworkException,
        DataException,
        GeneralException,
        TimeoutException,
        ParseError,
    )
}
