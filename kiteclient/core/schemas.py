from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .enums import HttpMethod
from .errors import ApiError

PLACEHOLDER_RE = re.compile(r"%\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass(frozen=True)
class Route:
    name: str
    template: str

    @property
    def placeholders(self) -> List[str]:
        return PLACEHOLDER_RE.findall(self.template)


@dataclass
class RequestSpec:
    route: Route
    method: HttpMethod
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class RawResponse:
    status_code: int
    content_type: str
    headers: Mapping[str, str]
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


@dataclass
class DispatchResult:
    """Outcome of a single dispatched request.

    Exactly one of ``data`` (on success) or ``error`` (on failure) is meaningful;
    ``response`` is kept whenever the server answered.
    """

    ok: bool
    data: Any = None
    error: Optional[ApiError] = None
    response: Optional[RawResponse] = None

    @classmethod
    def success(cls, data: Any, response: RawResponse) -> "DispatchResult":
        return cls(ok=True, data=data, response=response)

    @classmethod
    def failure(cls, error: ApiError, response: Optional[RawResponse] = None) -> "DispatchResult":
        return cls(ok=False, error=error, response=response)

    def unwrap(self) -> Any:
        if not self.ok:
            if self.error is None:
                raise ValueError("Failed DispatchResult carries no error")
            raise self.error
        return self.data

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "data": self.data,
            "error": None if self.error is None else {"kind": self.error.kind.value, "message": self.error.message},
            "status_code": None if self.response is None else self.response.status_code,
        }
