from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote

import requests

from ..auth.credentials import Credentials
from ..config import API_VERSION, DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from ..logging import get_logger
from ..net.decoder import UNSUPPORTED, ResponseDecoder
from ..net.http import send
from .classifier import ErrorClassifier, payload_from_body
from .enums import HttpMethod
from .errors import ApiError, ParseError
from .routes import ROUTE_TABLE, RouteTable
from .schemas import DispatchResult, RequestSpec

logger = get_logger(__name__)

DEFAULT_USER_AGENT = "kiteclient-python/0.1.0"


class RequestDispatcher:
    """Turns a route name, method and parameters into one HTTP call.

    Client-side mistakes (unknown route, missing path parameter) raise before
    anything is sent. Everything that happens after the request leaves is
    reported through a ``DispatchResult``; ``execute`` unwraps it.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        user_agent: Optional[str] = None,
        strict_content_type: bool = False,
        route_table: Optional[RouteTable] = None,
        decoder: Optional[ResponseDecoder] = None,
        classifier: Optional[ErrorClassifier] = None,
    ) -> None:
        self.credentials = credentials
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = DEFAULT_TIMEOUT if timeout is None else timeout
        self.session = session or requests.Session()
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.strict_content_type = strict_content_type
        self.routes = route_table or ROUTE_TABLE
        self.decoder = decoder or ResponseDecoder()
        self.classifier = classifier or ErrorClassifier()

    # --- Request building ---
    def build_url(self, route_name: str, params: Optional[Mapping[str, Any]] = None) -> str:
        # Values are quoted one by one so a "/" inside a value cannot add a path segment
        path = self.routes.resolve(route_name, params, encode=lambda v: quote(v, safe=""))
        return self.base_url + path

    def build_headers(self) -> Dict[str, str]:
        headers = {
            "X-Kite-Version": str(API_VERSION),
            "User-Agent": self.user_agent,
        }
        auth = self.credentials.auth_header()
        if auth:
            headers["Authorization"] = f"token {auth}"
        return headers

    # --- Execution ---
    def dispatch(
        self,
        route_name: str,
        method: Union[HttpMethod, str],
        params: Optional[Mapping[str, Any]] = None,
    ) -> DispatchResult:
        method = HttpMethod(method.upper()) if isinstance(method, str) else method
        params = dict(params or {})
        spec = RequestSpec(route=self.routes.get(route_name), method=method, params=params)
        url = self.build_url(spec.route.name, spec.params)
        headers = self.build_headers()

        logger.debug("%s %s (route=%s, authenticated=%s)", method.value, url, route_name, "Authorization" in headers)
        try:
            response = send(self.session, method, url, headers=headers, params=spec.params, timeout=self.timeout)
        except ApiError as e:
            logger.debug("%s %s transport failure: %s", method.value, url, e)
            return DispatchResult.failure(e)

        if not response.ok:
            body = response.text
            logger.debug("Response: %s %s", response.status_code, body)
            error = self.classifier.handle(
                payload_from_body(body),
                self.credentials,
                raw_body=body,
                status_code=response.status_code,
                headers=response.headers,
            )
            return DispatchResult.failure(error, response)

        try:
            data = self.decoder.decode(response.content_type, response.body)
        except ParseError as e:
            e.status_code = response.status_code
            e.headers = dict(response.headers)
            return DispatchResult.failure(e, response)

        if data is UNSUPPORTED:
            if self.strict_content_type:
                error = ParseError(
                    f"Unsupported content type {response.content_type!r} for route '{route_name}'",
                    raw_body=response.text,
                    status_code=response.status_code,
                    headers=response.headers,
                )
                return DispatchResult.failure(error, response)
            logger.warning(
                "Ignoring %s response from route '%s' with unsupported content type %r",
                response.status_code,
                route_name,
                response.content_type,
            )
            data = None
        return DispatchResult.success(data, response)

    def execute(
        self,
        route_name: str,
        method: Union[HttpMethod, str],
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        return self.dispatch(route_name, method, params).unwrap()

    # Method aliases
    def get(self, route_name: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.execute(route_name, HttpMethod.GET, params)

    def post(self, route_name: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.execute(route_name, HttpMethod.POST, params)

    def put(self, route_name: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.execute(route_name, HttpMethod.PUT, params)

    def delete(self, route_name: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.execute(route_name, HttpMethod.DELETE, params)
