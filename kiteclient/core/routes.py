from __future__ import annotations

import re
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from .errors import MissingParameterError, RouteDefinitionError, UnknownRouteError
from .schemas import PLACEHOLDER_RE, Route

# Any '%' that does not open a well-formed %{name} token
_STRAY_PERCENT_RE = re.compile(r"%(?!\{[A-Za-z_][A-Za-z0-9_]*\})")


ROUTES: Mapping[str, str] = MappingProxyType(
    {
        "api.token": "/session/token",
        "api.token.invalidate": "/session/token",
        "api.token.renew": "/session/refresh_token",
        "user.profile": "/user/profile",
        "user.margins": "/user/margins",
        "user.margins.segment": "/user/margins/%{segment}",
        "orders": "/orders",
        "trades": "/trades",
        "order.info": "/orders/%{order_id}",
        "order.place": "/orders/%{variety}",
        "order.modify": "/orders/%{variety}/%{order_id}",
        "order.cancel": "/orders/%{variety}/%{order_id}",
        "order.trades": "/orders/%{order_id}/trades",
        "portfolio.positions": "/portfolio/positions",
        "portfolio.holdings": "/portfolio/holdings",
        "portfolio.positions.convert": "/portfolio/positions",
        # Mutual funds
        "mf.orders": "/mf/orders",
        "mf.order.info": "/mf/orders/%{order_id}",
        "mf.order.place": "/mf/orders",
        "mf.order.cancel": "/mf/orders/%{order_id}",
        "mf.sips": "/mf/sips",
        "mf.sip.info": "/mf/sips/%{sip_id}",
        "mf.sip.place": "/mf/sips",
        "mf.sip.modify": "/mf/sips/%{sip_id}",
        "mf.sip.cancel": "/mf/sips/%{sip_id}",
        "mf.holdings": "/mf/holdings",
        "mf.instruments": "/mf/instruments",
        # Market data
        "market.instruments.all": "/instruments",
        "market.instruments": "/instruments/%{exchange}",
        "market.margins": "/margins/%{segment}",
        "market.historical": "/instruments/historical/%{instrument_token}/%{interval}",
        "market.trigger_range": "/instruments/trigger_range/%{transaction_type}",
        "market.quote": "/quote",
        "market.quote.ohlc": "/quote/ohlc",
        "market.quote.ltp": "/quote/ltp",
    }
)


def validate_template(name: str, template: str) -> None:
    if not template.startswith("/"):
        raise RouteDefinitionError(f"Route '{name}' must start with '/': {template!r}")
    stray = _STRAY_PERCENT_RE.search(template)
    if stray:
        raise RouteDefinitionError(
            f"Route '{name}' has a malformed placeholder at offset {stray.start()}: {template!r}",
            context={"route": name, "template": template},
        )
    leftover = PLACEHOLDER_RE.sub("", template)
    if "{" in leftover or "}" in leftover:
        raise RouteDefinitionError(
            f"Route '{name}' has an unbalanced brace: {template!r}",
            context={"route": name, "template": template},
        )


class RouteTable:
    """Read-only lookup from logical operation name to URI template.

    Templates are validated when the table is built, so a malformed route fails
    at import time rather than on the first call that uses it.
    """

    def __init__(self, routes: Mapping[str, str]) -> None:
        table: Dict[str, Route] = {}
        for name, template in routes.items():
            validate_template(name, template)
            table[name] = Route(name=name, template=template)
        self._routes: Mapping[str, Route] = MappingProxyType(table)

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def names(self) -> list[str]:
        return list(self._routes)

    def get(self, name: str) -> Route:
        try:
            return self._routes[name]
        except KeyError:
            raise UnknownRouteError(f"Unknown route '{name}'", context={"route": name}) from None

    def resolve(
        self,
        name: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        encode: Optional[Callable[[str], str]] = None,
    ) -> str:
        """Return the URI path for ``name`` with placeholders filled from ``params``.

        A placeholder whose key is absent, ``None`` or empty raises
        ``MissingParameterError``. Values are inserted as-is unless ``encode``
        is given, in which case each value (never the template) goes through it.
        """

        route = self.get(name)
        params = params or {}

        def _substitute(match: "re.Match[str]") -> str:
            key = match.group(1)
            value = params.get(key)
            if value is None or value == "":
                raise MissingParameterError(
                    f"Route '{name}' requires parameter '{key}'",
                    context={"route": name, "parameter": key},
                )
            text = str(value.value if isinstance(value, Enum) else value)
            return encode(text) if encode else text

        return PLACEHOLDER_RE.sub(_substitute, route.template)


ROUTE_TABLE = RouteTable(ROUTES)
