from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

import requests

from .auth.credentials import Credentials, compute_checksum
from .auth.manual import manual_exchange_request_token
from .auth.tokens import get_access_token
from .config import (
    API_VERSION,
    DEFAULT_BASE_URL,
    DEFAULT_LOGIN_URL,
    DEFAULT_TIMEOUT,
    getenv,
    getenv_bool,
    getenv_float,
    load_env,
)
from .core.dispatcher import RequestDispatcher
from .core.enums import Exchange, HttpMethod, OrderType, ProductType, TransactionType, Validity, Variety
from .logging import get_logger
from .symbols.registry import instrument_registry

logger = get_logger(__name__)

Instruments = Union[str, Iterable[str]]

HISTORICAL_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _v(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _order_id(resp: Any) -> Optional[str]:
    if isinstance(resp, dict) and resp.get("order_id"):
        return str(resp["order_id"])
    return None


class KiteConnect:
    """Kite Connect v3 API client.

    Initialize one instance per user session. The access token is held in
    memory only and is cleared automatically when the API reports the session
    as invalid (``TokenException``).
    """

    def __init__(
        self,
        api_key: str,
        access_token: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        login_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        strict_content_type: bool = False,
    ) -> None:
        self.credentials = Credentials(api_key, access_token)
        self.dispatcher = RequestDispatcher(
            self.credentials,
            base_url=base_url or DEFAULT_BASE_URL,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
            session=session,
            user_agent=user_agent,
            strict_content_type=strict_content_type,
        )
        self._login_url = login_url or DEFAULT_LOGIN_URL

    # --- Construction helpers ---
    @classmethod
    def from_env(cls, *, session: Optional[requests.Session] = None, dotenv_path: Optional[str] = None) -> "KiteConnect":
        """Build a client from KITE_* environment variables (and a .env file when present)."""

        load_env(dotenv_path)
        api_key = getenv("KITE_API_KEY", None, "BROKER_API_KEY")
        if not api_key:
            raise ValueError("KITE_API_KEY is not set")
        return cls(
            api_key,
            access_token=get_access_token(),
            base_url=getenv("KITE_BASE_URL"),
            timeout=getenv_float("KITE_TIMEOUT", DEFAULT_TIMEOUT),
            session=session,
            login_url=getenv("KITE_LOGIN_URL"),
            strict_content_type=getenv_bool("KITE_STRICT_CONTENT_TYPE"),
        )

    @property
    def api_key(self) -> str:
        return self.credentials.api_key

    @property
    def access_token(self) -> Optional[str]:
        return self.credentials.access_token

    @property
    def timeout(self) -> float:
        return self.dispatcher.timeout

    @timeout.setter
    def timeout(self, value: float) -> None:
        self.dispatcher.timeout = value

    # --- Session ---
    def login_url(self) -> str:
        """Remote login URL a user is redirected to in order to start the login flow."""

        return f"{self._login_url}?v={API_VERSION}&api_key={self.api_key}"

    def set_access_token(self, access_token: Optional[str]) -> None:
        self.credentials.set_access_token(access_token)

    def generate_session(self, request_token: str, api_secret: str) -> Any:
        """Exchange a request token for an access token and store it on the client."""

        resp = self.dispatcher.post(
            "api.token",
            {
                "api_key": self.api_key,
                "request_token": request_token,
                "checksum": compute_checksum(self.api_key, request_token, api_secret),
            },
        )
        if isinstance(resp, dict) and resp.get("access_token"):
            self.set_access_token(resp["access_token"])
            logger.info("Session established for user %s", resp.get("user_id", "<unknown>"))
        return resp

    # Name used by older callers
    generate_access_token = generate_session

    def renew_access_token(self, refresh_token: str, api_secret: str) -> Any:
        resp = self.dispatcher.post(
            "api.token.renew",
            {
                "api_key": self.api_key,
                "refresh_token": refresh_token,
                "checksum": compute_checksum(self.api_key, refresh_token, api_secret),
            },
        )
        if isinstance(resp, dict) and resp.get("access_token"):
            self.set_access_token(resp["access_token"])
            logger.info("Access token renewed")
        return resp

    def invalidate_access_token(self, access_token: Optional[str] = None) -> Any:
        """Invalidate a token on the server; clears the stored token when it is the one invalidated.

        Call when a user logs out of the application.
        """

        current = self.access_token
        access_token = access_token or current
        resp = self.dispatcher.delete(
            "api.token.invalidate",
            {"api_key": self.api_key, "access_token": access_token},
        )
        if resp and access_token == current:
            self.credentials.clear()
            logger.info("Access token invalidated")
        return resp

    def login_interactive(self, api_secret: str) -> Any:
        """Prompt for the request token after a browser login and complete the exchange."""

        request_token = manual_exchange_request_token(self.login_url())
        return self.generate_session(request_token, api_secret)

    # --- User ---
    def profile(self) -> Any:
        return self.dispatcher.get("user.profile")

    def margins(self, segment: Optional[str] = "equity") -> Any:
        """Account balance and margins for a segment (``equity``/``commodity``), or all when ``None``."""

        if segment:
            return self.dispatcher.get("user.margins.segment", {"segment": segment})
        return self.dispatcher.get("user.margins")

    # --- Orders ---
    def orders(self) -> Any:
        """Today's orders: completed, pending and cancelled."""

        return self.dispatcher.get("orders")

    def order_history(self, order_id: str) -> Any:
        return self.dispatcher.get("order.info", {"order_id": order_id})

    def trades(self) -> Any:
        return self.dispatcher.get("trades")

    def order_trades(self, order_id: str) -> Any:
        return self.dispatcher.get("order.trades", {"order_id": order_id})

    def place_order(
        self,
        exchange: Union[Exchange, str, None],
        tradingsymbol: str,
        transaction_type: Union[TransactionType, str],
        quantity: int,
        product: Union[ProductType, str, None],
        order_type: Union[OrderType, str],
        price: Optional[float] = None,
        trigger_price: Optional[float] = None,
        tag: Optional[str] = None,
        variety: Union[Variety, str, None] = None,
    ) -> Optional[str]:
        """Place an order and return its ``order_id``.

        - exchange: NSE / BSE (defaults to NSE)
        - transaction_type: BUY / SELL
        - product: MIS / CNC / NRML (defaults to CNC)
        - order_type: MARKET / LIMIT / SL / SL-M
        - price: for LIMIT and SL orders
        - trigger_price: for SL / SL-M orders
        - tag: alphanumeric, at most 8 chars
        - variety: regular / bo / co / amo (defaults to regular)
        """

        params: Dict[str, Any] = {
            "variety": _v(variety) or "regular",
            "exchange": _v(exchange) or "NSE",
            "tradingsymbol": tradingsymbol,
            "transaction_type": _v(transaction_type),
            "quantity": int(quantity),
            "product": _v(product) or "CNC",
            "order_type": _v(order_type),
        }
        if price is not None:
            params["price"] = price
        if trigger_price is not None:
            params["trigger_price"] = trigger_price
        if tag is not None:
            params["tag"] = tag
        return _order_id(self.dispatcher.post("order.place", params))

    def modify_order(
        self,
        order_id: str,
        quantity: Optional[int] = None,
        order_type: Union[OrderType, str, None] = None,
        price: Optional[float] = None,
        trigger_price: Optional[float] = None,
        validity: Union[Validity, str, None] = None,
        disclosed_quantity: Optional[int] = None,
        variety: Union[Variety, str, None] = None,
    ) -> Optional[str]:
        params: Dict[str, Any] = {"variety": _v(variety) or "regular", "order_id": order_id}
        if quantity is not None:
            params["quantity"] = int(quantity)
        if order_type is not None:
            params["order_type"] = _v(order_type)
        if price is not None:
            params["price"] = price
        if trigger_price is not None:
            params["trigger_price"] = trigger_price
        if validity is not None:
            params["validity"] = _v(validity)
        if disclosed_quantity is not None:
            params["disclosed_quantity"] = int(disclosed_quantity)
        return _order_id(self.dispatcher.put("order.modify", params))

    def cancel_order(self, order_id: str, variety: Union[Variety, str, None] = None) -> Optional[str]:
        return _order_id(
            self.dispatcher.delete("order.cancel", {"variety": _v(variety) or "regular", "order_id": order_id})
        )

    def place_cnc_order(
        self,
        tradingsymbol: str,
        transaction_type: str,
        quantity: int,
        price: Optional[float],
        order_type: str = "LIMIT",
        trigger_price: Optional[float] = None,
    ) -> Optional[str]:
        """Shortcut for a regular NSE CNC order."""

        return self.place_order("NSE", tradingsymbol, transaction_type, quantity, "CNC", order_type, price, trigger_price)

    def modify_cnc_order(
        self,
        order_id: str,
        quantity: int,
        price: Optional[float],
        order_type: str = "LIMIT",
        trigger_price: Optional[float] = None,
    ) -> Optional[str]:
        return self.modify_order(order_id, quantity, order_type, price, trigger_price)

    # --- Portfolio ---
    def positions(self) -> Any:
        return self.dispatcher.get("portfolio.positions")

    def holdings(self) -> Any:
        return self.dispatcher.get("portfolio.holdings")

    def convert_position(
        self,
        exchange: str,
        tradingsymbol: str,
        transaction_type: str,
        position_type: str,
        quantity: int,
        old_product: str,
        new_product: str,
    ) -> Any:
        """Convert an open position between products, e.g. MIS to CNC."""

        return self.dispatcher.put(
            "portfolio.positions.convert",
            {
                "exchange": _v(exchange),
                "tradingsymbol": tradingsymbol,
                "transaction_type": _v(transaction_type),
                "position_type": position_type,
                "quantity": int(quantity),
                "old_product": _v(old_product),
                "new_product": _v(new_product),
            },
        )

    # --- Market data ---
    def instruments(self, exchange: Optional[str] = "NSE") -> Any:
        """Instrument master for an exchange, or for all exchanges when ``None``.

        Rows carry instrument_token, exchange_token, tradingsymbol, name,
        last_price, expiry, strike, tick_size, lot_size, instrument_type,
        segment and exchange, all as strings.
        """

        if exchange:
            return self.dispatcher.get("market.instruments", {"exchange": _v(exchange)})
        return self.dispatcher.get("market.instruments.all")

    def quote(self, instruments: Instruments) -> Any:
        """Full quotes for instruments given as a list or "NSE:INFY,NSE:TCS"."""

        return self.dispatcher.get("market.quote", {"i": instrument_registry.normalize_many(instruments)})

    def ohlc(self, instruments: Instruments) -> Any:
        return self.dispatcher.get("market.quote.ohlc", {"i": instrument_registry.normalize_many(instruments)})

    def ltp(self, instruments: Instruments) -> Any:
        return self.dispatcher.get("market.quote.ltp", {"i": instrument_registry.normalize_many(instruments)})

    def trigger_range(self, transaction_type: str, instruments: Instruments) -> Any:
        return self.dispatcher.get(
            "market.trigger_range",
            {
                "transaction_type": str(_v(transaction_type)).lower(),
                "i": instrument_registry.normalize_many(instruments),
            },
        )

    def historical_data(
        self,
        instrument_token: Union[int, str],
        from_date: Union[str, date, datetime],
        to_date: Union[str, date, datetime],
        interval: str,
        continuous: bool = False,
        oi: bool = False,
    ) -> List[Dict[str, Any]]:
        """Candles for an instrument as a list of dicts (date, open, high, low, close, volume[, oi])."""

        def _fmt(d: Union[str, date, datetime]) -> str:
            if isinstance(d, datetime):
                return d.strftime(HISTORICAL_DATE_FORMAT)
            if isinstance(d, date):
                return d.strftime("%Y-%m-%d")
            return d

        data = self.dispatcher.get(
            "market.historical",
            {
                "instrument_token": instrument_token,
                "interval": interval,
                "from": _fmt(from_date),
                "to": _fmt(to_date),
                "continuous": 1 if continuous else 0,
                "oi": 1 if oi else 0,
            },
        )
        fields = ["date", "open", "high", "low", "close", "volume", "oi"]
        candles = (data or {}).get("candles") or []
        return [dict(zip(fields, candle)) for candle in candles]

    # --- Mutual funds ---
    def mf_orders(self, order_id: Optional[str] = None) -> Any:
        if order_id:
            return self.dispatcher.get("mf.order.info", {"order_id": order_id})
        return self.dispatcher.get("mf.orders")

    def mf_sips(self, sip_id: Optional[str] = None) -> Any:
        if sip_id:
            return self.dispatcher.get("mf.sip.info", {"sip_id": sip_id})
        return self.dispatcher.get("mf.sips")

    def mf_holdings(self) -> Any:
        return self.dispatcher.get("mf.holdings")

    def mf_instruments(self) -> Any:
        return self.dispatcher.get("mf.instruments")

    # --- Low level ---
    def request(self, route: str, method: Union[HttpMethod, str], params: Optional[Dict[str, Any]] = None) -> Any:
        """Call any route in the table directly."""

        return self.dispatcher.execute(route, method, params)
