"""
kiteclient: Kite Connect v3 REST API client.

- Route table, error classification and the request dispatcher in `kiteclient.core`
- Credentials and the login checksum in `kiteclient.auth`
- HTTP transport and content-type aware decoding in `kiteclient.net`
- Instrument identifier normalization in `kiteclient.symbols`
- The user-facing client `KiteConnect` in `kiteclient.connect`

Environment variables (and a .env file) are read by `KiteConnect.from_env`.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .connect import KiteConnect
from .auth.credentials import Credentials, compute_checksum
from .core.dispatcher import RequestDispatcher
from .core.enums import ErrorKind, Exchange, HttpMethod, OrderType, ProductType, TransactionType, Validity, Variety
from .core.errors import (
    KiteError,
    ValidationError,
    UnknownRouteError,
    MissingParameterError,
    ApiError,
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

__all__ = [
    "KiteConnect",
    "Credentials",
    "compute_checksum",
    "RequestDispatcher",
    # Enums
    "ErrorKind",
    "Exchange",
    "HttpMethod",
    "OrderType",
    "ProductType",
    "TransactionType",
    "Validity",
    "Variety",
    # Errors
    "KiteError",
    "ValidationError",
    "UnknownRouteError",
    "MissingParameterError",
    "ApiError",
    "TokenException",
    "UserException",
    "OrderException",
    "InputException",
    "NetworkException",
    "DataException",
    "GeneralException",
    "TimeoutException",
    "ParseError",
]
