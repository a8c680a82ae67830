"""Core enums, schemas, errors, route table and error classification.

The dispatcher lives in ``kiteclient.core.dispatcher`` and is imported from
there directly, since it depends on the networking package.
"""

from .enums import ErrorKind, Exchange, HttpMethod, OrderType, ProductType, TransactionType, Validity, Variety
from .schemas import DispatchResult, RawResponse, RequestSpec, Route
from .errors import (
    KiteError,
    ValidationError,
    RouteDefinitionError,
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
from .routes import ROUTES, ROUTE_TABLE, RouteTable
from .classifier import ErrorClassifier

__all__ = [
    # Enums
    "ErrorKind",
    "Exchange",
    "HttpMethod",
    "OrderType",
    "ProductType",
    "TransactionType",
    "Validity",
    "Variety",
    # Schemas
    "DispatchResult",
    "RawResponse",
    "RequestSpec",
    "Route",
    # Errors
    "KiteError",
    "ValidationError",
    "RouteDefinitionError",
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
    # Routing / classification
    "ROUTES",
    "ROUTE_TABLE",
    "RouteTable",
    "ErrorClassifier",
]
