from __future__ import annotations

from enum import Enum


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        return self in (HttpMethod.POST, HttpMethod.PUT)


class ErrorKind(str, Enum):
    # Client-side, raised before any network call
    UNKNOWN_ROUTE = "UnknownRoute"
    MISSING_PARAMETER = "MissingParameter"
    # Transport
    TIMEOUT = "Timeout"
    # Server-classified (value is the broker's error_type)
    TOKEN = "TokenException"
    USER = "UserException"
    ORDER = "OrderException"
    INPUT = "InputException"
    NETWORK = "NetworkException"
    DATA = "DataException"
    GENERAL = "GeneralException"
    # Decode-time
    PARSE = "ParseError"


class Exchange(str, Enum):
    NSE = "NSE"
    BSE = "BSE"
    NFO = "NFO"  # NSE F&O
    BFO = "BFO"  # BSE F&O
    MCX = "MCX"
    CDS = "CDS"  # Currency derivatives


class OrderType(str, Enum):
    MARKET = "MARKET"
    LIMIT = "LIMIT"
    SL = "SL"  # Stop loss limit
    SL_M = "SL-M"  # Stop loss market


class ProductType(str, Enum):
    MIS = "MIS"  # Intraday
    CNC = "CNC"  # Cash & Carry
    NRML = "NRML"  # Margin


class TransactionType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class Variety(str, Enum):
    REGULAR = "regular"
    BO = "bo"
    CO = "co"
    AMO = "amo"


class Validity(str, Enum):
    DAY = "DAY"
    IOC = "IOC"
