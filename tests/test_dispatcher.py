from urllib.parse import urlencode

import pytest
import requests

from kiteclient.core.dispatcher import RequestDispatcher
from kiteclient.core.enums import ErrorKind, HttpMethod
from kiteclient.core.errors import (
    GeneralException,
    MissingParameterError,
    NetworkException,
    OrderException,
    ParseError,
    TimeoutException,
    TokenException,
    UnknownRouteError,
)

from .conftest import FakeResponse, json_response


def _call(session):
    args, kwargs = session.request.call_args
    return args, kwargs


def test_get_builds_url_headers_and_query(dispatcher, session):
    session.request.return_value = json_response({"data": {"user_id": "AB1"}})
    assert dispatcher.execute("user.profile", HttpMethod.GET) == {"user_id": "AB1"}

    (method, url), kwargs = _call(session)
    assert method == "GET"
    assert url == "https://api.example.test/user/profile"
    assert kwargs["headers"] == {
        "X-Kite-Version": "3",
        "User-Agent": dispatcher.user_agent,
        "Authorization": "token key1:tok1",
    }
    assert kwargs["params"] == {}
    assert kwargs["data"] is None
    assert kwargs["timeout"] == 7


def test_no_authorization_without_token(dispatcher, session, credentials):
    credentials.clear()
    dispatcher.execute("user.profile", "get")
    headers = _call(session)[1]["headers"]
    assert "Authorization" not in headers


def test_path_parameters_resolved_and_params_sent(dispatcher, session):
    dispatcher.execute("order.cancel", HttpMethod.DELETE, {"variety": "regular", "order_id": "151220000000000"})
    (method, url), kwargs = _call(session)
    assert method == "DELETE"
    assert url == "https://api.example.test/orders/regular/151220000000000"
    assert kwargs["params"] == {"variety": "regular", "order_id": "151220000000000"}


def test_post_sends_form_body(dispatcher, session):
    session.request.return_value = json_response({"data": {"order_id": "1"}})
    params = {"variety": "regular", "quantity": 1, "price": None}
    assert dispatcher.execute("order.place", "POST", params) == {"order_id": "1"}
    kwargs = _call(session)[1]
    assert kwargs["params"] is None
    assert kwargs["data"] == {"variety": "regular", "quantity": 1}


def test_list_values_serialize_as_repeated_keys(dispatcher, session):
    dispatcher.execute("market.quote", "GET", {"i": ("NSE:INFY", "NSE:TCS")})
    query = _call(session)[1]["params"]
    assert query == {"i": ["NSE:INFY", "NSE:TCS"]}
    prepared = requests.Request("GET", "https://x.test/quote", params=query).prepare()
    assert prepared.url.endswith("?" + urlencode([("i", "NSE:INFY"), ("i", "NSE:TCS")]))


def test_path_values_are_url_encoded(dispatcher, session):
    dispatcher.execute("market.instruments", "GET", {"exchange": "NSE X"})
    assert _call(session)[0][1] == "https://api.example.test/instruments/NSE%20X"


def test_client_errors_raise_before_network(dispatcher, session):
    with pytest.raises(UnknownRouteError):
        dispatcher.execute("does.not.exist", "GET")
    with pytest.raises(MissingParameterError):
        dispatcher.dispatch("order.info", "GET", {})
    session.request.assert_not_called()


def test_error_status_is_classified(dispatcher, session):
    session.request.return_value = json_response(
        {"status": "error", "error_type": "OrderException", "message": "Insufficient funds"}, status_code=400
    )
    with pytest.raises(OrderException) as exc:
        dispatcher.execute("order.place", "POST", {"variety": "regular"})
    assert exc.value.message == "Insufficient funds"
    assert exc.value.status_code == 400
    assert "Insufficient funds" in exc.value.raw_body


def test_dispatch_returns_failure_without_raising(dispatcher, session):
    session.request.return_value = json_response({"error_type": "DataException", "message": "x"}, status_code=502)
    result = dispatcher.dispatch("orders", "GET")
    assert not result.ok
    assert result.error.kind is ErrorKind.DATA
    assert result.response.status_code == 502
    assert result.to_dict()["error"] == {"kind": "DataException", "message": "x"}


def test_token_exception_clears_credentials(dispatcher, session, credentials):
    session.request.return_value = json_response(
        {"error_type": "TokenException", "message": "expired"}, status_code=403
    )
    with pytest.raises(TokenException):
        dispatcher.execute("portfolio.holdings", "GET")
    assert credentials.auth_header() is None

    session.request.return_value = json_response({"data": []})
    dispatcher.execute("portfolio.holdings", "GET")
    assert "Authorization" not in _call(session)[1]["headers"]


def test_non_json_error_body_is_general(dispatcher, session):
    session.request.return_value = FakeResponse(503, "<html>Service Unavailable</html>", "text/html")
    with pytest.raises(GeneralException) as exc:
        dispatcher.execute("orders", "GET")
    assert exc.value.message == "<html>Service Unavailable</html>"
    assert exc.value.status_code == 503


def test_csv_response_is_decoded(dispatcher, session):
    session.request.return_value = FakeResponse(200, "instrument_token,exchange\n123,NSE\n", "text/csv")
    assert dispatcher.execute("market.instruments", "GET", {"exchange": "NSE"}) == [
        {"instrument_token": "123", "exchange": "NSE"}
    ]


def test_unsupported_content_type_returns_none(dispatcher, session):
    session.request.return_value = FakeResponse(200, b"\x89PNG", "image/png")
    result = dispatcher.dispatch("orders", "GET")
    assert result.ok
    assert result.data is None


def test_strict_mode_reports_unsupported_content_type(credentials, session):
    strict = RequestDispatcher(credentials, session=session, strict_content_type=True)
    session.request.return_value = FakeResponse(200, b"hello", "text/plain")
    with pytest.raises(ParseError) as exc:
        strict.execute("orders", "GET")
    assert exc.value.kind is ErrorKind.PARSE
    assert exc.value.status_code == 200


def test_malformed_json_success_is_parse_error(dispatcher, session):
    session.request.return_value = FakeResponse(200, "{not json", "application/json")
    result = dispatcher.dispatch("orders", "GET")
    assert isinstance(result.error, ParseError)
    assert result.error.status_code == 200


def test_timeout_is_its_own_kind(credentials, session):
    session.request.side_effect = requests.Timeout("read timed out")
    d = RequestDispatcher(credentials, session=session, timeout=2.5)
    with pytest.raises(TimeoutException) as exc:
        d.execute("orders", "GET")
    assert exc.value.kind is ErrorKind.TIMEOUT
    assert _call(session)[1]["timeout"] == 2.5


def test_connection_error_is_network_exception(dispatcher, session):
    session.request.side_effect = requests.ConnectionError("refused")
    result = dispatcher.dispatch("orders", "GET")
    assert isinstance(result.error, NetworkException)
    assert result.error.status_code is None
    assert result.response is None


def test_slash_in_path_value_stays_in_one_segment(dispatcher, session):
    dispatcher.execute("order.info", "GET", {"order_id": "../user/profile"})
    assert _call(session)[0][1] == "https://api.example.test/orders/..%2Fuser%2Fprofile"


def test_build_url_quotes_each_value_not_the_template(dispatcher):
    url = dispatcher.build_url("order.modify", {"variety": "co", "order_id": "a/b?c"})
    assert url == "https://api.example.test/orders/co/a%2Fb%3Fc"
