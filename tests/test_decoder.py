import pytest

from kiteclient.core.errors import ParseError
from kiteclient.net.decoder import UNSUPPORTED, ResponseDecoder, media_type


@pytest.fixture
def decoder():
    return ResponseDecoder()


def test_json_returns_data_field(decoder):
    assert decoder.decode("application/json", b'{"data": {"user_id": "AB1"}}') == {"user_id": "AB1"}


def test_json_without_data_is_none(decoder):
    assert decoder.decode("application/json", b'{"status": "success"}') is None


def test_json_content_type_parameters_are_ignored(decoder):
    assert decoder.decode("Application/JSON; charset=utf-8", b'{"data": [1, 2]}') == [1, 2]


def test_invalid_json_raises_parse_error(decoder):
    with pytest.raises(ParseError) as exc:
        decoder.decode("application/json", b"<html>bad gateway</html>")
    assert exc.value.raw_body == "<html>bad gateway</html>"


def test_json_envelope_must_be_an_object(decoder):
    with pytest.raises(ParseError):
        decoder.decode("application/json", b"[1, 2, 3]")


def test_csv_rows_are_text_records(decoder):
    rows = decoder.decode("text/csv", b"instrument_token,exchange\n123,NSE\n")
    assert rows == [{"instrument_token": "123", "exchange": "NSE"}]


def test_csv_keeps_order_and_empty_cells(decoder):
    body = b"instrument_token,tradingsymbol,expiry,strike\n408065,INFY,,0\n5720322,NIFTY24JANFUT,2024-01-25,0.0\n"
    rows = decoder.decode("text/csv", body)
    assert [r["tradingsymbol"] for r in rows] == ["INFY", "NIFTY24JANFUT"]
    assert list(rows[0]) == ["instrument_token", "tradingsymbol", "expiry", "strike"]
    assert rows[0]["expiry"] == ""
    assert rows[1]["strike"] == "0.0"


def test_empty_csv_is_empty_list(decoder):
    assert decoder.decode("text/csv", b"") == []


def test_unknown_content_type_is_unsupported(decoder):
    result = decoder.decode("application/octet-stream", b"\x00\x01")
    assert result is UNSUPPORTED
    assert not result
    assert decoder.decode("", b"{}") is UNSUPPORTED
    assert not decoder.supports("text/html")


def test_media_type():
    assert media_type("text/csv; charset=utf-8") == "text/csv"
    assert media_type(None) == ""


@pytest.mark.parametrize(
    "body",
    [
        b"a,b\n1,2,3\n4,5\n",
        b"a,b\n1,2\n3,4,5\n",
    ],
)
def test_csv_row_longer_than_header_is_parse_error(decoder, body):
    with pytest.raises(ParseError) as exc:
        decoder.decode("text/csv", body)
    assert exc.value.raw_body == body.decode("utf-8")


def test_csv_first_column_is_never_used_as_index(decoder):
    rows = decoder.decode("text/csv", b"a,b\n1,2\n")
    assert rows == [{"a": "1", "b": "2"}]
