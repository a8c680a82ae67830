import json
from unittest.mock import MagicMock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from kiteclient.auth.credentials import Credentials
from kiteclient.core.dispatcher import RequestDispatcher


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, body=b"", content_type="application/json"):
        self.status_code = status_code
        self.content = body if isinstance(body, bytes) else body.encode("utf-8")
        self.headers = CaseInsensitiveDict({"Content-Type": content_type} if content_type else {})


def json_response(payload, status_code=200, content_type="application/json"):
    return FakeResponse(status_code, json.dumps(payload), content_type)


@pytest.fixture
def session():
    s = MagicMock(spec=requests.Session)
    s.request.return_value = json_response({"status": "success", "data": {}})
    return s


@pytest.fixture
def credentials():
    return Credentials("key1", "tok1")


@pytest.fixture
def dispatcher(credentials, session):
    return RequestDispatcher(credentials, base_url="https://api.example.test/", session=session)
