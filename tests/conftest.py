import json

import pytest
import requests

from neofeeder.client import FeederClient
from neofeeder.config import FeederSettings

URL = "http://feeder.test:3003/ws/live2.php"


class FakeResponse:
    def __init__(self, body=None, status_code=200, text=None):
        self.status_code = status_code
        self._body = body
        if text is None:
            text = json.dumps(body)
        self.text = text

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stands in for `requests`; replies from a queue and records payloads."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def queue(self, *replies):
        self.replies.extend(replies)
        return self

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, FakeResponse):
            return reply
        return FakeResponse(reply)

    @property
    def payloads(self):
        return [c["json"] for c in self.calls]


TOKEN_OK = {"error_code": 0, "error_desc": "", "data": {"token": "abc"}}


@pytest.fixture
def settings():
    return FeederSettings(url=URL, username="operator", password="s3cret", timeout=7)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(settings, session):
    return FeederClient(settings, session=session)


@pytest.fixture
def strict_client(settings, session):
    return FeederClient(settings, session=session, raise_errors=True)


TRANSPORT_FAILURES = [
    requests.exceptions.ConnectTimeout("timed out"),
    requests.exceptions.ConnectionError("connection refused"),
    FakeResponse({"error": "boom"}, status_code=500),
    FakeResponse(None, text="<html>maintenance</html>"),
    FakeResponse(None, text='["not", "an", "object"]'),
]
