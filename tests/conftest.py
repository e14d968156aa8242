# tests/conftest.py

import pytest

from agent700_adapter.core.models import Credential

APP_PASSWORD = "app_a7_" + "0123456789abcdef" * 2
BASE_URL = "https://api.agent700.ai"


class FakeTransport:
    """
    Stand-in for the remote API. Answers are consumed in order; an
    Exception instance in the queue is raised instead of returned.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)
        return self

    def request(self, method, url, headers=None, body=None):
        self.calls.append({"method": method, "url": url, "headers": headers, "body": body})
        if not self.responses:
            raise AssertionError(f"unexpected call: {method} {url}")
        res = self.responses.pop(0)
        if isinstance(res, Exception):
            raise res
        return res

    @property
    def unit_calls(self):
        return self.calls[1:]


@pytest.fixture
def credential():
    return Credential(base_url=BASE_URL, secret=APP_PASSWORD)


@pytest.fixture
def transport():
    # every batch starts with the login call
    return FakeTransport({"accessToken": "tok"})


@pytest.fixture
def make_transport():
    return FakeTransport
