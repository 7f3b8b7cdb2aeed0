"""
Shared fixtures for unit tests.

FakeSession stands in for aiohttp.ClientSession: it records every get/post
call and answers with scripted outcomes, so no test touches the network.

An outcome is either:
    - (status, body)                 e.g. (200, b'{"close": 1.0}')
    - (status, body, reason)         e.g. (400, b'...', "Bad Request")
    - an exception instance          raised when the request context is entered
    - HANG                           never answers (for cancelling in-flight calls)
"""

import asyncio

import pytest

from intrinio.client import IntrinioClient


class MockResponse:
    def __init__(self, status, body=b"", reason="OK"):
        self.status = status
        self.reason = reason
        self._body = body if isinstance(body, bytes) else body.encode("utf-8")

    async def read(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass


HANG = object()


class _RequestContext:
    def __init__(self, outcome):
        self._outcome = outcome

    async def __aenter__(self):
        if self._outcome is HANG:
            await asyncio.Event().wait()
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return MockResponse(*self._outcome)

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass


class FakeSession:
    def __init__(self, outcomes):
        self._outcomes = list(outcomes) or [(200, b"{}")]
        self.calls = []
        self.closed = False

    def _request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        # Last outcome repeats once the script runs out
        if len(self._outcomes) > 1:
            outcome = self._outcomes.pop(0)
        else:
            outcome = self._outcomes[0]
        return _RequestContext(outcome)

    def get(self, url, **kwargs):
        return self._request("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._request("POST", url, **kwargs)

    async def close(self):
        self.closed = True


@pytest.fixture
def stub_client():
    """
    Build a client whose session is a FakeSession answering with `outcomes`.

    Example:
        client = stub_client((200, b'{"close": 1.0}'))
        result = await client.get_prices(identifier="AAPL")
        assert client.session.calls[0]["url"].endswith("/prices")
    """
    def _build(*outcomes, client_cls=IntrinioClient, username="user", password="secret", **kwargs):
        client = client_cls(username, password, **kwargs)
        client.session = FakeSession(outcomes)
        return client

    return _build


@pytest.fixture
def hang():
    """Outcome for stub_client that never answers."""
    return HANG
