"""
Pytest configuration and shared fixtures.

Provider tests never touch the network: responses come from an
``httpx.MockTransport`` that records every outgoing request, and signing
can be swapped for a recording stub strategy.
"""

import os
from typing import Callable

import httpx
import pytest


def pytest_configure(config):
    """Configure pytest with custom settings."""
    os.environ["ENVIRONMENT"] = "test"
    # Keeps Sentry out of test runs
    os.environ["DEBUG"] = "true"


class RecordingTransport:
    """
    Mock transport handler returning queued responses in order.

    Every request sent through :meth:`client` is kept in ``requests``.
    """

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return self.responses.pop(0)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def form_response(body: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        text=body,
        headers={"content-type": "application/x-www-form-urlencoded"},
    )


def json_response(data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=data)


@pytest.fixture
def transport() -> Callable[..., RecordingTransport]:
    """Factory: ``transport(response, ...)`` builds a RecordingTransport."""
    return RecordingTransport


@pytest.fixture
def form():
    return form_response


@pytest.fixture
def as_json():
    return json_response


@pytest.fixture
def consumer():
    from oauthkit.core.services.oauth.base import Consumer

    return Consumer(
        key="consumer_key",
        secret="consumer_secret",
        callback="https://app.com/callback",
    )


@pytest.fixture
def request_token():
    from oauthkit.core.services.oauth.base import RequestToken

    return RequestToken(
        access_token="request_token", secret="request_secret", verifier="verifier_123"
    )


@pytest.fixture
def access_token():
    from oauthkit.core.services.oauth.base import AccessToken

    return AccessToken(access_token="access_token", secret="access_secret", uid="42")


@pytest.fixture
def recording_signature():
    """Stub strategy that records each sign() call and leaves the request unsigned."""
    from oauthkit.core.services.oauth.signature import SignatureMethod

    class RecordingSignature(SignatureMethod):
        name = "RECORDING"

        def __init__(self):
            self.calls = []

        def sign(self, request, consumer, token=None):
            self.calls.append(
                {
                    "kind": request.kind.value,
                    "params": request.params,
                    "consumer": consumer,
                    "token": token,
                }
            )
            return request

    return RecordingSignature()


@pytest.fixture
def fixed_hmac():
    """HMAC-SHA1 strategy with a fixed nonce and timestamp."""
    from oauthkit.core.services.oauth.signature import HmacSha1Signature

    return HmacSha1Signature(nonce="fixednonce", timestamp="1300000000")
