"""Shared test fixtures for codeproject.

Provides a fresh :class:`SharedTransport` per test (so no test sees the
process-wide default handle), a valid bearer token, and a small recorder
that turns a handler function into an :class:`httpx.MockTransport` while
keeping every request it served.
"""

from __future__ import annotations

from typing import AsyncIterator, Callable
from urllib.parse import parse_qsl

import httpx
import pytest

from codeproject.client.transport import SharedTransport
from codeproject.models import BearerToken


Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers the requests it handled."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


def form_data(request: httpx.Request) -> list[tuple[str, str]]:
    """Decode a form-encoded request body into ordered pairs."""
    return parse_qsl(request.content.decode())


def json_handler(data: object, status_code: int = 200) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=data)

    return handler


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def recording_transport() -> Callable[[Handler], RecordingTransport]:
    """Factory building a :class:`RecordingTransport` from a handler."""
    return RecordingTransport


@pytest.fixture
async def shared_transport() -> AsyncIterator[SharedTransport]:
    """A private shared-transport handle, fully released after the test."""
    shared = SharedTransport()
    yield shared
    while not shared.is_released:
        await shared.release()


@pytest.fixture
def valid_token() -> BearerToken:
    return BearerToken(token="whatever", expires_in=10000)
