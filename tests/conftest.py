from collections.abc import Callable

import httpx
import pytest

from pytest_httpspec import AsyncHttpxTransport, HttpxTransport, RequestSpec, get_defaults, set_defaults

pytest_plugins = ["pytester"]


class RecordingHandler:
    """Mock transport handler that records every request it serves."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self.respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def restore_defaults():
    """Keep process-wide defaults from leaking between tests."""
    snapshot = get_defaults().model_copy(deep=True)
    yield
    set_defaults(snapshot)


@pytest.fixture
def make_spec():
    """Build a spec whose transports answer through ``respond``."""

    def _make_spec(respond: Callable[[httpx.Request], httpx.Response], uri: str = "http://x/", method: str = "GET", **kwargs):
        handler = RecordingHandler(respond)
        spec = RequestSpec(
            uri,
            method,
            transport=HttpxTransport(httpx.MockTransport(handler)),
            async_transport=AsyncHttpxTransport(httpx.MockTransport(handler)),
            **kwargs,
        )
        return spec, handler

    return _make_spec
