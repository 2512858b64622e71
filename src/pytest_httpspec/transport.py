"""Transport capability: one HTTP round trip per call.

The executor talks to a :class:`Transport` (or :class:`AsyncTransport`)
and never to httpx directly, so tests and users can plug in their own.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import httpx

from .constants import DEFAULT_TIMEOUT
from .cookies import CookieJar
from .exceptions import ConfigurationError, TransportError

logger = logging.getLogger(__name__)


@dataclass
class SendOptions:
    method: str
    url: str
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    cookie_jar: CookieJar = field(default_factory=CookieJar)
    follow_redirect: bool = False
    json_mode: bool = False
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class Response:
    """Read-only view of a response handed to expectation checks."""

    status_code: int
    headers: httpx.Headers
    body: Any
    cookies: dict[str, str] = field(default_factory=dict)
    raw: httpx.Response | None = None

    @property
    def text(self) -> str:
        if self.raw is not None:
            return self.raw.text
        return self.body if isinstance(self.body, str) else json.dumps(self.body)


@runtime_checkable
class Transport(Protocol):
    def send(self, options: SendOptions) -> httpx.Response: ...


@runtime_checkable
class AsyncTransport(Protocol):
    async def send(self, options: SendOptions) -> httpx.Response: ...


def build_request_kwargs(options: SendOptions) -> dict[str, Any]:
    headers = dict(options.headers)
    cookie_header = options.cookie_jar.header_value()
    if cookie_header:
        existing = headers.get("Cookie")
        headers["Cookie"] = f"{existing}; {cookie_header}" if existing else cookie_header

    request_kwargs: dict[str, Any] = {
        "method": options.method.upper(),
        "url": options.url,
        "timeout": options.timeout,
        "follow_redirects": options.follow_redirect,
    }

    body = options.body
    if options.json_mode:
        headers.setdefault("Accept", "application/json")
        if body is not None and body != "":
            request_kwargs["json"] = body
    else:
        match body:
            case None | "":
                pass
            case str() | bytes():
                request_kwargs["content"] = body
            case Mapping():
                request_kwargs["data"] = dict(body)
            case _:
                raise ConfigurationError(f"Body of type {type(body).__name__} requires json mode")

    request_kwargs["headers"] = headers
    return request_kwargs


def decode_body(response: httpx.Response, json_mode: bool) -> Any:
    if json_mode and response.content:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Response is not valid JSON, keeping it as text")
    return response.text


def build_response(raw: httpx.Response, json_mode: bool, cookie_jar: CookieJar) -> Response:
    return Response(
        status_code=raw.status_code,
        headers=raw.headers,
        body=decode_body(raw, json_mode),
        cookies=cookie_jar.as_dict(),
        raw=raw,
    )


class HttpxTransport:
    """Blocking transport backed by :class:`httpx.Client`.

    Args:
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests
        verify: SSL verification flag or CA bundle path
    """

    def __init__(self, transport: httpx.BaseTransport | None = None, verify: bool | str = True):
        self._transport = transport
        self._verify = verify

    def send(self, options: SendOptions) -> httpx.Response:
        request_kwargs = build_request_kwargs(options)
        with httpx.Client(transport=self._transport, verify=self._verify) as client:
            try:
                response = client.request(**request_kwargs)
                return response
            except httpx.TimeoutException as e:
                raise TransportError(f"HTTP request timed out: {str(e)}") from e
            except httpx.ConnectError as e:
                raise TransportError(f"HTTP connection error: {str(e)}") from e
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise TransportError(f"HTTP request failed: {str(e)}") from e


class AsyncHttpxTransport:
    """Non-blocking counterpart of :class:`HttpxTransport`."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None, verify: bool | str = True):
        self._transport = transport
        self._verify = verify

    async def send(self, options: SendOptions) -> httpx.Response:
        request_kwargs = build_request_kwargs(options)
        async with httpx.AsyncClient(transport=self._transport, verify=self._verify) as client:
            try:
                response = await client.request(**request_kwargs)
                return response
            except httpx.TimeoutException as e:
                raise TransportError(f"HTTP request timed out: {str(e)}") from e
            except httpx.ConnectError as e:
                raise TransportError(f"HTTP connection error: {str(e)}") from e
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise TransportError(f"HTTP request failed: {str(e)}") from e
