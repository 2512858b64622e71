from .cookies import CookieJar
from .defaults import (
    Defaults,
    get_defaults,
    reset_defaults,
    set_defaults,
    set_default_auth_strategy,
    set_default_body,
    set_default_cookie,
    set_default_header,
    set_default_method,
    set_default_timeout,
    set_default_uri,
)
from .exceptions import CombinedError, ConfigurationError, ExpectationFailure, HttpSpecError, TransportError
from .executor import Result
from .registry import Expectation, ExpectationOutcome, ExpectationRegistry
from .spec import RequestSpec, register, registry, request_spec
from .transport import AsyncHttpxTransport, HttpxTransport, Response, SendOptions
from .uri import URIBuilder

__all__ = [
    "request_spec",
    "RequestSpec",
    "register",
    "registry",
    "Result",
    "Response",
    "SendOptions",
    "HttpxTransport",
    "AsyncHttpxTransport",
    "CookieJar",
    "URIBuilder",
    "Expectation",
    "ExpectationOutcome",
    "ExpectationRegistry",
    "Defaults",
    "get_defaults",
    "reset_defaults",
    "set_defaults",
    "set_default_uri",
    "set_default_method",
    "set_default_header",
    "set_default_cookie",
    "set_default_body",
    "set_default_auth_strategy",
    "set_default_timeout",
    "HttpSpecError",
    "ConfigurationError",
    "TransportError",
    "ExpectationFailure",
    "CombinedError",
]
