import logging
from collections.abc import Callable, Mapping
from typing import Any, Self

from .assertions import BUILTIN_EXPECTATIONS
from .cookies import CookieJar
from .defaults import Defaults, get_defaults
from .executor import Executor, Result
from .registry import Check, CheckFactory, Expectation, ExpectationRegistry, RegisteredExpectation
from .transport import AsyncHttpxTransport, AsyncTransport, HttpxTransport, Response, Transport
from .uri import URIBuilder
from .userfunc import resolve_function

logger = logging.getLogger(__name__)

AuthStrategy = Callable[["RequestSpec", Any], Any]


class RequestSpec:
    """Fluent description of one HTTP request and the expectations about its response.

    Every mutator returns the same instance. Scalar fields (method, body) keep
    the last written value; headers, path and query compose onto the current
    state. Expectation methods such as ``expect_status`` are resolved through
    the expectation registry, so plugins registered at runtime are available on
    every spec.

    Args:
        uri: Base URI, the configured default when omitted
        method: HTTP method, the configured default when omitted
        defaults: Explicit defaults instead of the process-wide ones
        transport: Blocking transport used by :meth:`execute`
        async_transport: Non-blocking transport used by :meth:`aexecute`
    """

    def __init__(
        self,
        uri: str | None = None,
        method: str | None = None,
        *,
        defaults: Defaults | None = None,
        transport: Transport | None = None,
        async_transport: AsyncTransport | None = None,
    ):
        if defaults is None:
            defaults = get_defaults()

        self._uri = URIBuilder(uri or defaults.uri)
        self._method = method or defaults.method
        self._body = defaults.body
        self._headers: dict[str, str] = dict(defaults.headers)
        self._cookie_jar = CookieJar(defaults.cookies)
        self._auth_strategy: AuthStrategy | None = resolve_function(defaults.auth_strategy)
        self._timeout = defaults.timeout

        self._credentials: Any = None
        self._logged_in = False
        self._follow_redirect = False
        self._json_mode = False
        self._should_log = True

        self._unnamed_expectation_count = 0
        self._expectations: list[Expectation] = []

        self.transport: Transport = transport or HttpxTransport()
        self.async_transport: AsyncTransport = async_transport or AsyncHttpxTransport()

    def __getattr__(self, name: str) -> Callable[..., Self]:
        if name.startswith("_"):
            raise AttributeError(name)

        entry = registry.get(name)
        if entry is None:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

        def add_expectation(*args: Any, **kwargs: Any) -> Self:
            self._expectations.append(entry.build(self, *args, **kwargs))
            return self

        add_expectation.__name__ = name
        add_expectation.__doc__ = entry.factory.__doc__
        return add_expectation

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(registry.names()))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._method.upper()} {self._uri} expectations={len(self._expectations)}>"

    # builder

    def body(self, body: Any) -> Self:
        self._body = body
        return self

    def method(self, method: str) -> Self:
        self._method = method
        return self

    def header(self, name: str, value: str | None = None) -> Self:
        """Set a request header; a None value removes it."""
        if value is None:
            self._headers.pop(name, None)
        else:
            self._headers[name] = value
        return self

    def path(self, *segments: Any) -> Self:
        self._uri = self._uri.path(*segments)
        return self

    def query(self, name_or_params: str | Mapping[str, Any], value: Any = None) -> Self:
        self._uri = self._uri.query(name_or_params, value)
        return self

    def login(self, credentials: Any) -> Self:
        """Store credentials; the auth strategy runs on the next execution."""
        self._credentials = credentials
        self._logged_in = True
        return self

    def logout(self) -> Self:
        self._credentials = None
        self._logged_in = False
        return self

    def set_auth_strategy(self, strategy: AuthStrategy | str | None) -> Self:
        self._auth_strategy = resolve_function(strategy)
        return self

    def follow_redirect(self, value: bool = True) -> Self:
        self._follow_redirect = bool(value)
        return self

    def json_mode(self, value: bool = True) -> Self:
        self._json_mode = bool(value)
        return self

    def timeout(self, seconds: float) -> Self:
        self._timeout = seconds
        return self

    def log(self, should_log: bool = True) -> Self:
        self._should_log = bool(should_log)
        return self

    debug = log

    def set_cookie(self, name: str, value: str) -> Self:
        self._cookie_jar[name] = value
        return self

    def clear_cookies(self) -> Self:
        self._cookie_jar.clear()
        return self

    def expect(self, name: str | Check, check: Check | None = None) -> Self:
        """Add an ad-hoc check. Without a name it is reported as "Expectation <n>"."""
        if check is None:
            check = name
            self._unnamed_expectation_count += 1
            name = f"Expectation {self._unnamed_expectation_count}"
        self._expectations.append(Expectation(name, check))
        return self

    # state

    @property
    def uri(self) -> URIBuilder:
        return self._uri

    @property
    def current_method(self) -> str:
        return self._method

    @property
    def current_body(self) -> Any:
        return self._body

    @property
    def current_timeout(self) -> float:
        return self._timeout

    @property
    def headers(self) -> dict[str, str]:
        return self._headers

    @property
    def cookie_jar(self) -> CookieJar:
        return self._cookie_jar

    @property
    def credentials(self) -> Any:
        return self._credentials

    @property
    def is_logged_in(self) -> bool:
        return self._logged_in

    @property
    def auth_strategy(self) -> AuthStrategy | None:
        return self._auth_strategy

    @property
    def follow_redirects(self) -> bool:
        return self._follow_redirect

    @property
    def is_json_mode(self) -> bool:
        return self._json_mode

    @property
    def should_log(self) -> bool:
        return self._should_log

    @property
    def expectations(self) -> tuple[Expectation, ...]:
        return tuple(self._expectations)

    # execution

    def request(self, **overrides: Any) -> Response:
        """Send the request once, without auth or expectations."""
        return Executor(self).request(**overrides)

    async def arequest(self, **overrides: Any) -> Response:
        return await Executor(self).arequest(**overrides)

    def execute(self, **overrides: Any) -> Result:
        """Run the auth strategy, send the request and check every expectation.

        Args:
            **overrides: Request options that win over the builder state
                (method, url, body, headers, follow_redirect, json_mode, timeout)

        Returns:
            The result of the execution when every expectation holds

        Raises:
            ConfigurationError: Credentials are stored but no auth strategy is set
            TransportError: The HTTP round trip failed
            CombinedError: One or more expectations failed
        """
        return Executor(self).execute(**overrides)

    async def aexecute(self, **overrides: Any) -> Result:
        """Asynchronous :meth:`execute`; the auth strategy may be a coroutine function."""
        return await Executor(self).aexecute(**overrides)


INSTANCE_ATTRIBUTES = frozenset({"transport", "async_transport"})


def _is_reserved(method_name: str) -> bool:
    return method_name.startswith("_") or method_name in INSTANCE_ATTRIBUTES or hasattr(RequestSpec, method_name)


registry = ExpectationRegistry(reserved=_is_reserved)


def register(method_name: str, factory: CheckFactory, label: str | None = None) -> RegisteredExpectation:
    """Install a chainable expectation method on every request spec."""
    return registry.register(method_name, factory, label)


for _method_name, _factory, _label in BUILTIN_EXPECTATIONS:
    register(_method_name, _factory, _label)


def request_spec(uri: str | None = None, method: str | None = None, **kwargs: Any) -> RequestSpec:
    return RequestSpec(uri, method, **kwargs)
