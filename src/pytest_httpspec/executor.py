"""Request/assert cycle of a request spec.

One execution runs the auth strategy, sends exactly one request, merges
the response cookies into the jar, evaluates every expectation in
registration order and either returns a :class:`Result` or raises a
:class:`CombinedError` carrying every failure.
"""

import inspect
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from .exceptions import CombinedError, ConfigurationError, ExpectationFailure
from .registry import Expectation
from .transport import Response, SendOptions, build_response

if TYPE_CHECKING:
    from .spec import RequestSpec

logger = logging.getLogger(__name__)

OVERRIDABLE_OPTIONS = frozenset({"method", "url", "body", "headers", "follow_redirect", "json_mode", "timeout"})


@dataclass
class Result:
    status: int
    headers: httpx.Headers
    cookies: dict[str, str]
    body: Any
    errors: dict[str, ExpectationFailure] = field(default_factory=dict)


def collect_failures(expectations: Iterable[Expectation], response: Response) -> dict[str, ExpectationFailure]:
    """Evaluate every expectation; a failing one never stops the rest."""
    errors: dict[str, ExpectationFailure] = {}
    for expectation in expectations:
        outcome = expectation.evaluate(response)
        if not outcome.ok:
            errors[outcome.name] = outcome.failure
    return errors


class Executor:
    def __init__(self, spec: "RequestSpec"):
        self.spec = spec

    def build_options(self, overrides: dict[str, Any]) -> SendOptions:
        unknown = set(overrides) - OVERRIDABLE_OPTIONS
        if unknown:
            raise ConfigurationError(f"Unknown request option(s): {', '.join(sorted(unknown))}")

        spec = self.spec
        options: dict[str, Any] = {
            "method": spec.current_method,
            "url": str(spec.uri),
            "body": spec.current_body,
            "headers": dict(spec.headers),
            "follow_redirect": spec.follow_redirects,
            "json_mode": spec.is_json_mode,
            "timeout": spec.current_timeout,
        }
        options.update(overrides)
        return SendOptions(cookie_jar=spec.cookie_jar, **options)

    def login(self) -> None:
        strategy = self._strategy()
        if strategy is None:
            return
        outcome = strategy(self.spec, self.spec.credentials)
        if inspect.isawaitable(outcome):
            if inspect.iscoroutine(outcome):
                outcome.close()
            raise ConfigurationError("Asynchronous auth strategy requires aexecute()")

    async def alogin(self) -> None:
        strategy = self._strategy()
        if strategy is None:
            return
        outcome = strategy(self.spec, self.spec.credentials)
        if inspect.isawaitable(outcome):
            await outcome

    def _strategy(self):
        if not self.spec.is_logged_in:
            return None
        strategy = self.spec.auth_strategy
        if strategy is None:
            raise ConfigurationError("Cannot login without auth strategy")
        logger.debug(f"Running auth strategy {getattr(strategy, '__name__', strategy)}")
        return strategy

    def request(self, **overrides: Any) -> Response:
        options = self.build_options(overrides)
        self._log_request(options)
        raw = self.spec.transport.send(options)
        return self._receive(raw, options)

    async def arequest(self, **overrides: Any) -> Response:
        options = self.build_options(overrides)
        self._log_request(options)
        raw = await self.spec.async_transport.send(options)
        return self._receive(raw, options)

    def execute(self, **overrides: Any) -> Result:
        self.build_options(overrides)
        self.login()
        response = self.request(**overrides)
        return self._finalize(response)

    async def aexecute(self, **overrides: Any) -> Result:
        self.build_options(overrides)
        await self.alogin()
        response = await self.arequest(**overrides)
        return self._finalize(response)

    def _receive(self, raw: httpx.Response, options: SendOptions) -> Response:
        received = self.spec.cookie_jar.merge_response(raw.headers)
        response = build_response(raw, options.json_mode, self.spec.cookie_jar)
        if self.spec.should_log:
            logger.info(f"Received {response.status_code} from {options.method.upper()} {options.url}")
            if received:
                logger.info(f"Stored cookies: {', '.join(received)}")
        return response

    def _log_request(self, options: SendOptions) -> None:
        if self.spec.should_log:
            logger.info(f"Sending {options.method.upper()} {options.url}")

    def _finalize(self, response: Response) -> Result:
        errors = collect_failures(self.spec.expectations, response)
        result = Result(
            status=response.status_code,
            headers=response.headers,
            cookies=response.cookies,
            body=response.body,
            errors=errors,
        )
        if not errors:
            return result

        if self.spec.should_log:
            for name, failure in errors.items():
                logger.error(f"{name}: {failure.message}")
        raise CombinedError(errors, result)
