"""Registry of expectation kinds available as chainable spec methods.

A registered factory takes the user's arguments and returns a check; a
factory with a ``spec`` parameter also receives the builder it is called on.
The check receives the :class:`~pytest_httpspec.transport.Response` and raises
on mismatch. Registration is process-wide and permanent.
"""

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .exceptions import ConfigurationError, ExpectationFailure
from .transport import Response

logger = logging.getLogger(__name__)

Check = Callable[[Response], Any]
CheckFactory = Callable[..., Check]


@dataclass(frozen=True)
class ExpectationOutcome:
    name: str
    failure: ExpectationFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class Expectation:
    name: str
    check: Check

    def evaluate(self, response: Response) -> ExpectationOutcome:
        """Run the check, turning anything it raises into a failed outcome."""
        try:
            self.check(response)
        except ExpectationFailure as e:
            return ExpectationOutcome(self.name, e)
        except Exception as e:
            failure = ExpectationFailure(str(e) or type(e).__name__)
            failure.__cause__ = e
            return ExpectationOutcome(self.name, failure)
        return ExpectationOutcome(self.name)


@dataclass(frozen=True)
class RegisteredExpectation:
    method_name: str
    factory: CheckFactory
    label: str
    binds_spec: bool = False

    def build(self, spec: Any, *args: Any, **kwargs: Any) -> Expectation:
        if self.binds_spec:
            kwargs["spec"] = spec
        return Expectation(self.label, self.factory(*args, **kwargs))


def accepts_spec(factory: CheckFactory) -> bool:
    try:
        parameter = inspect.signature(factory).parameters.get("spec")
    except (TypeError, ValueError):
        return False
    return parameter is not None and parameter.kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)


def default_label(method_name: str) -> str:
    return method_name[0].upper() + method_name[1:]


class ExpectationRegistry:
    def __init__(self, reserved: Callable[[str], bool] | None = None):
        self._entries: dict[str, RegisteredExpectation] = {}
        self._reserved = reserved

    def register(self, method_name: str, factory: CheckFactory, label: str | None = None) -> RegisteredExpectation:
        """Install a new expectation kind under ``method_name``.

        Raises:
            ConfigurationError: If the name or factory is missing, or the name is taken
        """
        if not method_name or factory is None:
            raise ConfigurationError("Expectation method must have a name and a check factory")

        if not callable(factory):
            raise ConfigurationError(f"Check factory for '{method_name}' must be callable, got {type(factory).__name__}")

        if method_name.startswith("_"):
            raise ConfigurationError(f"Expectation method name '{method_name}' must not start with an underscore")

        if method_name in self._entries or (self._reserved is not None and self._reserved(method_name)):
            raise ConfigurationError(f"Request spec already has a method named '{method_name}'")

        entry = RegisteredExpectation(method_name, factory, label or default_label(method_name), accepts_spec(factory))
        self._entries[method_name] = entry
        logger.debug(f"Registered expectation {method_name} (label {entry.label})")
        return entry

    def get(self, method_name: str) -> RegisteredExpectation | None:
        return self._entries.get(method_name)

    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, method_name: object) -> bool:
        return method_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
