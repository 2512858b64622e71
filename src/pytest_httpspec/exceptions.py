from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .executor import Result


class HttpSpecError(Exception):
    pass


class ConfigurationError(HttpSpecError):
    """Invalid setup: missing auth strategy, bad registration, bad option value."""


class TransportError(HttpSpecError):
    """The HTTP round trip could not be completed."""


class ExpectationFailure(AssertionError):
    """A single expectation did not hold for the response."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def error(self) -> str:
        return self.message


class CombinedError(HttpSpecError):
    """Every failed expectation of one execution, together with its result."""

    def __init__(self, errors: dict[str, ExpectationFailure], result: "Result"):
        self.errors = errors
        self.result = result
        lines = [f"{len(errors)} expectation(s) failed:"]
        lines.extend(f"  - {name}: {failure.message}" for name, failure in errors.items())
        super().__init__("\n".join(lines))
