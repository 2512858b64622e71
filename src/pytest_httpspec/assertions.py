"""Built-in expectation checks.

Every factory takes the user's arguments and returns a check over the
response which raises :class:`ExpectationFailure` on mismatch.
"""

import re
from collections.abc import Mapping
from typing import Any

from .exceptions import ExpectationFailure
from .registry import Check
from .transport import Response


def expect_status(expected: int) -> Check:
    def check(response: Response) -> None:
        if response.status_code != int(expected):
            raise ExpectationFailure(f"Status code doesn't match: expected {int(expected)}, got {response.status_code}")

    return check


def _value_matches(expected: Any, actual: str | None) -> bool:
    if actual is None:
        return expected is None
    if isinstance(expected, re.Pattern):
        return expected.search(actual) is not None
    return actual == str(expected)


def expect_headers(expected: Mapping[str, Any]) -> Check:
    def check(response: Response) -> None:
        mismatches = []
        for header_name, expected_value in expected.items():
            actual_value = response.headers.get(header_name)
            if not _value_matches(expected_value, actual_value):
                mismatches.append(f"Header '{header_name}' doesn't match: expected {expected_value}, got {actual_value}")
        if mismatches:
            raise ExpectationFailure("; ".join(mismatches))

    return check


def expect_cookies(expected: Mapping[str, Any]) -> Check:
    def check(response: Response) -> None:
        mismatches = []
        for cookie_name, expected_value in expected.items():
            actual_value = response.cookies.get(cookie_name)
            if not _value_matches(expected_value, actual_value):
                mismatches.append(f"Cookie '{cookie_name}' doesn't match: expected {expected_value}, got {actual_value}")
        if mismatches:
            raise ExpectationFailure("; ".join(mismatches))

    return check


def expect_body(expected: Any) -> Check:
    def check(response: Response) -> None:
        if response.body != expected:
            raise ExpectationFailure(f"Body doesn't match: expected {expected!r}, got {response.body!r}")

    return check


def is_partial_match(expected: Any, actual: Any) -> bool:
    """Whether ``actual`` contains ``expected``.

    Mappings match when every expected key matches recursively, lists when
    every expected item matches some actual item, strings by substring, and
    everything else by equality.
    """
    match expected:
        case Mapping():
            if not isinstance(actual, Mapping):
                return False
            return all(key in actual and is_partial_match(value, actual[key]) for key, value in expected.items())
        case list() | tuple():
            if not isinstance(actual, list | tuple):
                return False
            return all(any(is_partial_match(item, candidate) for candidate in actual) for item in expected)
        case str():
            return isinstance(actual, str) and expected in actual
        case _:
            return expected == actual


def expect_partial_body(expected: Any) -> Check:
    def check(response: Response) -> None:
        if not is_partial_match(expected, response.body):
            raise ExpectationFailure(f"Body doesn't contain {expected!r}, got {response.body!r}")

    return check


BUILTIN_EXPECTATIONS = (
    ("expect_cookies", expect_cookies, "Cookies"),
    ("expect_headers", expect_headers, "Headers"),
    ("expect_body", expect_body, "Body"),
    ("expect_status", expect_status, "Status"),
    ("expect_partial_body", expect_partial_body, "Body"),
)
