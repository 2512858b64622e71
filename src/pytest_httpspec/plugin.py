"""Pytest plugin for HTTP request specs.

Registers ini options that seed the process-wide defaults and provides
fixtures to build request specs inside tests.
"""

import logging
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from _pytest import config
from _pytest.config import argparsing

from .constants import DEFAULT_TIMEOUT, ConfigOptions
from .defaults import Defaults, get_defaults, set_default_auth_strategy, set_default_timeout, set_default_uri, set_defaults
from .spec import RequestSpec, request_spec
from .userfunc import parse_function_name

logger = logging.getLogger(__name__)


def pytest_addoption(parser: argparsing.Parser) -> None:
    """Add ini options for the plugin.

    - httpspec_base_uri: Default base URI of request specs
    - httpspec_timeout: Default request timeout in seconds
    - httpspec_auth_strategy: Default auth strategy as "module:function"
    """
    parser.addini(
        name=ConfigOptions.BASE_URI,
        help="Default base URI of request specs.",
        type="string",
        default="",
    )
    parser.addini(
        name=ConfigOptions.TIMEOUT,
        help="Default request timeout in seconds.",
        type="string",
        default=str(DEFAULT_TIMEOUT),
    )
    parser.addini(
        name=ConfigOptions.AUTH_STRATEGY,
        help="Default auth strategy, as 'module.path:function' or a conftest function name.",
        type="string",
        default="",
    )


def pytest_configure(config: config.Config) -> None:
    """Validate ini options and apply them to the process-wide defaults.

    Raises:
        ValueError: If configuration values are invalid
    """
    try:
        timeout = float(config.getini(ConfigOptions.TIMEOUT))
    except ValueError:
        raise ValueError("Request timeout must be a number of seconds") from None
    if timeout <= 0:
        raise ValueError("Request timeout must be positive")
    set_default_timeout(timeout)

    base_uri = str(config.getini(ConfigOptions.BASE_URI))
    if base_uri:
        set_default_uri(base_uri)

    auth_strategy = str(config.getini(ConfigOptions.AUTH_STRATEGY))
    if auth_strategy:
        # only the format is checked here, the function is imported by each new spec
        parse_function_name(auth_strategy)
        set_default_auth_strategy(auth_strategy)

    logger.debug(f"Request spec defaults: {get_defaults()!r}")


@pytest.fixture
def httpspec_defaults() -> Iterator[Defaults]:
    """Process-wide defaults, restored after the test."""
    snapshot = get_defaults().model_copy(deep=True)
    yield get_defaults()
    set_defaults(snapshot)


@pytest.fixture
def http_spec(httpspec_defaults: Defaults) -> Callable[..., RequestSpec]:
    """Factory building request specs from the current defaults."""

    def factory(uri: str | None = None, method: str | None = None, **kwargs: Any) -> RequestSpec:
        return request_spec(uri, method, **kwargs)

    return factory
