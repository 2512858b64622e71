"""Process-wide seed values for new request specs.

Builders read the defaults once, at construction. Changing a default affects
only builders created afterwards. Nothing is reset automatically.
"""

import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat

from .constants import DEFAULT_METHOD, DEFAULT_TIMEOUT, DEFAULT_URI

logger = logging.getLogger(__name__)


class Defaults(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    uri: str = Field(default=DEFAULT_URI, description="Base URI of new specs.")
    method: str = Field(default=DEFAULT_METHOD, description="HTTP method of new specs.")
    body: Any = Field(default="", description="Request body of new specs.")
    headers: dict[str, str] = Field(default_factory=dict, description="Headers sent by new specs.")
    cookies: dict[str, str] = Field(default_factory=dict, description="Cookies seeded into the jar of new specs.")
    auth_strategy: Callable[..., Any] | str | None = Field(
        default=None,
        description="Auth hook, as a callable or a 'module:function' import name.",
    )
    timeout: PositiveFloat = Field(default=DEFAULT_TIMEOUT, description="Request timeout in seconds.")


_defaults = Defaults()


def get_defaults() -> Defaults:
    return _defaults


def reset_defaults() -> None:
    global _defaults
    _defaults = Defaults()


def set_default_uri(value: str) -> None:
    _defaults.uri = value
    logger.debug(f"Default URI set to {value}")


def set_default_method(value: str) -> None:
    _defaults.method = value


def set_default_header(name: str, value: str) -> None:
    _defaults.headers[name] = value


def set_default_cookie(name: str, value: str) -> None:
    _defaults.cookies[name] = value


def set_default_body(value: Any) -> None:
    _defaults.body = value


def set_default_auth_strategy(strategy: Callable[..., Any] | str | None) -> None:
    _defaults.auth_strategy = strategy


def set_default_timeout(seconds: float) -> None:
    _defaults.timeout = seconds


def set_defaults(defaults: Defaults) -> None:
    global _defaults
    _defaults = defaults
