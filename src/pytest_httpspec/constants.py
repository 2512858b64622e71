from enum import StrEnum

DEFAULT_URI = "http://localhost:80"
DEFAULT_METHOD = "GET"
DEFAULT_TIMEOUT = 3.0


class ConfigOptions(StrEnum):
    """Configuration option names for the pytest-httpspec plugin."""

    BASE_URI = "httpspec_base_uri"
    TIMEOUT = "httpspec_timeout"
    AUTH_STRATEGY = "httpspec_auth_strategy"
