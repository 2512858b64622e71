import logging
from collections.abc import Iterator, Mapping, MutableMapping

import httpx

logger = logging.getLogger(__name__)


class CookieJar(MutableMapping[str, str]):
    """Per-spec store of cookie name/value pairs replayed on later requests.

    Only raw name/value pairs are kept; expiry, domain and path attributes
    of Set-Cookie are ignored.
    """

    def __init__(self, cookies: Mapping[str, str] | None = None):
        self._cookies: dict[str, str] = dict(cookies or {})

    def __getitem__(self, name: str) -> str:
        return self._cookies[name]

    def __setitem__(self, name: str, value: str) -> None:
        self._cookies[name] = value

    def __delitem__(self, name: str) -> None:
        del self._cookies[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._cookies)

    def __len__(self) -> int:
        return len(self._cookies)

    def __repr__(self) -> str:
        return f"CookieJar({self._cookies!r})"

    def merge_response(self, headers: httpx.Headers) -> dict[str, str]:
        """Store every cookie set by the response and return what was set."""
        received: dict[str, str] = {}
        for raw in headers.get_list("set-cookie"):
            pair = raw.split(";", 1)[0]
            name, sep, value = pair.partition("=")
            name = name.strip()
            if not sep or not name:
                logger.warning(f"Ignoring malformed Set-Cookie header {raw!r}")
                continue
            received[name] = value.strip()

        self._cookies.update(received)
        return received

    def header_value(self) -> str | None:
        if not self._cookies:
            return None
        return "; ".join(f"{name}={value}" for name, value in self._cookies.items())

    def as_dict(self) -> dict[str, str]:
        return dict(self._cookies)
