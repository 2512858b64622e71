from collections.abc import Mapping
from typing import Any, Self

import httpx


class URIBuilder:
    """Immutable URL value with path and query composition."""

    def __init__(self, url: str | httpx.URL):
        self._url = httpx.URL(url)

    @property
    def url(self) -> httpx.URL:
        return self._url

    def path(self, *segments: Any) -> Self:
        """Append path segments to the current path."""
        parts = [part for part in self._url.path.split("/") if part]
        for segment in segments:
            parts.extend(part for part in str(segment).split("/") if part)
        trailing = "/" if segments and str(segments[-1]).endswith("/") else ""
        new_path = "/" + "/".join(parts) + trailing if parts else "/"
        return type(self)(self._url.copy_with(path=new_path))

    def query(self, name_or_params: str | Mapping[str, Any], value: Any = None) -> Self:
        """Merge query parameters into the existing query. A None value removes the parameter."""
        match name_or_params:
            case str():
                updates = {name_or_params: value}
            case Mapping():
                updates = dict(name_or_params)
            case _:
                raise TypeError(f"query() expects a name or a mapping, got {type(name_or_params).__name__}")

        params = self._url.params
        for key, val in updates.items():
            if val is None:
                params = params.remove(key)
            else:
                params = params.set(key, val)
        return type(self)(self._url.copy_with(params=params))

    def __str__(self) -> str:
        return str(self._url)

    def __repr__(self) -> str:
        return f"URIBuilder({str(self._url)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, URIBuilder):
            return self._url == other._url
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._url)
