"""URL matchers used to select mock routes.

Any ``Callable[[str], bool]`` works as a route matcher; the classes here
cover the common cases and carry readable reprs for debug logs.
"""

from __future__ import annotations

import fnmatch
import typing as t
from urllib.parse import urlsplit


class Comparator(t.Protocol):
    """Callable returning ``True`` when a URL matches."""

    def __call__(self, value: str) -> bool:
        """Return ``True`` if *value* satisfies the comparison."""
        ...


class UrlPath:
    """Match URLs whose path component equals ``path``.

    Scheme, host, query and fragment are ignored, so ``UrlPath("/api/user")``
    matches ``http://localhost:8080/api/user?id=1``.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def __call__(self, value: str) -> bool:
        """Return ``True`` if the path of *value* equals ``path``."""
        return urlsplit(value).path == self.path

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"UrlPath({self.path!r})"


class Glob:
    """Match the URL path against a shell-style ``pattern``."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern

    def __call__(self, value: str) -> bool:
        """Return ``True`` if the path of *value* matches ``pattern``."""
        return fnmatch.fnmatchcase(urlsplit(value).path, self.pattern)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Glob({self.pattern!r})"


class Host:
    """Match URLs addressed to ``host``, optionally on a given ``port``.

    Host names compare case-insensitively. Without a ``port`` every port
    matches, including the scheme default.
    """

    def __init__(self, host: str, port: int | None = None) -> None:
        self.host = host.lower()
        self.port = port

    def __call__(self, value: str) -> bool:
        """Return ``True`` if *value* targets the configured host and port."""
        parts = urlsplit(value)
        if parts.hostname != self.host:
            return False
        return self.port is None or parts.port == self.port

    def __repr__(self) -> str:
        """Return a debug representation."""
        if self.port is None:
            return f"Host({self.host!r})"
        return f"Host({self.host!r}, {self.port})"


__all__ = ["Comparator", "Glob", "Host", "UrlPath"]
