"""Ready-made mock-decision functions.

A mock-decision function maps a URL to ``(need_mock, script_path)``.
:class:`MockRouter` builds one from explicit ``matcher -> script`` routes
and, optionally, a directory whose layout mirrors the URL paths of the
remote API (``/api/user/get`` -> ``<root>/api/user/get.js``).
"""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import typing as t
from pathlib import Path
from urllib.parse import urlsplit

from .comparators import UrlPath
from .config import ClientConfig

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .comparators import Comparator

logger = logging.getLogger(__name__)

DEFAULT_SCRIPT_SUFFIX: t.Final[str] = ".js"

NO_MOCK: t.Final[tuple[bool, str]] = (False, "")


@dc.dataclass(frozen=True, slots=True)
class MockRoute:
    """Associate a URL matcher with a mock script path."""

    matcher: Comparator
    script: Path


class MockRouter:
    """Callable mock-decision function built from routes and a directory."""

    def __init__(
        self,
        *,
        directory: Path | str | None = None,
        suffix: str = DEFAULT_SCRIPT_SUFFIX,
        enabled: bool = True,
    ) -> None:
        self._routes: list[MockRoute] = []
        self._directory = Path(directory) if directory is not None else None
        self._suffix = suffix
        self.enabled = enabled

    @classmethod
    def from_directory(
        cls, directory: Path | str, *, suffix: str = DEFAULT_SCRIPT_SUFFIX
    ) -> MockRouter:
        """Return a router resolving scripts beneath *directory*."""
        return cls(directory=directory, suffix=suffix)

    @classmethod
    def from_config(cls, config: ClientConfig | None = None) -> MockRouter:
        """Return a router for ``config.mock_dir``, disabled when it is unset."""
        cfg = config if config is not None else ClientConfig.from_env()
        return cls(directory=cfg.mock_dir, enabled=cfg.mock_dir is not None)

    @property
    def routes(self) -> tuple[MockRoute, ...]:
        """Return the explicit routes in match order."""
        return tuple(self._routes)

    @property
    def directory(self) -> Path | None:
        """Return the script directory, if any."""
        return self._directory

    def route(self, matcher: Comparator | str, script: Path | str) -> MockRouter:
        """Mock URLs accepted by *matcher* with *script*.

        A plain string matcher is compared against the URL path.
        """
        if isinstance(matcher, str):
            matcher = UrlPath(matcher)
        self._routes.append(MockRoute(matcher=matcher, script=Path(script)))
        return self

    def __call__(self, url: str) -> tuple[bool, str]:
        """Return ``(need_mock, script_path)`` for *url*."""
        if not self.enabled:
            return NO_MOCK

        for entry in self._routes:
            if entry.matcher(url):
                logger.debug(
                    "URL %s routed to mock %s via %r", url, entry.script, entry.matcher
                )
                return True, os.fspath(entry.script)

        script = self._script_in_directory(url)
        if script is not None:
            logger.debug("URL %s routed to mock %s", url, script)
            return True, os.fspath(script)
        return NO_MOCK

    def _script_in_directory(self, url: str) -> Path | None:
        """Locate the directory script mirroring the path of *url*."""
        if self._directory is None:
            return None
        rel = urlsplit(url).path.strip("/")
        if not rel:
            return None

        root = self._directory.resolve()
        candidate = (root / f"{rel}{self._suffix}").resolve()
        # Reject paths escaping the root through ``..`` segments.
        if not candidate.is_relative_to(root):
            return None
        return candidate if candidate.is_file() else None


__all__ = ["DEFAULT_SCRIPT_SUFFIX", "NO_MOCK", "MockRoute", "MockRouter"]
