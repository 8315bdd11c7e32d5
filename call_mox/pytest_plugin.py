"""Pytest plugin providing mock-script and transport fixtures."""

from __future__ import annotations

import logging
import textwrap
import typing as t
from pathlib import Path

import pytest

from .routing import DEFAULT_SCRIPT_SUFFIX, MockRouter
from .testing import FakeTransport

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .comparators import Comparator

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("call_mox")
    group.addoption(
        "--call-mox-no-mocks",
        action="store_true",
        dest="call_mox_no_mocks",
        default=False,
        help=(
            "Disable the router returned by the call_mox_scripts fixture so "
            "every call reaches the real endpoint."
        ),
    )
    parser.addini(
        "call_mox_script_suffix",
        "File suffix used for mock scripts written by call_mox_scripts.",
        default=DEFAULT_SCRIPT_SUFFIX,
    )


class MockScripts:
    """Scratch directory of mock scripts wired to a :class:`MockRouter`."""

    def __init__(self, directory: Path, *, suffix: str, enabled: bool) -> None:
        self.directory = directory
        self.suffix = suffix
        self.router = MockRouter.from_directory(directory, suffix=suffix)
        self.router.enabled = enabled

    def write(self, url_path: str, source: str) -> Path:
        """Write *source* as the directory mock for *url_path*."""
        target = self.directory / f"{url_path.strip('/')}{self.suffix}"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(textwrap.dedent(source), encoding="utf-8")
        return target

    def route(self, matcher: Comparator | str, source: str, *, name: str) -> Path:
        """Write *source* under *name* and route *matcher* to it."""
        script = self.directory / "_routes" / f"{name}{self.suffix}"
        script.parent.mkdir(parents=True, exist_ok=True)
        script.write_text(textwrap.dedent(source), encoding="utf-8")
        self.router.route(matcher, script)
        return script


@pytest.fixture
def call_mox_scripts(
    request: pytest.FixtureRequest, tmp_path: Path
) -> MockScripts:
    """Provide a :class:`MockScripts` rooted in a per-test directory."""
    directory = tmp_path / "call-mox-scripts"
    directory.mkdir()
    suffix = str(request.config.getini("call_mox_script_suffix"))
    enabled = not request.config.getoption("call_mox_no_mocks")
    if not enabled:
        logger.debug("call_mox mocks disabled for %s", request.node.nodeid)
    return MockScripts(directory, suffix=suffix, enabled=enabled)


@pytest.fixture
def call_mox_transport() -> FakeTransport:
    """Provide an in-memory transport recording every POST."""
    return FakeTransport()


__all__ = ["MockScripts", "call_mox_scripts", "call_mox_transport"]
