"""Global test configuration and shared fixtures."""

from __future__ import annotations

import logging
import typing as t

import pytest

import call_mox.transport

pytest_plugins = ("call_mox.pytest_plugin", "pytester")


@pytest.fixture(autouse=True)
def reset_default_transport() -> t.Generator[None, None, None]:
    """Ensure no test shares the lazily created default transport."""
    call_mox.transport._default_transport = None
    yield
    transport = call_mox.transport._default_transport
    if transport is not None:
        transport.close()
    call_mox.transport._default_transport = None


@pytest.fixture(autouse=True)
def debug_logging(caplog: pytest.LogCaptureFixture) -> None:
    """Capture library debug records so failures show the decision trail."""
    caplog.set_level(logging.DEBUG, logger="call_mox")
