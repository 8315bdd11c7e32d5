"""Envelope-aware RPC calls over HTTP with script-based mock substitution.

Build a :class:`Call`, add form arguments, and :meth:`Call.execute` it. When
the call carries a mock-decision function that selects a script, the script
answers instead of the remote endpoint.
"""

from __future__ import annotations

from .call import Call, CheckMock, new_call, new_call_with_check_mock
from .comparators import Glob, Host, UrlPath
from .config import CALLMOX_HTTP_TIMEOUT_ENV, CALLMOX_MOCK_DIR_ENV, ClientConfig
from .engine import execute
from .envelope import Envelope
from .errors import (
    ApplicationError,
    CallMoxError,
    DecodeError,
    MockDecisionError,
    MockEvalError,
    MockLoadError,
    TransportError,
)
from .evaluator import JavaScriptEvaluator, ScriptEvaluator
from .routing import NO_MOCK, MockRouter
from .transport import RequestsTransport, Transport

__all__ = [
    "CALLMOX_HTTP_TIMEOUT_ENV",
    "CALLMOX_MOCK_DIR_ENV",
    "NO_MOCK",
    "ApplicationError",
    "Call",
    "CallMoxError",
    "CheckMock",
    "ClientConfig",
    "DecodeError",
    "Envelope",
    "Glob",
    "Host",
    "JavaScriptEvaluator",
    "MockDecisionError",
    "MockEvalError",
    "MockLoadError",
    "MockRouter",
    "RequestsTransport",
    "ScriptEvaluator",
    "Transport",
    "TransportError",
    "UrlPath",
    "execute",
    "new_call",
    "new_call_with_check_mock",
]
