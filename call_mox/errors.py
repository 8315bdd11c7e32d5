"""Exception hierarchy for call execution failures."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from pathlib import Path


class CallMoxError(Exception):
    """Base class for all errors raised while executing a call."""


class TransportError(CallMoxError):
    """Raised when the HTTP round trip fails or returns a non-200 status.

    Attributes
    ----------
    status_code : int | None
        The HTTP status code when a response was received, otherwise
        ``None`` for connection-level failures.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(CallMoxError):
    """Raised when a response body cannot be decoded into an envelope."""


class MockLoadError(CallMoxError):
    """Raised when a mock script cannot be read from disk."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"cannot load mock script {path}: {reason}")
        self.path = path


class MockEvalError(CallMoxError):
    """Raised when a mock script fails to evaluate or stringify."""


class MockDecisionError(CallMoxError):
    """Raised when the mock-decision function itself fails."""


class ApplicationError(CallMoxError):
    """Raised when an envelope carries a non-zero result code.

    The ``code`` and ``message`` are copied verbatim from the envelope for
    the caller to interpret.
    """

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"application error {code}: {message}")
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"ApplicationError(code={self.code!r}, message={self.message!r})"


__all__ = [
    "ApplicationError",
    "CallMoxError",
    "DecodeError",
    "MockDecisionError",
    "MockEvalError",
    "MockLoadError",
    "TransportError",
]
