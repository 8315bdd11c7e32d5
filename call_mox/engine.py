"""Execution of a built :class:`~call_mox.call.Call`.

Execution consults the call's mock-decision function first. When it asks
for a mock, the script it names is evaluated and its envelope is used; a
script returning ``undefined`` declines and the real POST is made instead.
Any other failure on the mock path is final. Both paths share the same
envelope decoding and result-code check.
"""

from __future__ import annotations

import logging
import typing as t
from pathlib import Path

from .envelope import (
    Destination,
    Envelope,
    check_destination,
    decode_envelope,
    settle,
)
from .errors import MockDecisionError, MockLoadError, TransportError
from .evaluator import JavaScriptEvaluator, ScriptEvaluator, render_mock_source
from .transport import Transport, default_transport

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .call import Call

logger = logging.getLogger(__name__)

HTTP_OK: t.Final[int] = 200


def read_script(path: Path | str) -> str:
    """Return the text of the mock script at *path*."""
    try:
        with Path(path).open(encoding="utf-8") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise MockLoadError(path, str(exc)) from exc


def _decide(call: Call) -> tuple[bool, str]:
    """Run the call's mock-decision function, if any."""
    check_mock = call.check_mock
    if check_mock is None:
        return False, ""
    try:
        need_mock, script_path = check_mock(call.url)
    except Exception as exc:
        msg = f"mock decision for {call.url} failed: {exc}"
        raise MockDecisionError(msg) from exc
    logger.debug("Mock decision for %s: %s %s", call.url, need_mock, script_path)
    return bool(need_mock), script_path


def exec_mock(
    call: Call, script_path: Path | str, evaluator: ScriptEvaluator
) -> Envelope | None:
    """Evaluate the mock script for *call*.

    Returns
    -------
    Envelope | None
        The decoded envelope, or ``None`` when the script returned
        ``undefined`` and the real call should be made.

    Raises
    ------
    MockLoadError
        If the script cannot be read.
    MockEvalError
        If the script fails to evaluate.
    DecodeError
        If the script's value is not a valid envelope.
    """
    script = read_script(script_path)
    text = evaluator.evaluate(
        render_mock_source(script), {"url": call.url, "form": call.form}
    )
    if text is None:
        logger.debug("Mock %s declined %s; using real call", script_path, call.url)
        return None
    return decode_envelope(text)


def exec_http(call: Call, transport: Transport) -> Envelope:
    """POST the call's form to its URL and decode the response envelope."""
    with transport.post_form(call.url, call.form) as response:
        status = response.status_code
        if status != HTTP_OK:
            msg = f"http status {status}"
            raise TransportError(msg, status_code=status)
        return Envelope.from_obj(response.json())


def execute(
    call: Call,
    destination: Destination = None,
    *,
    transport: Transport | None = None,
    evaluator: ScriptEvaluator | None = None,
) -> t.Any:  # noqa: ANN401
    """Execute *call* and return the envelope's ``data`` payload.

    Parameters
    ----------
    call:
        The populated call to execute.
    destination:
        Optional target for the payload; a mapping, a mutable sequence or a
        callable. It is written only when the call succeeds.
    transport:
        HTTP collaborator; defaults to
        :func:`~call_mox.transport.default_transport`.
    evaluator:
        Mock script collaborator; defaults to a new
        :class:`~call_mox.evaluator.JavaScriptEvaluator`.

    Raises
    ------
    CallMoxError
        One of its subclasses for every failure; see :mod:`call_mox.errors`.
    TypeError
        If *destination* is not a supported form; raised before any mock
        script or request runs.
    """
    check_destination(destination)
    need_mock, script_path = _decide(call)
    if need_mock:
        script_evaluator = evaluator if evaluator is not None else JavaScriptEvaluator()
        envelope = exec_mock(call, script_path, script_evaluator)
        if envelope is not None:
            return settle(envelope, destination)

    http = transport if transport is not None else default_transport()
    envelope = exec_http(call, http)
    return settle(envelope, destination)


__all__ = ["HTTP_OK", "exec_http", "exec_mock", "execute", "read_script"]
