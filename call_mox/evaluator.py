"""Script evaluation for mock responses.

A mock script is a single JavaScript expression evaluating to a function of
``(url, form)``. The engine wraps it in :data:`MOCK_SOURCE_TEMPLATE` so the
evaluator only ever has to return a JSON string, or ``None`` when the script
returned ``undefined`` and thereby declined to mock the call.
"""

from __future__ import annotations

import json
import logging
import typing as t

import dukpy

from .errors import MockEvalError

logger = logging.getLogger(__name__)

MOCK_SOURCE_TEMPLATE: t.Final[str] = "JSON.stringify(({script}\n)(url, form))"

_RESULT_VAR: t.Final[str] = "__callmox_result"


class ScriptEvaluator(t.Protocol):
    """Evaluate a source expression with named global bindings."""

    def evaluate(self, source: str, bindings: t.Mapping[str, object]) -> str | None:
        """Return the expression's string value, or ``None`` if undefined.

        Raises
        ------
        MockEvalError
            If evaluation fails or the value is neither a string nor
            undefined.
        """
        ...


def render_mock_source(script: str) -> str:
    """Wrap the body of a mock script file for evaluation."""
    return MOCK_SOURCE_TEMPLATE.format(script=script)


def _binding_prelude(bindings: t.Mapping[str, object]) -> str:
    """Return statements exposing each binding as a JavaScript global."""
    lines = []
    for name in bindings:
        if not name.isidentifier():
            msg = f"invalid script binding name: {name!r}"
            raise ValueError(msg)
        lines.append(f"var {name} = dukpy[{json.dumps(name)}];")
    return "\n".join(lines)


class JavaScriptEvaluator:
    """Evaluate expressions in a fresh embedded Duktape interpreter."""

    def evaluate(self, source: str, bindings: t.Mapping[str, object]) -> str | None:
        """Evaluate *source* with *bindings* exposed as globals."""
        program = (
            f"{_binding_prelude(bindings)}\n"
            f"var {_RESULT_VAR} = ({source}\n);\n"
            f"{_RESULT_VAR} === undefined ? null : {_RESULT_VAR};"
        )
        try:
            value = dukpy.evaljs(program, **bindings)
        except dukpy.JSRuntimeError as exc:
            msg = f"mock script evaluation failed: {exc}"
            raise MockEvalError(msg) from exc
        except (TypeError, ValueError) as exc:
            # Raised when bindings cannot be marshalled into the interpreter.
            msg = f"cannot pass bindings to mock script: {exc}"
            raise MockEvalError(msg) from exc

        if value is None or isinstance(value, str):
            return value
        msg = f"mock script produced {type(value).__name__}, expected a string"
        raise MockEvalError(msg)


__all__ = [
    "MOCK_SOURCE_TEMPLATE",
    "JavaScriptEvaluator",
    "ScriptEvaluator",
    "render_mock_source",
]
