"""Rendering of typed argument values into form-field strings."""

from __future__ import annotations

import math
import typing as t

FormScalar: t.TypeAlias = str | bool | int | float


def _render_float(value: float) -> str:
    """Return the shortest round-trip decimal form of *value*.

    Integral values drop the trailing ``.0`` so ``3.0`` renders as ``3``.
    """
    if not math.isfinite(value):
        msg = f"cannot render non-finite float {value!r} as a form value"
        raise ValueError(msg)
    text = repr(value)
    if text.endswith(".0"):
        return text[:-2]
    return text


def to_form_value(value: FormScalar) -> str:
    """Render *value* as the string submitted for a form field.

    Supported inputs are ``str`` (unchanged), ``bool`` (``true``/``false``),
    ``int`` (base-10) and ``float`` (see :func:`_render_float`).

    Raises
    ------
    TypeError
        If *value* is not one of the supported types.
    ValueError
        If *value* is a NaN or infinite float.
    """
    if isinstance(value, str):
        return value
    # bool must be tested before int because it subclasses int.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return _render_float(value)
    msg = f"unsupported form value type: {type(value).__name__}"
    raise TypeError(msg)


def to_form_values(values: t.Iterable[FormScalar]) -> list[str]:
    """Render each item of *values* with :func:`to_form_value`."""
    return [to_form_value(value) for value in values]


__all__ = ["FormScalar", "to_form_value", "to_form_values"]
