"""Shared validation helpers."""

from __future__ import annotations

import math


def validate_positive_finite_timeout(timeout: float) -> None:
    """Ensure *timeout* represents a usable HTTP timeout value."""
    if isinstance(timeout, bool):
        msg = "timeout must be a real number"
        raise TypeError(msg)

    if not (timeout > 0 and math.isfinite(timeout)):
        msg = "timeout must be > 0 and finite"
        raise ValueError(msg)


def validate_form_key(key: str) -> None:
    """Ensure *key* is usable as a form field name."""
    if not isinstance(key, str):
        msg = f"form key must be str, got {type(key).__name__}"
        raise TypeError(msg)
