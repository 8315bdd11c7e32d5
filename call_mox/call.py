"""The call builder: a target URL plus accumulated form arguments."""

from __future__ import annotations

import typing as t
from urllib.parse import urlencode

from . import engine
from ._validators import validate_form_key
from .coercion import FormScalar, to_form_values

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .envelope import Destination
    from .evaluator import ScriptEvaluator
    from .transport import Transport

CheckMock: t.TypeAlias = t.Callable[[str], tuple[bool, str]]


class Call:
    """A single RPC invocation under construction.

    Arguments are multi-valued: adding the same key twice appends rather
    than overwrites, and values keep their insertion order. A ``Call`` is
    meant to be executed once and carries no locking.
    """

    __slots__ = ("_check_mock", "_form", "_url")

    def __init__(self, url: str, *, check_mock: CheckMock | None = None) -> None:
        self._url = url
        self._form: dict[str, list[str]] = {}
        self._check_mock = check_mock

    @property
    def url(self) -> str:
        """Return the target URL."""
        return self._url

    @property
    def check_mock(self) -> CheckMock | None:
        """Return the mock-decision function, if any."""
        return self._check_mock

    @property
    def form(self) -> dict[str, list[str]]:
        """Return a copy of the accumulated form arguments."""
        return {key: list(values) for key, values in self._form.items()}

    def str_arg(self, key: str, *values: str) -> Call:
        """Append string ``values`` under ``key``."""
        validate_form_key(key)
        for value in values:
            if not isinstance(value, str):
                msg = f"str_arg() expects str values, got {type(value).__name__}"
                raise TypeError(msg)
        if values:
            self._form.setdefault(key, []).extend(values)
        return self

    def arg(self, key: str, *values: FormScalar) -> Call:
        """Append ``values`` under ``key`` after rendering them as strings.

        See :func:`call_mox.coercion.to_form_value` for the supported types.
        """
        validate_form_key(key)
        rendered = to_form_values(values)
        if rendered:
            self._form.setdefault(key, []).extend(rendered)
        return self

    def encoded_form(self) -> str:
        """Return the ``application/x-www-form-urlencoded`` request body."""
        return urlencode(
            [(key, value) for key, values in self._form.items() for value in values]
        )

    def execute(
        self,
        destination: Destination = None,
        *,
        transport: Transport | None = None,
        evaluator: ScriptEvaluator | None = None,
    ) -> t.Any:  # noqa: ANN401
        """Execute this call; see :func:`call_mox.engine.execute`."""
        return engine.execute(
            self, destination, transport=transport, evaluator=evaluator
        )

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Call(url={self._url!r}, form={self._form!r})"


def new_call(url: str) -> Call:
    """Return a call to *url* without mock support."""
    return Call(url)


def new_call_with_check_mock(url: str, check_mock: CheckMock) -> Call:
    """Return a call to *url* consulting *check_mock* before executing."""
    return Call(url, check_mock=check_mock)


__all__ = ["Call", "CheckMock", "new_call", "new_call_with_check_mock"]
