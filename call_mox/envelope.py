"""The uniform ``{result, message, data}`` response envelope.

Both the real HTTP path and the mock-script path produce JSON in this shape.
Decoding validates the envelope fields, and :func:`deliver` writes the
``data`` payload into a caller-supplied destination only once the envelope
is known to be a success.

Field names are matched exactly first and then case-insensitively, so a
server answering ``{"Result": 0, "Message": ""}`` decodes the same way.
A top-level ``null`` is an empty envelope. The whole body must be a single
JSON value: trailing bytes after it are a :class:`DecodeError` rather than
being ignored.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import json
import typing as t

from .errors import ApplicationError, DecodeError

Destination: t.TypeAlias = (
    cabc.MutableMapping[str, t.Any]
    | cabc.MutableSequence[t.Any]
    | t.Callable[[t.Any], object]
    | None
)


@dc.dataclass(frozen=True, slots=True)
class Envelope:
    """Decoded response wrapper."""

    result: int = 0
    message: str = ""
    data: t.Any = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the result code signals success."""
        return self.result == 0

    def raise_for_result(self) -> None:
        """Raise :class:`ApplicationError` for a non-zero result code."""
        if not self.ok:
            raise ApplicationError(self.result, self.message)

    @classmethod
    def from_obj(cls, obj: object) -> Envelope:
        """Validate a parsed JSON value and build an :class:`Envelope`.

        ``None`` (a JSON ``null``) yields the empty envelope.
        """
        if obj is None:
            return cls()
        if not isinstance(obj, dict):
            msg = f"envelope must be a JSON object, got {type(obj).__name__}"
            raise DecodeError(msg)

        result = _field(obj, "result")
        if result is None:
            result = 0
        if isinstance(result, bool) or not isinstance(result, int):
            msg = f"envelope result must be an integer, got {result!r}"
            raise DecodeError(msg)

        message = _field(obj, "message")
        if message is None:
            message = ""
        if not isinstance(message, str):
            msg = f"envelope message must be a string, got {message!r}"
            raise DecodeError(msg)

        return cls(result=result, message=message, data=_field(obj, "data"))


def _field(obj: dict[str, t.Any], name: str) -> t.Any:  # noqa: ANN401
    """Return ``obj[name]``, falling back to a case-insensitive key match."""
    if name in obj:
        return obj[name]
    for key, value in obj.items():
        if key.casefold() == name:
            return value
    return None


def decode_envelope(text: str | bytes) -> Envelope:
    """Parse JSON *text* into an :class:`Envelope`."""
    try:
        obj = json.loads(text)
    except ValueError as exc:
        msg = f"malformed envelope JSON: {exc}"
        raise DecodeError(msg) from exc
    return Envelope.from_obj(obj)


def check_destination(destination: object) -> None:
    """Raise ``TypeError`` unless *destination* is a supported payload target."""
    if destination is None or callable(destination):
        return
    if isinstance(destination, cabc.MutableMapping | cabc.MutableSequence):
        return
    msg = f"unsupported destination type: {type(destination).__name__}"
    raise TypeError(msg)


def deliver(data: t.Any, destination: Destination) -> None:  # noqa: ANN401
    """Write the envelope payload *data* into *destination*.

    Mappings are cleared and updated from a JSON object, sequences are
    replaced in place from a JSON array, and callables receive the payload.
    A ``null`` payload leaves mapping and sequence destinations unchanged.
    """
    check_destination(destination)
    if destination is None:
        return
    if isinstance(destination, cabc.MutableMapping):
        if data is None:
            return
        if not isinstance(data, dict):
            msg = f"cannot decode {type(data).__name__} payload into a mapping"
            raise DecodeError(msg)
        destination.clear()
        destination.update(data)
        return
    if isinstance(destination, cabc.MutableSequence):
        if data is None:
            return
        if not isinstance(data, list):
            msg = f"cannot decode {type(data).__name__} payload into a sequence"
            raise DecodeError(msg)
        destination[:] = data
        return
    destination(data)


def settle(envelope: Envelope, destination: Destination) -> t.Any:  # noqa: ANN401
    """Apply the result-code check and deliver the payload on success."""
    envelope.raise_for_result()
    deliver(envelope.data, destination)
    return envelope.data


__all__ = [
    "Destination",
    "Envelope",
    "check_destination",
    "decode_envelope",
    "deliver",
    "settle",
]
