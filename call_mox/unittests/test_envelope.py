"""Unit tests for envelope decoding and payload delivery."""

from __future__ import annotations

import typing as t

import pytest

from call_mox.envelope import (
    Envelope,
    check_destination,
    decode_envelope,
    deliver,
    settle,
)
from call_mox.errors import ApplicationError, DecodeError


def test_decode_envelope_reads_all_fields() -> None:
    """A well-formed envelope decodes verbatim."""
    env = decode_envelope('{"result": 0, "message": "ok", "data": {"x": 1}}')
    assert env == Envelope(result=0, message="ok", data={"x": 1})
    assert env.ok


def test_decode_envelope_defaults_missing_fields() -> None:
    """Absent fields fall back to zero values."""
    assert decode_envelope("{}") == Envelope(result=0, message="", data=None)
    assert decode_envelope('{"result": 3, "message": null}').message == ""


def test_decode_envelope_null_is_empty_envelope() -> None:
    """A bare ``null`` decodes as a successful envelope with no payload."""
    env = decode_envelope("null")
    assert env == Envelope()
    assert env.ok
    assert Envelope.from_obj(None) == Envelope()


def test_decode_envelope_matches_keys_case_insensitively() -> None:
    """Capitalised keys are accepted; exact names take precedence."""
    env = decode_envelope('{"RESULT": 4, "Message": "m", "Data": [1]}')
    assert env == Envelope(result=4, message="m", data=[1])
    mixed = decode_envelope('{"Result": 1, "result": 2}')
    assert mixed.result == 2


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        '{"result": 0',
        "[1, 2]",
        "null trailing",
        '{"result": 0} {}',
        "42",
        '{"result": "0"}',
        '{"result": true}',
        '{"result": 1.5}',
        '{"message": 7}',
    ],
)
def test_decode_envelope_rejects_malformed_input(text: str) -> None:
    """Malformed JSON and ill-typed fields raise :class:`DecodeError`."""
    with pytest.raises(DecodeError):
        decode_envelope(text)


def test_raise_for_result_maps_code_and_message() -> None:
    """Non-zero results become :class:`ApplicationError`."""
    env = Envelope(result=7, message="bad input")
    with pytest.raises(ApplicationError) as excinfo:
        env.raise_for_result()
    assert excinfo.value.code == 7
    assert excinfo.value.message == "bad input"
    assert str(excinfo.value) == "application error 7: bad input"


def test_deliver_replaces_mapping_contents() -> None:
    """Mapping destinations are cleared and refilled."""
    dest: dict[str, t.Any] = {"stale": True}
    deliver({"x": 1}, dest)
    assert dest == {"x": 1}


def test_deliver_replaces_sequence_contents() -> None:
    """Sequence destinations are replaced in place."""
    dest = [9, 9, 9]
    alias = dest
    deliver([1, 2], dest)
    assert alias == [1, 2]


def test_deliver_calls_callable_destination() -> None:
    """Callables receive the raw payload."""
    seen: list[t.Any] = []
    deliver("scalar", seen.append)
    deliver(None, seen.append)
    assert seen == ["scalar", None]


def test_deliver_null_payload_leaves_containers_untouched() -> None:
    """A ``null`` payload is a no-op for mappings and sequences."""
    mapping = {"keep": 1}
    sequence = [1]
    deliver(None, mapping)
    deliver(None, sequence)
    assert mapping == {"keep": 1}
    assert sequence == [1]


@pytest.mark.parametrize(
    ("data", "dest"),
    [([1], {}), ({"x": 1}, []), ("text", {}), (3, [])],
)
def test_deliver_rejects_shape_mismatch(data: object, dest: object) -> None:
    """Payloads that do not fit the destination raise :class:`DecodeError`."""
    before = type(dest)()  # type: ignore[operator]
    with pytest.raises(DecodeError, match="cannot decode"):
        deliver(data, dest)  # type: ignore[arg-type]
    assert dest == before


def test_deliver_rejects_unknown_destination() -> None:
    """Destinations outside the supported forms raise ``TypeError``."""
    with pytest.raises(TypeError, match="unsupported destination"):
        deliver({"x": 1}, 5)  # type: ignore[arg-type]


@pytest.mark.parametrize("destination", [None, {}, [], print])
def test_check_destination_accepts_supported_forms(destination: object) -> None:
    """Mappings, sequences, callables and ``None`` are valid destinations."""
    check_destination(destination)


@pytest.mark.parametrize("destination", [5, "text", (1,), frozenset()])
def test_check_destination_rejects_other_types(destination: object) -> None:
    """Immutable and scalar destinations raise ``TypeError``."""
    with pytest.raises(TypeError, match="unsupported destination type"):
        check_destination(destination)


def test_settle_skips_delivery_on_application_error() -> None:
    """The destination is untouched when the envelope carries an error."""
    dest: dict[str, t.Any] = {"before": 1}
    with pytest.raises(ApplicationError):
        settle(Envelope(result=2, message="nope", data={"x": 1}), dest)
    assert dest == {"before": 1}


def test_settle_returns_payload() -> None:
    """Successful envelopes return their payload."""
    dest: dict[str, t.Any] = {}
    assert settle(Envelope(data={"x": 1}), dest) == {"x": 1}
    assert dest == {"x": 1}
