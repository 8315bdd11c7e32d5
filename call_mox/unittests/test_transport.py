"""Unit tests for :class:`call_mox.transport.RequestsTransport`."""

from __future__ import annotations

import io
import json
import typing as t

import pytest
import requests

from call_mox.config import ClientConfig
from call_mox.errors import DecodeError, TransportError
from call_mox.transport import FORM_CONTENT_TYPE, RequestsTransport


def _response(status: int, body: bytes) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.raw = io.BytesIO(body)
    response.encoding = "utf-8"
    return response


class FakeSession:
    """Stand-in for :class:`requests.Session` recording ``post`` calls."""

    def __init__(self, outcome: requests.Response | Exception) -> None:
        self.outcome = outcome
        self.calls: list[tuple[str, dict[str, t.Any]]] = []
        self.closed = False

    def post(self, url: str, **kwargs: t.Any) -> requests.Response:  # noqa: ANN401
        self.calls.append((url, kwargs))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome

    def close(self) -> None:
        self.closed = True


def _transport(
    outcome: requests.Response | Exception,
) -> tuple[RequestsTransport, FakeSession]:
    session = FakeSession(outcome)
    transport = RequestsTransport(
        session=t.cast("requests.Session", session),
        config=ClientConfig(timeout=3.0),
    )
    return transport, session


def test_post_form_sends_multi_valued_form() -> None:
    """Fields are sent as repeated form values with the configured timeout."""
    body = json.dumps({"result": 0, "data": 1}).encode()
    transport, session = _transport(_response(200, body))

    with transport.post_form("http://api.test/x", {"id": ["1", "2"]}) as response:
        assert response.status_code == 200
        assert response.json() == {"result": 0, "data": 1}

    url, kwargs = session.calls[0]
    assert url == "http://api.test/x"
    assert kwargs["data"] == {"id": ["1", "2"]}
    assert kwargs["headers"] == {"Content-Type": FORM_CONTENT_TYPE}
    assert kwargs["timeout"] == 3.0
    assert kwargs["stream"] is True
    assert transport.timeout == 3.0


def test_connection_error_becomes_transport_error() -> None:
    """Request exceptions are wrapped and chained."""
    transport, _ = _transport(requests.ConnectionError("refused"))
    with pytest.raises(TransportError, match="refused") as excinfo:
        with transport.post_form("http://api.test/x", {}):
            pass
    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_malformed_body_becomes_decode_error() -> None:
    """Invalid JSON bodies raise :class:`DecodeError`."""
    transport, _ = _transport(_response(200, b"<html>oops</html>"))
    with transport.post_form("http://api.test/x", {}) as response:
        with pytest.raises(DecodeError, match="malformed envelope JSON"):
            response.json()


def test_close_closes_session() -> None:
    """Closing the transport closes its session."""
    transport, session = _transport(_response(200, b"{}"))
    transport.close()
    assert session.closed
