"""In-memory collaborators for exercising calls without a network."""

from __future__ import annotations

import contextlib
import dataclasses as dc
import json
import typing as t

from .errors import DecodeError, TransportError


@dc.dataclass(slots=True)
class FakeResponse:
    """Canned HTTP response served by :class:`FakeTransport`."""

    status_code: int = 200
    body: str = ""
    closed: bool = False

    def json(self) -> t.Any:  # noqa: ANN401
        """Decode ``body`` as JSON."""
        try:
            return json.loads(self.body)
        except ValueError as exc:
            msg = f"malformed envelope JSON: {exc}"
            raise DecodeError(msg) from exc


@dc.dataclass(frozen=True, slots=True)
class PostedForm:
    """A request captured by :class:`FakeTransport`."""

    url: str
    form: dict[str, list[str]]


class FakeTransport:
    """Transport that records each POST and replays queued responses.

    Responses are served in the order they were queued. When the queue is
    empty the transport raises :class:`TransportError`, mimicking an
    unreachable server.
    """

    def __init__(self) -> None:
        self.posts: list[PostedForm] = []
        self.responses: list[FakeResponse] = []
        self._queue: list[FakeResponse | Exception] = []

    def respond(
        self, status_code: int = 200, body: t.Any = None  # noqa: ANN401
    ) -> FakeTransport:
        """Queue a response; non-string bodies are JSON encoded."""
        text = body if isinstance(body, str) else json.dumps(body)
        self._queue.append(FakeResponse(status_code=status_code, body=text))
        return self

    def respond_envelope(
        self, result: int = 0, message: str = "", data: t.Any = None  # noqa: ANN401
    ) -> FakeTransport:
        """Queue an HTTP 200 response carrying an envelope."""
        return self.respond(200, {"result": result, "message": message, "data": data})

    def fail(self, exc: Exception | None = None) -> FakeTransport:
        """Queue a transport failure."""
        if exc is None:
            exc = TransportError("connection refused")
        self._queue.append(exc)
        return self

    @property
    def call_count(self) -> int:
        """Return the number of POSTs made so far."""
        return len(self.posts)

    @contextlib.contextmanager
    def post_form(
        self, url: str, form: t.Mapping[str, t.Sequence[str]]
    ) -> t.Iterator[FakeResponse]:
        """Record the POST and yield the next queued response."""
        self.posts.append(
            PostedForm(url=url, form={key: list(vals) for key, vals in form.items()})
        )
        if not self._queue:
            msg = f"POST {url} failed: no response queued"
            raise TransportError(msg)
        queued = self._queue.pop(0)
        if isinstance(queued, Exception):
            raise queued
        self.responses.append(queued)
        try:
            yield queued
        finally:
            queued.closed = True


__all__ = ["FakeResponse", "FakeTransport", "PostedForm"]
