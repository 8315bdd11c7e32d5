"""HTTP transport used for real (non-mocked) calls."""

from __future__ import annotations

import contextlib
import http.cookiejar
import logging
import typing as t

import requests

from .config import ClientConfig
from .errors import DecodeError, TransportError

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE: t.Final[str] = "application/x-www-form-urlencoded"


class TransportResponse(t.Protocol):
    """Minimal view of an HTTP response consumed by the engine."""

    @property
    def status_code(self) -> int:
        """Return the HTTP status code."""
        ...

    def json(self) -> t.Any:  # noqa: ANN401
        """Decode the response body as JSON."""
        ...


class Transport(t.Protocol):
    """Blocking "POST form, get status and body" primitive."""

    def post_form(
        self, url: str, form: t.Mapping[str, t.Sequence[str]]
    ) -> contextlib.AbstractContextManager[TransportResponse]:
        """Submit *form* to *url* and yield the response.

        The response is released when the context exits.

        Raises
        ------
        TransportError
            If the request cannot be completed.
        """
        ...


class _RequestsResponse:
    """Adapt :class:`requests.Response` to :class:`TransportResponse`."""

    __slots__ = ("_response",)

    def __init__(self, response: requests.Response) -> None:
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    def json(self) -> t.Any:  # noqa: ANN401
        try:
            return self._response.json()
        except requests.JSONDecodeError as exc:
            msg = f"malformed envelope JSON: {exc}"
            raise DecodeError(msg) from exc
        except requests.RequestException as exc:
            # The body is streamed, so read failures surface here.
            msg = f"failed reading response body: {exc}"
            raise TransportError(msg) from exc


def _cookieless_session() -> requests.Session:
    """Return a session whose cookie jar never stores server cookies."""
    session = requests.Session()
    session.cookies.set_policy(http.cookiejar.DefaultCookiePolicy(allowed_domains=[]))
    return session


class RequestsTransport:
    """Transport backed by a :class:`requests.Session`.

    The session this class creates refuses every ``Set-Cookie`` so that one
    call never carries state into the next. A *session* supplied by the
    caller is used as given.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        self._session = session if session is not None else _cookieless_session()
        self._config = config if config is not None else ClientConfig.from_env()

    @property
    def timeout(self) -> float:
        """Return the per-request timeout in seconds."""
        return self._config.timeout

    @contextlib.contextmanager
    def post_form(
        self, url: str, form: t.Mapping[str, t.Sequence[str]]
    ) -> t.Iterator[TransportResponse]:
        """POST *form* as ``application/x-www-form-urlencoded`` to *url*."""
        # requests expands list values into repeated fields in order.
        data = {key: list(values) for key, values in form.items()}
        logger.debug("POST %s with fields %s", url, sorted(data))
        try:
            response = self._session.post(
                url,
                data=data,
                headers={"Content-Type": FORM_CONTENT_TYPE},
                timeout=self._config.timeout,
                stream=True,
            )
        except requests.RequestException as exc:
            msg = f"POST {url} failed: {exc}"
            raise TransportError(msg) from exc

        with response:
            yield _RequestsResponse(response)

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()


_default_transport: RequestsTransport | None = None


def default_transport() -> RequestsTransport:
    """Return the lazily created process-wide transport."""
    global _default_transport
    if _default_transport is None:
        _default_transport = RequestsTransport()
    return _default_transport


__all__ = [
    "FORM_CONTENT_TYPE",
    "RequestsTransport",
    "Transport",
    "TransportResponse",
    "default_transport",
]
