"""Environment-driven client configuration."""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import typing as t
from pathlib import Path

from ._validators import validate_positive_finite_timeout

logger = logging.getLogger(__name__)

CALLMOX_HTTP_TIMEOUT_ENV = "CALLMOX_HTTP_TIMEOUT"
CALLMOX_MOCK_DIR_ENV = "CALLMOX_MOCK_DIR"

DEFAULT_HTTP_TIMEOUT: t.Final[float] = 30.0


@dc.dataclass(frozen=True, slots=True)
class ClientConfig:
    """
    Settings shared by the default collaborators.

    Attributes
    ----------
    timeout : float
        Seconds allowed for each HTTP round trip (must be > 0 and finite).
    mock_dir : Path | None
        Directory searched for mock scripts by
        :meth:`call_mox.routing.MockRouter.from_directory`, or ``None`` to
        disable directory-based mocking.

    Raises
    ------
    ValueError
        If ``timeout`` is not positive and finite.
    """

    timeout: float = DEFAULT_HTTP_TIMEOUT
    mock_dir: Path | None = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        validate_positive_finite_timeout(self.timeout)

    @classmethod
    def from_env(cls, environ: t.Mapping[str, str] | None = None) -> ClientConfig:
        """Build a configuration from ``CALLMOX_*`` environment variables."""
        env = os.environ if environ is None else environ

        timeout = DEFAULT_HTTP_TIMEOUT
        raw_timeout = env.get(CALLMOX_HTTP_TIMEOUT_ENV)
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                msg = (
                    f"{CALLMOX_HTTP_TIMEOUT_ENV} must be a number, got {raw_timeout!r}"
                )
                raise ValueError(msg) from None

        raw_dir = env.get(CALLMOX_MOCK_DIR_ENV)
        mock_dir = Path(raw_dir) if raw_dir else None

        config = cls(timeout=timeout, mock_dir=mock_dir)
        logger.debug("Loaded client configuration: %s", config)
        return config


__all__ = [
    "CALLMOX_HTTP_TIMEOUT_ENV",
    "CALLMOX_MOCK_DIR_ENV",
    "DEFAULT_HTTP_TIMEOUT",
    "ClientConfig",
]
