"""Configuration models for the SendGridClient."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .._version import __version__

DEFAULT_PROTOCOL = "https"
DEFAULT_HOST = "api.sendgrid.com"
DEFAULT_MAIL_ENDPOINT = "/api/mail.send.json"
DEFAULT_USER_AGENT = f"sendgrid-http/{__version__}"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _default_headers() -> Mapping[str, str]:
    """Return immutable empty default headers mapping."""

    return MappingProxyType({})


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True)
class ClientConfig:
    """Connection and credential settings for SendGridClient.

    Both ``api_user`` and ``api_key`` select basic auth; ``api_key`` alone
    selects bearer auth; neither sends requests unauthenticated.
    """

    api_user: str | None = None
    api_key: str | None = None
    protocol: str = DEFAULT_PROTOCOL
    host: str = DEFAULT_HOST
    port: int | None = None
    endpoint: str = DEFAULT_MAIL_ENDPOINT
    raise_exceptions: bool = True
    user_agent: str | None = DEFAULT_USER_AGENT
    default_headers: Mapping[str, str] = field(default_factory=_default_headers)
    verify_tls: bool = True
    timeout_seconds: float | None = None
    connect_timeout_seconds: float | None = None
    read_timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        if not self.protocol:
            raise ValueError("protocol must be a non-empty string")
        if not self.host:
            raise ValueError("host must be a non-empty string")
        if self.port is not None and not 0 < self.port < 65536:
            raise ValueError("port must be between 1 and 65535 when provided")
        if not self.endpoint.startswith("/"):
            raise ValueError("endpoint must start with '/'")
        if self.api_user and not self.api_key:
            raise ValueError("api_user requires api_key")

        has_connect_timeout = self.connect_timeout_seconds is not None
        has_read_timeout = self.read_timeout_seconds is not None
        if has_connect_timeout != has_read_timeout:
            raise ValueError(
                "connect_timeout_seconds and read_timeout_seconds "
                "must be set together"
            )
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0 when provided")
        if (
            self.connect_timeout_seconds is not None
            and self.connect_timeout_seconds <= 0
        ):
            raise ValueError(
                "connect_timeout_seconds must be > 0 when provided"
            )
        if (
            self.read_timeout_seconds is not None
            and self.read_timeout_seconds <= 0
        ):
            raise ValueError("read_timeout_seconds must be > 0 when provided")

        # Freeze copied headers to avoid post-init mutation side effects.
        object.__setattr__(
            self,
            "default_headers",
            MappingProxyType(dict(self.default_headers)),
        )

    def __repr__(self) -> str:
        return (
            f"ClientConfig(api_user={self.api_user!r}, "
            f"api_key={'***' if self.api_key else None!r}, "
            f"protocol={self.protocol!r}, host={self.host!r}, "
            f"port={self.port!r}, raise_exceptions={self.raise_exceptions!r})"
        )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> ClientConfig:
        """Build a config from ``SENDGRID_*`` environment variables.

        Args:
            environ: Mapping to read from; defaults to ``os.environ``.
            overrides: Explicit field values that win over the environment.

        Returns:
            A validated ClientConfig.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for name, key in (
            ("api_user", "SENDGRID_API_USER"),
            ("api_key", "SENDGRID_API_KEY"),
            ("protocol", "SENDGRID_PROTOCOL"),
            ("host", "SENDGRID_HOST"),
        ):
            if env.get(key):
                values[name] = env[key]
        if env.get("SENDGRID_PORT"):
            try:
                values["port"] = int(env["SENDGRID_PORT"])
            except ValueError as exc:
                raise ValueError("SENDGRID_PORT must be an integer") from exc
        if env.get("SENDGRID_RAISE_EXCEPTIONS"):
            values["raise_exceptions"] = _parse_bool(
                "SENDGRID_RAISE_EXCEPTIONS", env["SENDGRID_RAISE_EXCEPTIONS"]
            )
        values.update(overrides)
        return cls(**values)
