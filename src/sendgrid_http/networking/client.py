"""Synchronous client for the SendGrid HTTP API.

Every endpoint method builds a RequestSpec and hands it to
``perform_request``, which resolves authentication, encodes the body for the
endpoint's API generation, issues exactly one HTTP call and normalizes the
response. Transport errors from ``requests`` are not caught here.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Mapping
from urllib.parse import quote

import requests

from ..mail import Mail
from .auth import select_auth
from .config import ClientConfig
from .errors import ApiError
from .request import Encoding, RequestSpec
from .response import ResponseEnvelope

logger = logging.getLogger(__name__)

BOUNCES_PATH = "/v3/suppression/bounces"
WHITELABEL_DOMAINS_PATH = "/v3/whitelabel/domains"
SCOPES_PATH = "/v3/scopes"
API_KEYS_PATH = "/v3/api_keys"
SUBUSERS_PATH = "/v3/subusers"
FILTER_SETUP_PATH = "/api/filter.setup.json"

# Config fields a configure callback may assign on the client.
CONFIGURABLE_FIELDS = frozenset(
    {
        "api_user",
        "api_key",
        "protocol",
        "host",
        "port",
        "endpoint",
        "raise_exceptions",
    }
)


def _merge_params(
    params: Mapping[str, Any] | None, fields: Mapping[str, Any]
) -> dict[str, Any]:
    merged = dict(params or {})
    merged.update(fields)
    return merged


class SendGridClient:
    """Client for the legacy form API and the versioned ``/v3`` JSON API.

    Configuration is fixed once construction finishes, so one instance can be
    shared by callers as long as the underlying session is.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        configure: Callable[[SendGridClient], None] | None = None,
        **options: Any,
    ) -> None:
        """Create a new SendGridClient.

        Args:
            config: Complete configuration. Mutually exclusive with options.
            configure: Callback invoked once with the new client; it may
                assign ``api_user``, ``api_key``, ``protocol``, ``host``,
                ``port``, ``endpoint`` and ``raise_exceptions``.
            options: ClientConfig fields used when config is omitted.
        """
        if config is not None and options:
            raise TypeError("pass either config or keyword options, not both")
        object.__setattr__(self, "_pending", None)
        object.__setattr__(
            self, "_config", config if config is not None else ClientConfig(**options)
        )
        if configure is not None:
            self._run_configure(configure)

        self._session = requests.Session()
        if self._config.user_agent:
            self._session.headers["User-Agent"] = self._config.user_agent
        self._session.headers.update(self._config.default_headers)

    def _run_configure(
        self, configure: Callable[[SendGridClient], None]
    ) -> None:
        """Collect assignments made by the callback, then validate once."""
        object.__setattr__(self, "_pending", {})
        try:
            configure(self)
            pending = self._pending
        finally:
            object.__setattr__(self, "_pending", None)
        if pending:
            object.__setattr__(self, "_config", replace(self._config, **pending))

    def __getattr__(self, name: str) -> Any:
        if name in CONFIGURABLE_FIELDS:
            pending = self.__dict__.get("_pending")
            if pending and name in pending:
                return pending[name]
            return getattr(self.__dict__["_config"], name)
        raise AttributeError(
            f"{type(self).__name__!r} object has no attribute {name!r}"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        if name in CONFIGURABLE_FIELDS:
            pending = self.__dict__.get("_pending")
            if pending is None:
                raise AttributeError(
                    f"{name} can only be set from the configure callback"
                )
            pending[name] = value
            return
        object.__setattr__(self, name, value)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _base_url(self, userinfo: str | None) -> str:
        # Attribute reads see pending configure assignments.
        netloc = self.host
        if self.port is not None:
            netloc = f"{netloc}:{self.port}"
        if userinfo:
            netloc = f"{userinfo}@{netloc}"
        return f"{self.protocol}://{netloc}"

    @property
    def url(self) -> str:
        """Base URL, with ``user:key@`` only when basic auth applies."""
        auth = select_auth(self.api_user, self.api_key)
        return self._base_url(auth.userinfo(Encoding.JSON))

    def _get_timeout(
        self, override: float | None
    ) -> float | tuple[float, float] | None:
        """Resolve timeout preference."""
        if override is not None:
            if override <= 0:
                raise ValueError("timeout override must be > 0 when provided")
            return override
        if (
            self._config.connect_timeout_seconds is not None
            and self._config.read_timeout_seconds is not None
        ):
            return (
                self._config.connect_timeout_seconds,
                self._config.read_timeout_seconds,
            )
        return self._config.timeout_seconds

    def perform_request(
        self, spec: RequestSpec, *, timeout: float | None = None
    ) -> ResponseEnvelope:
        """Issue one API call and normalize its response.

        Args:
            spec: Method, path, params, encoding and expected status.
            timeout: Override timeout in seconds for this request.

        Returns:
            The response envelope.

        Raises:
            ApiError: The status differs from ``spec.expected_status`` and
                ``raise_exceptions`` is enabled.
            requests.exceptions.RequestException: Transport failure.
        """
        resolved_timeout = self._get_timeout(timeout)
        auth = select_auth(self._config.api_user, self._config.api_key)

        request_url = self._base_url(auth.userinfo(spec.encoding)) + spec.path
        query = spec.query_string()
        if query:
            request_url = f"{request_url}?{query}"

        headers = auth.headers()
        data: dict[str, Any] | None = None
        json_body: dict[str, Any] | None = None
        if spec.encoding is Encoding.FORM:
            fields = auth.body_fields(spec.encoding)
            fields.update(spec.body_fields or {})
            if fields:
                headers["Content-Type"] = Encoding.FORM.content_type
                data = fields
        elif spec.body_fields is not None:
            headers["Content-Type"] = Encoding.JSON.content_type
            json_body = dict(spec.body_fields)

        logger.debug(
            "%s %s%s (auth=%s)",
            spec.method,
            self._base_url(None),
            spec.path,
            type(auth).__name__,
        )
        response = self._session.request(
            spec.method,
            request_url,
            headers=headers,
            data=data,
            json=json_body,
            auth=auth.requests_auth(spec.encoding),
            timeout=resolved_timeout,
            verify=self._config.verify_tls,
        )
        envelope = ResponseEnvelope.from_response(response)
        logger.debug("%s %s -> %d", spec.method, spec.path, envelope.code)

        if envelope.code != spec.expected_status:
            logger.warning(
                "%s %s returned %d, expected %d",
                spec.method,
                spec.path,
                envelope.code,
                spec.expected_status,
            )
            if self._config.raise_exceptions:
                raise ApiError(envelope, spec.expected_status)
        return envelope

    def send(self, mail: Mail | Mapping[str, Any] | None = None) -> ResponseEnvelope:
        """Send a message through the legacy form-encoded mail endpoint."""
        if isinstance(mail, Mail):
            fields = mail.to_payload()
        else:
            fields = dict(mail or {})
        return self.perform_request(
            RequestSpec(
                method="POST",
                path=self._config.endpoint,
                body_fields=fields,
                encoding=Encoding.FORM,
            )
        )

    def bounces(
        self,
        start_time: int | None = None,
        end_time: int | None = None,
        **params: Any,
    ) -> ResponseEnvelope:
        """List bounced addresses, optionally within a unix time window."""
        query: dict[str, Any] = {"start_time": start_time, "end_time": end_time}
        query.update(params)
        return self.perform_request(
            RequestSpec(method="GET", path=BOUNCES_PATH, query_params=query)
        )

    def delete_bounce(self, email: str) -> ResponseEnvelope:
        """Remove one address from the bounce list."""
        return self.perform_request(
            RequestSpec(
                method="DELETE",
                path=f"{BOUNCES_PATH}/{quote(email, safe='')}",
                expected_status=204,
            )
        )

    def create_whitelabel_domain(
        self, params: Mapping[str, Any] | None = None, **fields: Any
    ) -> ResponseEnvelope:
        return self.perform_request(
            RequestSpec(
                method="POST",
                path=WHITELABEL_DOMAINS_PATH,
                body_fields=_merge_params(params, fields),
                expected_status=201,
            )
        )

    def scopes(self) -> ResponseEnvelope:
        return self.perform_request(RequestSpec(method="GET", path=SCOPES_PATH))

    def api_keys(self) -> ResponseEnvelope:
        return self.perform_request(RequestSpec(method="GET", path=API_KEYS_PATH))

    def create_api_key(
        self, params: Mapping[str, Any] | None = None, **fields: Any
    ) -> ResponseEnvelope:
        """Create an API key; expects ``name`` and optionally ``scopes``."""
        return self.perform_request(
            RequestSpec(
                method="POST",
                path=API_KEYS_PATH,
                body_fields=_merge_params(params, fields),
                expected_status=201,
            )
        )

    def create_subuser(
        self, params: Mapping[str, Any] | None = None, **fields: Any
    ) -> ResponseEnvelope:
        """Create a subuser from ``username``, ``email`` and ``password``."""
        return self.perform_request(
            RequestSpec(
                method="POST",
                path=SUBUSERS_PATH,
                body_fields=_merge_params(params, fields),
                expected_status=201,
            )
        )

    def update_filter_settings(
        self, params: Mapping[str, Any] | None = None, **fields: Any
    ) -> ResponseEnvelope:
        return self.perform_request(
            RequestSpec(
                method="POST",
                path=FILTER_SETUP_PATH,
                body_fields=_merge_params(params, fields),
            )
        )
