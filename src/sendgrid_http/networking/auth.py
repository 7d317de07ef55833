"""Authentication strategies applied to outgoing requests.

The strategy is chosen from credential presence at dispatch time. Each
variant only describes where credentials go; it never touches the network.
Every variant hands ``requests`` an explicit auth object so the session never
falls back to ``.netrc`` credentials.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union
from urllib.parse import quote

from requests import PreparedRequest
from requests.auth import AuthBase, HTTPBasicAuth

from .request import Encoding


class Unauthenticated(AuthBase):
    """Sends the request without credentials."""

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Unauthenticated)

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __call__(self, r: PreparedRequest) -> PreparedRequest:
        return r


class HTTPBearerAuth(AuthBase):
    """Attaches ``Authorization: Bearer <token>``."""

    def __init__(self, token: str) -> None:
        self.token = token

    def __eq__(self, other: object) -> bool:
        return self.token == getattr(other, "token", None)

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __call__(self, r: PreparedRequest) -> PreparedRequest:
        r.headers["Authorization"] = f"Bearer {self.token}"
        return r


@dataclass(frozen=True)
class NoAuth:
    """Unauthenticated requests."""

    def userinfo(self, encoding: Encoding) -> str | None:
        return None

    def headers(self) -> dict[str, str]:
        return {}

    def body_fields(self, encoding: Encoding) -> dict[str, str]:
        return {}

    def requests_auth(self, encoding: Encoding) -> AuthBase:
        return Unauthenticated()


@dataclass(frozen=True)
class BearerToken:
    """``Authorization: Bearer <api_key>`` header auth."""

    api_key: str = field(repr=False)

    def userinfo(self, encoding: Encoding) -> str | None:
        return None

    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def body_fields(self, encoding: Encoding) -> dict[str, str]:
        return {}

    def requests_auth(self, encoding: Encoding) -> AuthBase:
        return HTTPBearerAuth(self.api_key)


@dataclass(frozen=True)
class BasicAuth:
    """Username plus key.

    Versioned JSON endpoints get the credentials in the URL userinfo; legacy
    form endpoints get them as ``api_key``/``api_user`` body fields instead.
    """

    api_user: str
    api_key: str = field(repr=False)

    def userinfo(self, encoding: Encoding) -> str | None:
        if encoding is Encoding.FORM:
            return None
        return f"{quote(self.api_user, safe='')}:{quote(self.api_key, safe='')}"

    def headers(self) -> dict[str, str]:
        return {}

    def body_fields(self, encoding: Encoding) -> dict[str, str]:
        if encoding is not Encoding.FORM:
            return {}
        return {"api_key": self.api_key, "api_user": self.api_user}

    def requests_auth(self, encoding: Encoding) -> AuthBase:
        if encoding is Encoding.FORM:
            return Unauthenticated()
        return HTTPBasicAuth(self.api_user, self.api_key)


AuthStrategy = Union[NoAuth, BearerToken, BasicAuth]


def select_auth(api_user: str | None, api_key: str | None) -> AuthStrategy:
    """Pick the strategy implied by the configured credentials."""
    if api_user and api_key:
        return BasicAuth(api_user=api_user, api_key=api_key)
    if api_key:
        return BearerToken(api_key=api_key)
    return NoAuth()
