"""Request descriptions consumed by SendGridClient.perform_request."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping
from urllib.parse import urlencode

ALLOWED_METHODS = frozenset({"GET", "POST", "DELETE", "PATCH"})


class Encoding(Enum):
    """Body encoding of an API generation."""

    FORM = "application/x-www-form-urlencoded"
    JSON = "application/json"

    @property
    def content_type(self) -> str:
        return self.value


@dataclass(frozen=True)
class RequestSpec:
    """Everything needed to issue one API call.

    ``expected_status`` is the only status treated as success; any other code
    raises ApiError unless the client has raising disabled.
    """

    method: str
    path: str
    query_params: Mapping[str, Any] | None = None
    body_fields: Mapping[str, Any] | None = None
    encoding: Encoding = Encoding.JSON
    expected_status: int = 200

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(
                f"method must be one of {sorted(ALLOWED_METHODS)}, "
                f"got {self.method!r}"
            )
        object.__setattr__(self, "method", method)
        if not self.path.startswith("/"):
            raise ValueError("path must start with '/'")
        if not 100 <= self.expected_status <= 599:
            raise ValueError("expected_status must be a valid HTTP status")
        if self.query_params is not None:
            object.__setattr__(
                self, "query_params", MappingProxyType(dict(self.query_params))
            )
        if self.body_fields is not None:
            object.__setattr__(
                self, "body_fields", MappingProxyType(dict(self.body_fields))
            )

    def query_string(self) -> str:
        """URL-encode query params in insertion order, skipping None values."""
        if not self.query_params:
            return ""
        pairs = [
            (key, value)
            for key, value in self.query_params.items()
            if value is not None
        ]
        return urlencode(pairs, doseq=True)
