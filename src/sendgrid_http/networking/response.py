"""Normalized wrapper around raw HTTP responses."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

import requests
from requests.structures import CaseInsensitiveDict

logger = logging.getLogger(__name__)


def _is_json(headers: Mapping[str, str]) -> bool:
    content_type = headers.get("Content-Type") or ""
    mime_type = content_type.split(";", 1)[0].strip().lower()
    return mime_type.endswith("json")


def _parse_body(raw_body: str, headers: Mapping[str, str]) -> Any:
    if not raw_body or not _is_json(headers):
        return raw_body
    try:
        return json.loads(raw_body)
    except ValueError:
        logger.warning(
            "Response declared %s but body is not valid JSON",
            headers.get("Content-Type"),
        )
        return raw_body


@dataclass(frozen=True)
class ResponseEnvelope:
    """Status, headers and parsed body of one API response.

    ``body`` holds the decoded JSON document when the response is JSON and
    non-empty, otherwise the raw text (an empty string for 204 responses).
    """

    code: int
    raw_body: str
    headers: Mapping[str, str]
    body: Any

    @classmethod
    def build(
        cls,
        code: int,
        raw_body: str = "",
        headers: Mapping[str, str] | None = None,
    ) -> ResponseEnvelope:
        normalized = CaseInsensitiveDict(headers or {})
        return cls(
            code=code,
            raw_body=raw_body,
            headers=MappingProxyType(normalized),
            body=_parse_body(raw_body, normalized),
        )

    @classmethod
    def from_response(cls, response: requests.Response) -> ResponseEnvelope:
        return cls.build(
            code=response.status_code,
            raw_body=response.text or "",
            headers=response.headers,
        )

    @property
    def ok(self) -> bool:
        return 200 <= self.code < 300

