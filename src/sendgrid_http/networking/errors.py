"""Typed errors raised by the SendGrid client."""

from __future__ import annotations

from typing import Any

from .response import ResponseEnvelope

_BODY_PREVIEW_CHARS = 200


class ApiError(Exception):
    """Response status did not match the status the operation expects."""

    def __init__(self, response: ResponseEnvelope, expected_status: int) -> None:
        self.response = response
        self.expected_status = expected_status
        super().__init__(
            f"SendGrid API error {response.code} "
            f"(expected {expected_status}): "
            f"{response.raw_body[:_BODY_PREVIEW_CHARS]}"
        )

    @property
    def code(self) -> int:
        return self.response.code

    @property
    def body(self) -> Any:
        return self.response.body
