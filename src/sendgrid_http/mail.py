"""Message builder for the legacy ``mail.send`` endpoint.

``Mail.to_payload`` produces the form fields the endpoint expects. List
valued fields use the ``name[]`` convention; ``headers`` and the SMTP API
header are sent as JSON strings. Blank fields are left out.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


def _listed(name: str, values: list[str]) -> dict[str, Any]:
    if not values:
        return {}
    if len(values) == 1:
        return {name: values[0]}
    return {f"{name}[]": list(values)}


@dataclass
class Mail:
    """One outgoing message."""

    to: list[str] = field(default_factory=list)
    to_name: list[str] = field(default_factory=list)
    from_email: str | None = None
    from_name: str | None = None
    subject: str | None = None
    text: str | None = None
    html: str | None = None
    cc: list[str] = field(default_factory=list)
    bcc: list[str] = field(default_factory=list)
    reply_to: str | None = None
    date: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    smtpapi: dict[str, Any] = field(default_factory=dict)

    def add_to(self, email: str, name: str | None = None) -> Mail:
        """Append a recipient; names stay aligned with addresses."""
        if name is not None and len(self.to_name) < len(self.to):
            self.to_name.extend([""] * (len(self.to) - len(self.to_name)))
        self.to.append(email)
        if name is not None:
            self.to_name.append(name)
        return self

    def to_payload(self) -> dict[str, Any]:
        to = list(self.to)
        smtpapi_to = self.smtpapi.get("to") or []
        if not to and smtpapi_to and self.from_email:
            # The endpoint requires ``to`` even when the SMTP API header
            # carries the real recipients.
            to = [self.from_email]

        payload: dict[str, Any] = {}
        payload.update(_listed("to", to))
        if any(self.to_name):
            # Names pair with addresses by position and share their shape.
            names = list(self.to_name[: len(to)])
            names.extend([""] * (len(to) - len(names)))
            payload.update(_listed("toname", names))
        scalars = (
            ("from", self.from_email),
            ("fromname", self.from_name),
            ("subject", self.subject),
            ("text", self.text),
            ("html", self.html),
            ("replyto", self.reply_to),
            ("date", self.date),
        )
        for name, value in scalars:
            if value:
                payload[name] = value
        if self.cc:
            payload["cc[]"] = list(self.cc)
        if self.bcc:
            payload["bcc[]"] = list(self.bcc)
        if self.headers:
            payload["headers"] = json.dumps(self.headers)
        if self.smtpapi:
            payload["x-smtpapi"] = json.dumps(self.smtpapi)
        return payload
