"""Client library for the SendGrid HTTP API."""

from ._version import __version__
from .mail import Mail
from .networking import (
    ApiError,
    BasicAuth,
    BearerToken,
    ClientConfig,
    Encoding,
    NoAuth,
    RequestSpec,
    ResponseEnvelope,
    SendGridClient,
)

__all__ = [
    "ApiError",
    "BasicAuth",
    "BearerToken",
    "ClientConfig",
    "Encoding",
    "Mail",
    "NoAuth",
    "RequestSpec",
    "ResponseEnvelope",
    "SendGridClient",
    "__version__",
]
