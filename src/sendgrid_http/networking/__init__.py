"""Request construction, dispatch and response handling."""

from .auth import AuthStrategy, BasicAuth, BearerToken, NoAuth, select_auth
from .client import SendGridClient
from .config import ClientConfig
from .errors import ApiError
from .request import Encoding, RequestSpec
from .response import ResponseEnvelope

__all__ = [
    "ApiError",
    "AuthStrategy",
    "BasicAuth",
    "BearerToken",
    "ClientConfig",
    "Encoding",
    "NoAuth",
    "RequestSpec",
    "ResponseEnvelope",
    "SendGridClient",
    "select_auth",
]
