# pyright: reportUnknownParameterType=false, reportUnknownMemberType=false
# pyright: reportMissingParameterType=false
import base64
from unittest.mock import patch

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from sendgrid_http import Mail
from sendgrid_http.networking.client import SendGridClient


def _wire_response(request, **kwargs):
    response = requests.Response()
    response.status_code = 200
    response.headers = CaseInsensitiveDict({"Content-Type": "application/json"})
    response._content = b"[]"
    response.encoding = "utf-8"
    response.url = request.url
    response.request = request
    return response


def _basic(user, password):
    token = base64.b64encode(f"{user}:{password}".encode()).decode()
    return f"Basic {token}"


@pytest.fixture(autouse=True)
def netrc_with_other_credentials(tmp_path, monkeypatch):
    netrc = tmp_path / "netrc"
    netrc.write_text("machine api.sendgrid.com login other password secret\n")
    netrc.chmod(0o600)
    monkeypatch.setenv("NETRC", str(netrc))
    return netrc


@pytest.fixture
def sent():
    with patch(
        "requests.adapters.HTTPAdapter.send", side_effect=_wire_response
    ) as mock_send:
        yield mock_send


def _prepared(mock_send):
    assert mock_send.call_count == 1
    return mock_send.call_args.args[0]


def test_bearer_header_wins_over_netrc(sent):
    SendGridClient(api_key="abc123").bounces()

    assert _prepared(sent).headers["Authorization"] == "Bearer abc123"


def test_basic_auth_uses_client_credentials_over_netrc(sent):
    SendGridClient(api_user="foobar", api_key="abc123").bounces()

    assert _prepared(sent).headers["Authorization"] == _basic("foobar", "abc123")


def test_form_credentials_stay_in_body_despite_netrc(sent):
    SendGridClient(api_user="foobar", api_key="abc123").send(Mail())

    prepared = _prepared(sent)
    assert "Authorization" not in prepared.headers
    assert prepared.body == "api_key=abc123&api_user=foobar"
    assert prepared.url == "https://api.sendgrid.com/api/mail.send.json"


def test_unauthenticated_client_ignores_netrc(sent):
    SendGridClient().scopes()

    assert "Authorization" not in _prepared(sent).headers
