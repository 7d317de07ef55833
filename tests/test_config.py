# pyright: reportUnknownMemberType=false
import pytest

from sendgrid_http.networking.config import DEFAULT_USER_AGENT, ClientConfig


def test_config_defaults_are_stable():
    config = ClientConfig()

    assert config.api_user is None
    assert config.api_key is None
    assert config.protocol == "https"
    assert config.host == "api.sendgrid.com"
    assert config.port is None
    assert config.endpoint == "/api/mail.send.json"
    assert config.raise_exceptions is True
    assert config.user_agent == DEFAULT_USER_AGENT
    assert dict(config.default_headers) == {}
    assert config.verify_tls is True
    assert config.timeout_seconds is None
    assert config.connect_timeout_seconds is None
    assert config.read_timeout_seconds is None


def test_config_is_frozen():
    config = ClientConfig(api_key="abc123")

    with pytest.raises(AttributeError):
        config.api_key = "other"  # type: ignore[misc]


def test_config_default_headers_are_independent():
    first = ClientConfig()
    second = ClientConfig()

    assert first.default_headers is not second.default_headers


def test_config_default_headers_are_immutable():
    config = ClientConfig(default_headers={"X-Test": "1"})

    with pytest.raises(TypeError):
        config.default_headers["X-Test"] = "2"  # type: ignore[index]


def test_config_copies_external_headers_input():
    headers = {"X-Test": "1"}
    config = ClientConfig(default_headers=headers)
    headers["X-Test"] = "2"

    assert config.default_headers["X-Test"] == "1"


def test_config_repr_masks_api_key():
    config = ClientConfig(api_user="foobar", api_key="abc123")

    assert "abc123" not in repr(config)
    assert "foobar" in repr(config)


def test_config_rejects_user_without_key():
    with pytest.raises(ValueError):
        ClientConfig(api_user="foobar")


def test_config_rejects_empty_protocol_and_host():
    with pytest.raises(ValueError):
        ClientConfig(protocol="")

    with pytest.raises(ValueError):
        ClientConfig(host="")


def test_config_rejects_out_of_range_port():
    with pytest.raises(ValueError):
        ClientConfig(port=0)

    with pytest.raises(ValueError):
        ClientConfig(port=65536)


def test_config_rejects_relative_endpoint():
    with pytest.raises(ValueError):
        ClientConfig(endpoint="api/mail.send.json")


def test_config_rejects_partial_connect_read_timeout():
    with pytest.raises(ValueError):
        ClientConfig(connect_timeout_seconds=1.0)

    with pytest.raises(ValueError):
        ClientConfig(read_timeout_seconds=2.0)


def test_config_rejects_non_positive_timeouts():
    with pytest.raises(ValueError):
        ClientConfig(timeout_seconds=0)
    with pytest.raises(ValueError):
        ClientConfig(timeout_seconds=-1)

    with pytest.raises(ValueError):
        ClientConfig(connect_timeout_seconds=0, read_timeout_seconds=1)
    with pytest.raises(ValueError):
        ClientConfig(connect_timeout_seconds=1, read_timeout_seconds=0)


def test_from_env_reads_sendgrid_variables():
    config = ClientConfig.from_env(
        {
            "SENDGRID_API_USER": "foobar",
            "SENDGRID_API_KEY": "abc123",
            "SENDGRID_PROTOCOL": "http",
            "SENDGRID_HOST": "localhost",
            "SENDGRID_PORT": "3000",
            "SENDGRID_RAISE_EXCEPTIONS": "false",
        }
    )

    assert config.api_user == "foobar"
    assert config.api_key == "abc123"
    assert config.protocol == "http"
    assert config.host == "localhost"
    assert config.port == 3000
    assert config.raise_exceptions is False


def test_from_env_ignores_blank_values():
    config = ClientConfig.from_env({"SENDGRID_HOST": "", "SENDGRID_PORT": ""})

    assert config.host == "api.sendgrid.com"
    assert config.port is None


def test_from_env_overrides_win():
    config = ClientConfig.from_env(
        {"SENDGRID_API_KEY": "from-env"}, api_key="explicit"
    )

    assert config.api_key == "explicit"


def test_from_env_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("SENDGRID_API_KEY", "sendgrid_123")
    monkeypatch.delenv("SENDGRID_API_USER", raising=False)

    assert ClientConfig.from_env().api_key == "sendgrid_123"


def test_from_env_rejects_bad_port_and_flag():
    with pytest.raises(ValueError):
        ClientConfig.from_env({"SENDGRID_PORT": "http"})

    with pytest.raises(ValueError):
        ClientConfig.from_env({"SENDGRID_RAISE_EXCEPTIONS": "maybe"})
