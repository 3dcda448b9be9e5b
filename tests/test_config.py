import pytest
from pydantic import ValidationError

from terminalcom.config import Settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_defaults(monkeypatch):
    for name in ("DBG", "TERMINALCOM_DBG", "TERMINALCOM_BASE_URL", "TERMINALCOM_API_VERSION"):
        monkeypatch.delenv(name, raising=False)

    settings = _settings()

    assert settings.base_url == "https://api.terminal.com"
    assert settings.api_version == "v0.1"
    assert settings.curl_debug is False


@pytest.mark.parametrize("variable", ["DBG", "TERMINALCOM_DBG"])
def test_debug_toggle_is_read_from_environment(monkeypatch, variable):
    monkeypatch.delenv("DBG", raising=False)
    monkeypatch.delenv("TERMINALCOM_DBG", raising=False)
    monkeypatch.setenv(variable, "curl")

    assert _settings().curl_debug is True


def test_credentials_are_read_from_environment(monkeypatch):
    monkeypatch.setenv("TERMINALCOM_USER_TOKEN", "u")
    monkeypatch.setenv("TERMINALCOM_ACCESS_TOKEN", "a")

    settings = _settings()

    assert (settings.user_token, settings.access_token) == ("u", "a")


def test_base_url_and_version_are_normalized():
    settings = _settings(base_url="https://staging.terminal.com/ ", api_version="/v0.2/")
    assert settings.base_url == "https://staging.terminal.com"
    assert settings.api_version == "v0.2"


def test_log_level_is_validated():
    assert _settings(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        _settings(log_level="chatty")
