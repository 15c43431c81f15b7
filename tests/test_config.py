import pytest

from deepl_sheets.config import load_config


ENV_NAMES = [
    "DEEPL_AUTH_KEY",
    "DEEPL_CREDENTIAL_FILE",
    "DEEPL_FREE_API_URL",
    "DEEPL_PRO_API_URL",
    "DEEPL_DEFAULT_TARGET_LANG",
    "LOG_FILE",
    "LOG_LEVEL",
    "HTTP_TIMEOUT",
    "RETRY_MAX_ATTEMPTS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_load_config_defaults():
    config = load_config()

    assert config.auth_key is None
    assert config.credential_file == "state/credentials.json"
    assert config.free_api_url == "https://api-free.deepl.com"
    assert config.pro_api_url == "https://api.deepl.com"
    assert config.log_level == "INFO"
    assert config.http_timeout == 30
    assert config.max_attempts == 5


def test_load_config_from_env(monkeypatch):
    monkeypatch.setenv("DEEPL_AUTH_KEY", " key:fx ")
    monkeypatch.setenv("DEEPL_DEFAULT_TARGET_LANG", "DE")
    monkeypatch.setenv("LOG_FILE", "")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("HTTP_TIMEOUT", "12.5")
    monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "3")

    config = load_config()
    assert config.auth_key == "key:fx"
    assert config.default_target_lang == "DE"
    assert config.log_file is None
    assert config.log_level == "DEBUG"
    assert config.http_timeout == 12.5
    assert config.max_attempts == 3


@pytest.mark.parametrize("value", ["0", "6"])
def test_load_config_rejects_attempts_out_of_range(monkeypatch, value):
    monkeypatch.setenv("RETRY_MAX_ATTEMPTS", value)

    with pytest.raises(ValueError):
        load_config()
