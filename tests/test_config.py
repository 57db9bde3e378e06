import pytest

from roadmap.config import Config, ConfigValidationError, _validate_config, load_config

ENV_KEYS = [
    "NOTION_API_KEY",
    "NOTION_TOKEN",
    "NOTION_DATABASE_ID",
    "NOTION_ID_PROPERTY",
    "ROADMAP_DEFAULT_STATUS",
    "ROADMAP_API_URL",
    "PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_missing_credentials_exit(monkeypatch, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        load_config(validate=True)
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "NOTION_API_KEY environment variable is not set" in err
    assert "NOTION_DATABASE_ID environment variable is not set" in err
    assert "check your environment variables" in err
    assert ".env" not in err


def test_missing_credentials_without_validation() -> None:
    config = load_config(validate=False)
    assert config.missing() == ["NOTION_API_KEY", "NOTION_DATABASE_ID"]


def test_valid_config(monkeypatch) -> None:
    monkeypatch.setenv("NOTION_API_KEY", "secret_abc")
    monkeypatch.setenv("NOTION_DATABASE_ID", "0123456789abcdef0123456789abcdef")
    monkeypatch.setenv("ROADMAP_API_URL", "https://roadmap.example.com/")

    config = load_config(validate=True)
    assert config.notion_token == "secret_abc"
    assert config.database_id == "0123456789abcdef0123456789abcdef"
    assert config.default_status == "Not Started"
    assert config.api_base_url == "https://roadmap.example.com"
    assert config.port == 8080
    assert config.missing() == []


def test_notion_token_alias(monkeypatch) -> None:
    monkeypatch.setenv("NOTION_TOKEN", "secret_alias")
    assert load_config(validate=False).notion_token == "secret_alias"


def test_invalid_database_id() -> None:
    config = Config(notion_token="secret", database_id="not-a-uuid")
    with pytest.raises(ConfigValidationError, match="should be a UUID"):
        _validate_config(config)


def test_invalid_port(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(SystemExit) as exc:
        load_config(validate=False)
    assert exc.value.code == 1
