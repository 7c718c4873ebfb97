from __future__ import annotations

import importlib

import pytest

import config
from config import ConfigError, parse_id_list, require_env


@pytest.fixture
def reload_config(monkeypatch: pytest.MonkeyPatch):
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


def test_require_env_returns_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GDRIVE4DISCORD_TEST_KEY", "value")
    assert require_env("GDRIVE4DISCORD_TEST_KEY") == "value"


@pytest.mark.parametrize("value", [None, ""])
def test_require_env_missing_raises(monkeypatch: pytest.MonkeyPatch, value) -> None:
    if value is None:
        monkeypatch.delenv("GDRIVE4DISCORD_TEST_KEY", raising=False)
    else:
        monkeypatch.setenv("GDRIVE4DISCORD_TEST_KEY", value)

    with pytest.raises(ConfigError) as ei:
        require_env("GDRIVE4DISCORD_TEST_KEY")

    assert "GDRIVE4DISCORD_TEST_KEY" in str(ei.value)


def test_parse_id_list() -> None:
    assert parse_id_list("") == []
    assert parse_id_list(" 1, 22 ,,333 ") == [1, 22, 333]


def test_parse_id_list_rejects_garbage() -> None:
    with pytest.raises(ConfigError):
        parse_id_list("1,abc")


def test_malformed_settings_do_not_break_import(monkeypatch: pytest.MonkeyPatch, reload_config) -> None:
    monkeypatch.setenv("ALLOWED_GUILD_IDS", "1,abc")
    monkeypatch.setenv("OAUTH_PORT", "eighty")

    cfg = reload_config()

    assert cfg.ALLOWED_GUILD_IDS == []
    assert cfg.OAUTH_PORT == 8888
    with pytest.raises(ConfigError) as ei:
        cfg.validate()
    assert "ALLOWED_GUILD_IDS" in str(ei.value)
    assert "OAUTH_PORT" in str(ei.value)


def test_validate_passes_for_well_formed_settings(monkeypatch: pytest.MonkeyPatch, reload_config) -> None:
    monkeypatch.setenv("ALLOWED_GUILD_IDS", "10, 20")
    monkeypatch.setenv("RETRY_DELAY_SECONDS", "0.5")

    cfg = reload_config()

    cfg.validate()
    assert cfg.ALLOWED_GUILD_IDS == [10, 20]
    assert cfg.RETRY_DELAY_SECONDS == 0.5


def test_main_logs_malformed_settings_and_exits(
    monkeypatch: pytest.MonkeyPatch, reload_config, caplog: pytest.LogCaptureFixture
) -> None:
    import main

    monkeypatch.setenv("ALLOWED_GUILD_IDS", "not-a-guild")
    monkeypatch.setenv("DISCORD_TOKEN", "token")
    monkeypatch.setenv("GOOGLE_CREDENTIALS", "{}")
    reload_config()

    with pytest.raises(SystemExit) as ei:
        main.main()

    assert ei.value.code == 1
    assert "ALLOWED_GUILD_IDS" in caplog.text
