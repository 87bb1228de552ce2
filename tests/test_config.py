"""Tests for chat_commands.config: defaults, persistence and env overrides."""

import json

import pytest

from chat_commands.chat_client import DEFAULT_CHAT_SERVICE_URL
from chat_commands.config import ChatCommandsConfig, get_config, load_config, update_config


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("CHAT_SERVICE_URL", "HISCORE_URL", "PRICE_SERVICE_URL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_file(tmp_path):
    config = get_config(tmp_path)
    assert config["killcount"] is True
    assert config["chat_service_url"] == DEFAULT_CHAT_SERVICE_URL


def test_update_persists_and_merges(tmp_path):
    update_config(tmp_path, {"price": False})
    config = update_config(tmp_path, {"pks": False})
    assert config["price"] is False
    assert config["pks"] is False
    stored = json.loads((tmp_path / "config.json").read_text())
    assert stored["price"] is False


def test_unknown_keys_are_ignored(tmp_path):
    config = update_config(tmp_path, {"bogus": 1})
    assert "bogus" not in config
    (tmp_path / "config.json").write_text(json.dumps({"other": 2, "qp": False}))
    config = get_config(tmp_path)
    assert "other" not in config
    assert config["qp"] is False


def test_update_creates_data_dir(tmp_path):
    data_dir = tmp_path / "nested" / "data"
    update_config(data_dir, {"gc": False})
    assert (data_dir / "config.json").is_file()


def test_load_config_is_typed(tmp_path):
    update_config(tmp_path, {"duels": False})
    config = load_config(tmp_path)
    assert isinstance(config, ChatCommandsConfig)
    assert config.duels is False
    assert config.lvl is True


def test_env_overrides_urls(tmp_path, monkeypatch):
    update_config(tmp_path, {"hiscore_url": "http://stored.test"})
    monkeypatch.setenv("HISCORE_URL", "http://env.test")
    monkeypatch.setenv("CHAT_SERVICE_URL", "")
    config = load_config(tmp_path)
    assert config.hiscore_url == "http://env.test"
    assert config.chat_service_url == DEFAULT_CHAT_SERVICE_URL
