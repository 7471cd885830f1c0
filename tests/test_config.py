"""Tests for configuration management."""

import json

import pytest
from pydantic import ValidationError

from todolist.config import (
    Config,
    ConfigManager,
    get_config_manager,
    is_known_key,
)


def test_default_config():
    """Test default configuration."""
    config = Config()
    assert config.server.host == "127.0.0.1"
    assert config.server.port == 5000
    assert config.server.cors_origins == ["*"]
    assert config.database.backend == "sqlite"
    assert config.database.path is None
    assert config.api.endpoint == "http://localhost:5000/api"
    assert config.api.timeout == 30
    assert config.logging.level == "INFO"


def test_config_file_location(isolated_dirs):
    config_manager = ConfigManager(profile="work")
    assert config_manager.config_file == isolated_dirs / "config" / "work.json"
    assert config_manager.config_dir.is_dir()


def test_config_save_load():
    """Test saving and loading configuration."""
    config_manager = ConfigManager(profile="test")
    config_manager.set("api.endpoint", "http://example.test/api")
    config_manager.set("server.port", "8080")

    reloaded = ConfigManager(profile="test")
    assert reloaded.get("api.endpoint") == "http://example.test/api"
    assert reloaded.get("server.port") == 8080

    saved = json.loads(config_manager.config_file.read_text())
    assert saved["server"]["port"] == 8080


def test_set_json_list_value():
    config_manager = ConfigManager()
    config_manager.set("server.cors_origins", '["http://localhost:3000"]')
    assert config_manager.config.server.cors_origins == ["http://localhost:3000"]


def test_set_unknown_key():
    config_manager = ConfigManager()
    with pytest.raises(KeyError):
        config_manager.set("server.nope", "1")
    assert not config_manager.config_file.exists()


def test_set_invalid_value_is_not_saved():
    config_manager = ConfigManager()
    with pytest.raises(ValidationError):
        config_manager.set("database.backend", "mongo")
    assert not config_manager.config_file.exists()
    assert config_manager.config.database.backend == "sqlite"


def test_corrupted_config_falls_back_to_defaults():
    config_manager = ConfigManager()
    config_manager.config_file.write_text("{not json")

    assert config_manager.config == Config()


def test_invalid_config_values_fall_back_to_defaults():
    config_manager = ConfigManager()
    config_manager.config_file.write_text(json.dumps({"server": {"port": "many"}}))

    assert config_manager.config.server.port == 5000


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "7000")
    monkeypatch.setenv("TODOLIST_DB_BACKEND", "memory")
    monkeypatch.setenv("TODOLIST_API_ENDPOINT", "http://api.test/api")

    config = ConfigManager().config

    assert config.server.port == 7000
    assert config.database.backend == "memory"
    assert config.api.endpoint == "http://api.test/api"


def test_env_override_wins_over_file(monkeypatch):
    config_manager = ConfigManager()
    config_manager.set("server.port", "8080")
    monkeypatch.setenv("PORT", "9090")

    assert ConfigManager().config.server.port == 9090
    # The file keeps its own value
    assert json.loads(config_manager.config_file.read_text())["server"]["port"] == 8080


def test_empty_env_var_is_ignored(monkeypatch):
    monkeypatch.setenv("PORT", "")
    assert ConfigManager().config.server.port == 5000


def test_invalid_env_override_is_skipped(monkeypatch, isolated_dirs):
    monkeypatch.setenv("PORT", "abc")
    monkeypatch.setenv("TODOLIST_DB_BACKEND", "memory")

    config = ConfigManager().config

    assert config.server.port == 5000
    assert config.database.backend == "memory"
    log_text = (isolated_dirs / "logs" / "todolist.log").read_text()
    assert "ignoring invalid PORT='abc'" in log_text


def test_reset_single_key():
    config_manager = ConfigManager()
    config_manager.set("api.timeout", "5")
    config_manager.reset("api.timeout")
    assert config_manager.config.api.timeout == 30


def test_reset_nullable_key():
    config_manager = ConfigManager()
    config_manager.set("database.path", "/tmp/todos.db")
    config_manager.reset("database.path")
    assert config_manager.config.database.path is None


def test_reset_all():
    config_manager = ConfigManager()
    config_manager.set("server.port", "8080")
    config_manager.reset()
    assert config_manager.config == Config()


@pytest.mark.parametrize(
    ("key", "known"),
    [
        ("server.port", True),
        ("api", True),
        ("database.path", True),
        ("server.port.value", False),
        ("nope", False),
        ("api.nope", False),
    ],
)
def test_is_known_key(key, known):
    assert is_known_key(key) is known


def test_get_unknown_nested_key_returns_none():
    assert ConfigManager().get("server.port.value") is None


def test_get_config_manager_caches_per_profile():
    assert get_config_manager() is get_config_manager("default")
    assert get_config_manager("a") is not get_config_manager("b")
