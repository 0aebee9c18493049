"""Unit tests for configuration module."""

import json
import pytest
from pathlib import Path
from pydantic import ValidationError

import homestead_transfer.config as config_module
from homestead_transfer.config import TransferConfig, get_config, set_config


@pytest.fixture
def no_user_config(tmp_path, monkeypatch):
    """Point the user config file somewhere empty and clear HOMESTEAD_* env."""
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_module, "_USER_CONFIG_PATH", path)
    for name in ("HOMESTEAD_LOG_LEVEL", "HOMESTEAD_STORAGE_BACKEND", "HOMESTEAD_JSON_INDENT"):
        monkeypatch.delenv(name, raising=False)
    set_config(None)
    return path


def test_config_defaults(monkeypatch):
    """Test that configuration loads with default values."""
    monkeypatch.delenv("HOMESTEAD_STORAGE_BACKEND", raising=False)
    config = TransferConfig()
    assert config.storage_backend == "sqlite"
    assert config.default_user_id == "main_user"
    assert config.json_indent == 2
    assert config.bundle_version == 1
    assert config.export_history_collection == "data_exports"
    assert config.import_history_collection == "data_imports"


def test_config_from_env(monkeypatch):
    """Test that configuration loads from environment variables."""
    monkeypatch.setenv("HOMESTEAD_LOG_LEVEL", "debug")
    monkeypatch.setenv("HOMESTEAD_STORAGE_BACKEND", "memory")

    config = TransferConfig()
    assert config.log_level == "DEBUG"
    assert config.storage_backend == "memory"


def test_storage_backend_validation():
    """Only memory and sqlite backends exist."""
    assert TransferConfig(storage_backend="memory").storage_backend == "memory"

    with pytest.raises(ValidationError):
        TransferConfig(storage_backend="indexeddb")


def test_log_level_validation():
    assert TransferConfig(log_level="warning").log_level == "WARNING"

    with pytest.raises(ValidationError):
        TransferConfig(log_level="LOUD")


def test_negative_indent_rejected():
    with pytest.raises(ValidationError):
        TransferConfig(json_indent=-1)


def test_path_expansion(tmp_path, monkeypatch):
    """Test that paths are expanded and the database directory is created."""
    monkeypatch.setenv("HOMESTEAD_TEST_ROOT", str(tmp_path))
    config = TransferConfig(
        sqlite_path="$HOMESTEAD_TEST_ROOT/nested/db/homestead.db",
        export_dir="~/exports",
    )

    assert config.sqlite_path_expanded == tmp_path / "nested" / "db" / "homestead.db"
    assert (tmp_path / "nested" / "db").is_dir()
    assert "~" not in str(config.export_dir_expanded)
    assert config.export_dir_expanded == Path.home() / "exports"


def test_global_config(no_user_config):
    """Test global configuration singleton."""
    config1 = get_config()
    config2 = get_config()
    assert config1 is config2

    custom_config = TransferConfig(default_user_id="farmhand")
    set_config(custom_config)
    assert get_config().default_user_id == "farmhand"


def test_user_config_file_overrides_defaults(no_user_config):
    no_user_config.write_text(json.dumps({"json_indent": 4, "default_user_id": "farmhand"}))

    config = get_config()
    assert config.json_indent == 4
    assert config.default_user_id == "farmhand"


def test_env_beats_user_config_file(no_user_config, monkeypatch):
    no_user_config.write_text(json.dumps({"json_indent": 4}))
    monkeypatch.setenv("HOMESTEAD_JSON_INDENT", "0")

    assert get_config().json_indent == 0


def test_unreadable_user_config_is_ignored(no_user_config):
    no_user_config.write_text("{not json")

    assert get_config().json_indent == 2
