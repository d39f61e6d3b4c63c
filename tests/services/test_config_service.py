"""Unit tests for services/config_service.py.

Uses a real ConfigService pointed at a tmp_path directory.
"""

from __future__ import annotations

import json
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from punchclock.models.config_models import AppConfig, OutputConfig
from punchclock.models.storage_strategy import LocalStorageStrategy
from punchclock.services.config_service import ConfigService, get_config_service

# ---------------------------------------------------------------------------
# Loading and saving
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_missing_file_creates_defaults(self, tmp_config):
        config = tmp_config.config

        assert config == AppConfig()
        assert tmp_config.config_path.exists()

    def test_saved_file_is_owner_only(self, tmp_config):
        _ = tmp_config.config

        assert stat.S_IMODE(tmp_config.config_path.stat().st_mode) == 0o600

    def test_reads_existing_file(self, tmp_config):
        tmp_config.config_path.write_text(
            json.dumps({"owner_id": "bob", "output": {"format": "json"}}),
            encoding="utf-8",
        )

        config = tmp_config.load_config()

        assert config.owner_id == "bob"
        assert config.output.format == "json"

    def test_corrupt_file_raises_runtime_error(self, tmp_config):
        tmp_config.config_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(RuntimeError, match="Failed to load config"):
            tmp_config.load_config()

    def test_invalid_values_raise_runtime_error(self, tmp_config):
        tmp_config.config_path.write_text(
            json.dumps({"output": {"format": "xml"}}), encoding="utf-8"
        )

        with pytest.raises(RuntimeError, match="Failed to load config"):
            tmp_config.load_config()

    def test_config_cached(self, tmp_config):
        assert tmp_config.config is tmp_config.config


class TestSaveAndReset:
    def test_save_round_trip(self, tmp_config):
        tmp_config._config = AppConfig(owner_id="carol", output=OutputConfig(format="yaml"))
        tmp_config.save_config()

        reloaded = ConfigService(
            config_dir=tmp_config.config_dir, data_dir=tmp_config.data_dir
        ).config

        assert reloaded.owner_id == "carol"
        assert reloaded.output.format == "yaml"

    def test_save_without_config_raises(self, tmp_config):
        with pytest.raises(RuntimeError, match="No configuration to save"):
            tmp_config.save_config()

    def test_reset_restores_defaults(self, tmp_config):
        tmp_config._config = AppConfig(owner_id="carol")
        tmp_config.save_config()

        tmp_config.reset_config()

        assert tmp_config.config.owner_id == "local"
        saved = json.loads(tmp_config.config_path.read_text(encoding="utf-8"))
        assert saved["owner_id"] == "local"


class TestLogLevel:
    def test_configured_level_applied_on_load(self, tmp_config):
        tmp_config.config_path.write_text(json.dumps({"log_level": "info"}), encoding="utf-8")

        with patch("punchclock.services.config_service.set_log_level") as set_level:
            config = tmp_config.load_config()

        assert config.log_level == "INFO"
        set_level.assert_called_once_with("INFO")

    def test_default_config_leaves_level_alone(self, tmp_config):
        with patch("punchclock.services.config_service.set_log_level") as set_level:
            tmp_config.load_config()

        set_level.assert_not_called()

    def test_unknown_level_rejected(self, tmp_config):
        tmp_config.config_path.write_text(json.dumps({"log_level": "chatty"}), encoding="utf-8")

        with pytest.raises(RuntimeError, match="Failed to load config"):
            tmp_config.load_config()


# ---------------------------------------------------------------------------
# Database path and storage strategy
# ---------------------------------------------------------------------------


class TestDatabasePath:
    def test_default_under_data_dir(self, tmp_config):
        assert tmp_config.database_path == tmp_config.data_dir / "punchclock.db"

    def test_config_value_used(self, tmp_config, tmp_path):
        tmp_config._config = AppConfig(database_path=str(tmp_path / "mine.db"))

        assert tmp_config.database_path == tmp_path / "mine.db"

    def test_env_override_wins(self, tmp_config, tmp_path, monkeypatch):
        tmp_config._config = AppConfig(database_path=str(tmp_path / "mine.db"))
        monkeypatch.setenv("PUNCHCLOCK_DB", str(tmp_path / "env.db"))

        assert tmp_config.database_path == tmp_path / "env.db"

    def test_storage_strategy_is_local_and_cached(self, tmp_config):
        strategy = tmp_config.storage_strategy

        assert isinstance(strategy, LocalStorageStrategy)
        assert strategy.storage_type == "local"
        assert Path(strategy.db_path) == tmp_config.database_path
        assert tmp_config.storage_strategy is strategy


def test_default_dirs_come_from_platformdirs(tmp_path):
    with patch(
        "punchclock.services.config_service.user_config_dir",
        return_value=str(tmp_path / "cfg"),
    ):
        with patch(
            "punchclock.services.config_service.user_data_dir",
            return_value=str(tmp_path / "data"),
        ):
            service = ConfigService()

    assert service.config_path == tmp_path / "cfg" / "config.json"
    assert service.data_dir.is_dir()


def test_get_config_service_is_cached(tmp_path):
    get_config_service.cache_clear()
    try:
        with patch(
            "punchclock.services.config_service.user_config_dir", return_value=str(tmp_path)
        ):
            with patch(
                "punchclock.services.config_service.user_data_dir", return_value=str(tmp_path)
            ):
                assert get_config_service() is get_config_service()
    finally:
        get_config_service.cache_clear()
