"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

import sqlite3
from unittest.mock import MagicMock, patch

import pytest

from punchclock.adapters.sqlite import schema as db_schema
from punchclock.models.config_models import AppConfig
from punchclock.models.storage_strategy import LocalStorageStrategy

# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def isolated_log_dir(tmp_path_factory):
    """Keep the application log file out of the real user log dir."""
    import punchclock.utils.logger as logger_mod

    log_dir = tmp_path_factory.mktemp("logs")
    logger_mod._logger = None
    with patch("punchclock.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir


# ---------------------------------------------------------------------------
# Storage helpers
# ---------------------------------------------------------------------------


def create_in_memory_db() -> sqlite3.Connection:
    """In-memory database with the full schema, in manual transaction mode."""
    conn = sqlite3.connect(":memory:", isolation_level=None, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")

    for table_sql in db_schema.ALL_TABLES:
        conn.execute(table_sql)
    for idx_sql in db_schema.ALL_INDEXES:
        conn.execute(idx_sql)

    return conn


@pytest.fixture
def db():
    conn = create_in_memory_db()
    yield conn
    conn.close()


@pytest.fixture
def db_path(tmp_path):
    """Path for a file-backed database (units of work need a real file)."""
    return tmp_path / "punchclock.db"


@pytest.fixture
def storage(db_path):
    """LocalStorageStrategy over a fresh temporary database."""
    return LocalStorageStrategy(db_path=db_path)


# ---------------------------------------------------------------------------
# Config isolation helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path, monkeypatch):
    """Provide a real ConfigService backed by a temporary directory.

    Clears the lru_cache so each test gets a fresh service instance.
    """
    from punchclock.services.config_service import ConfigService, get_config_service

    monkeypatch.delenv("PUNCHCLOCK_DB", raising=False)
    monkeypatch.delenv("PUNCHCLOCK_LOG_LEVEL", raising=False)
    get_config_service.cache_clear()
    svc = ConfigService(config_dir=tmp_path / "config", data_dir=tmp_path / "data")
    yield svc
    get_config_service.cache_clear()


@pytest.fixture()
def mock_config_service():
    """Provide a MagicMock that stands in for get_config_service()."""
    config = AppConfig()

    svc = MagicMock()
    svc.load_config.return_value = config
    svc.config = config
    return svc


@pytest.fixture()
def patch_config_service(mock_config_service):
    """Patch the config service lookups used by commands.

    Use explicitly in test classes/functions that need it:
        @pytest.mark.usefixtures('patch_config_service')
    """
    with patch(
        "punchclock.commands.common.get_config_service",
        return_value=mock_config_service,
    ):
        yield mock_config_service


@pytest.fixture()
def cli_config(tmp_config):
    """Route every command and service factory to a temporary database."""
    with patch(
        "punchclock.services.config_service.get_config_service", return_value=tmp_config
    ):
        with patch(
            "punchclock.commands.common.get_config_service", return_value=tmp_config
        ):
            with patch(
                "punchclock.commands.config.get_config_service", return_value=tmp_config
            ):
                yield tmp_config
