"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

import os
import tempfile

# Point platformdirs at a throwaway tree before any quickdo module creates
# its log file or config directory.
_SANDBOX = tempfile.mkdtemp(prefix="quickdo-tests-")
for _var in ("XDG_CONFIG_HOME", "XDG_DATA_HOME", "XDG_STATE_HOME", "XDG_CACHE_HOME"):
    os.environ[_var] = os.path.join(_SANDBOX, _var.lower())
for _var in ("QUICKDO_API_KEY", "OPENAI_API_KEY", "QUICKDO_TASKS_FILE"):
    os.environ.pop(_var, None)

from datetime import datetime  # noqa: E402
from unittest.mock import patch  # noqa: E402

import pytest  # noqa: E402

from quickdo_cli.adapters import MemoryStorage  # noqa: E402
from quickdo_cli.parsing import RuleBasedDateResolver  # noqa: E402
from quickdo_cli.services.ingestion import TaskIngestionPipeline  # noqa: E402
from quickdo_cli.services.task_store import TaskStore  # noqa: E402

# Wednesday, mid-morning.
NOW = datetime(2024, 6, 5, 10, 0, 0)


# ---------------------------------------------------------------------------
# Config isolation helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path, monkeypatch):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from quickdo_cli.services.config_service import get_config_service

    for var in ("QUICKDO_API_KEY", "OPENAI_API_KEY", "QUICKDO_TASKS_FILE"):
        monkeypatch.delenv(var, raising=False)

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with patch("quickdo_cli.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("quickdo_cli.services.config_service.user_data_dir", return_value=tmpdir):
            from quickdo_cli.services.config_service import ConfigService

            svc = ConfigService()
            with patch(
                "quickdo_cli.services.config_service.get_config_service",
                return_value=svc,
            ):
                yield svc
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Task store helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def memory_storage():
    return MemoryStorage()


@pytest.fixture()
def make_store():
    """Factory for a TaskStore over in-memory storage with a fixed clock."""

    def _make(records=None, now: datetime = NOW) -> TaskStore:
        pipeline = TaskIngestionPipeline(RuleBasedDateResolver())
        return TaskStore(MemoryStorage(records), pipeline, clock=lambda: now)

    return _make


@pytest.fixture()
def store(make_store):
    return make_store()
