"""Bootstrap of the task store for the current configuration.

Usage Pattern:
    from quickdo_cli.services.context_manager import get_task_store

    store = get_task_store()
    task = store.ingest("Email Alex tomorrow 3pm #work !high")

The store is wired from ConfigService: the JSON task file location, the
date resolver chain built from the parsing settings, and the assistant
backend chosen from the assistant settings.
"""

from __future__ import annotations

from quickdo_cli.adapters import JsonFileStorage
from quickdo_cli.parsing import get_date_resolver
from quickdo_cli.services.assistant import Assistant, get_assistant
from quickdo_cli.services.config_service import get_config_service
from quickdo_cli.services.ingestion import TaskIngestionPipeline
from quickdo_cli.services.task_store import TaskStore


def get_task_store() -> TaskStore:
    """Build a TaskStore backed by the configured task file."""
    config_service = get_config_service()
    pipeline = TaskIngestionPipeline(get_date_resolver(config_service.config.parsing))
    return TaskStore(JsonFileStorage(config_service.tasks_path), pipeline)


def get_configured_assistant() -> Assistant:
    """Return the assistant selected by configuration and environment."""
    return get_assistant(get_config_service().assistant_config())
