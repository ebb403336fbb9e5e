"""quickdo domain models.

Pydantic models for persisted entities and configuration, plus the small
frozen dataclasses passed between the parsing stages.
"""

from .config_models import (
    AppConfig,
    AssistantConfig,
    OutputConfig,
    ParsingConfig,
    StorageConfig,
)
from .task import (
    PRIORITY_ORDER,
    PRIORITY_RANK,
    PROJECT_TAG_PREFIX,
    BucketKey,
    DateMatch,
    DraftTask,
    ExtractionResult,
    Priority,
    Subtask,
    Task,
    TaskFilters,
    TokenSpan,
    new_id,
    normalize_tags,
    project_from_tags,
)

__all__ = [
    # Task models
    "Task",
    "Subtask",
    "Priority",
    "BucketKey",
    "TaskFilters",
    "PRIORITY_ORDER",
    "PRIORITY_RANK",
    "PROJECT_TAG_PREFIX",
    "new_id",
    "normalize_tags",
    "project_from_tags",
    # Parsing intermediates
    "TokenSpan",
    "ExtractionResult",
    "DateMatch",
    "DraftTask",
    # Config models
    "AppConfig",
    "AssistantConfig",
    "OutputConfig",
    "ParsingConfig",
    "StorageConfig",
]
