"""Task data models."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

PROJECT_TAG_PREFIX = "proj:"


class Priority(str, Enum):
    """Task priority level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Bumping walks this scale; sorting uses the rank (lower sorts first).
PRIORITY_ORDER: list[Priority] = [Priority.LOW, Priority.MEDIUM, Priority.HIGH]
PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


class BucketKey(str, Enum):
    """Board column a task falls into. Never persisted."""

    TODAY = "today"
    WEEK = "week"
    LATER = "later"
    DONE = "done"


def new_id() -> str:
    """Generate a fresh task/subtask identifier."""
    return str(uuid.uuid4())


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Lowercase, strip and deduplicate tags, keeping first-seen order."""
    cleaned = (str(tag).strip().lower() for tag in tags)
    return list(dict.fromkeys(tag for tag in cleaned if tag))


def project_from_tags(tags: Iterable[str]) -> str | None:
    """Return the suffix of the first ``proj:`` tag, if any."""
    for tag in tags:
        if tag.startswith(PROJECT_TAG_PREFIX) and len(tag) > len(PROJECT_TAG_PREFIX):
            return tag[len(PROJECT_TAG_PREFIX) :]
    return None


class Subtask(BaseModel):
    """A checklist item inside a task."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    title: str
    done: bool = False


class Task(BaseModel):
    """Persistent task record.

    Instances are immutable: every change goes through :meth:`replace`,
    which re-runs validation so that tags stay normalized and ``project``
    stays derived from them.

    Attributes:
        id: Opaque identifier, assigned at creation
        title: Display text
        notes: Free text, empty when unset
        created_at: Creation instant in epoch ms (``createdAt`` on disk)
        due: Due instant in epoch ms
        tags: Lowercase, unique tags
        project: Suffix of the ``proj:`` tag, derived
        priority: low / medium / high
        done: Completion flag
        subtasks: Ordered checklist
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_id)
    title: str = Field(..., min_length=1)
    notes: str = ""
    created_at: int = Field(..., alias="createdAt")
    due: int | None = None
    tags: list[str] = Field(default_factory=list)
    project: str | None = None
    priority: Priority = Priority.MEDIUM
    done: bool = False
    subtasks: list[Subtask] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _normalize_tags_and_project(cls, data: Any) -> Any:
        if isinstance(data, dict):
            tags = normalize_tags(data.get("tags") or [])
            data = {**data, "tags": tags, "project": project_from_tags(tags)}
        return data

    @field_validator("notes", mode="before")
    @classmethod
    def _notes_default(cls, v: Any) -> str:
        return v or ""

    def replace(self, **changes: Any) -> Task:
        """Return a new, re-validated task with *changes* applied."""
        data = self.model_dump()
        data.update(changes)
        return Task.model_validate(data)

    def to_record(self) -> dict[str, Any]:
        """Serialize to the persisted JSON shape (camelCase, absent when None)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TaskFilters(BaseModel):
    """Filter criteria shared by the list and board views."""

    show_done: bool = False
    tag: str | None = None
    project: str | None = None
    search: str = ""


@dataclass(frozen=True)
class TokenSpan:
    """A structured marker found in raw input."""

    kind: Literal["tag", "priority"]
    text: str
    start: int
    end: int


@dataclass(frozen=True)
class ExtractionResult:
    """Output of the token extractor."""

    cleaned_text: str
    tags: frozenset[str] = frozenset()
    explicit_priority: Priority | None = None
    spans: tuple[TokenSpan, ...] = ()


@dataclass(frozen=True)
class DateMatch:
    """A date expression located in text, ``[start, end)``."""

    text: str
    start: int
    end: int
    resolved: datetime


@dataclass(frozen=True)
class DraftTask:
    """Parsed task fields before identity and audit fields are attached."""

    title: str
    due: datetime | None = None
    tags: list[str] = field(default_factory=list)
    priority: Priority = Priority.MEDIUM
    project: str | None = None
