"""JSON export and import of task collections.

Import is all-or-nothing: the payload is fully normalized into tasks
before anything is returned, and any structural problem raises
:class:`TaskImportError`.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable
from json import JSONDecodeError
from typing import Any

from pydantic import ValidationError

from quickdo_cli.models import Priority, Subtask, Task, new_id
from quickdo_cli.models.exceptions import TaskImportError
from quickdo_cli.utils.logger import get_logger
from quickdo_cli.utils.timeutils import now_ms

logger = get_logger("transfer")

DEFAULT_TITLE = "Untitled"
_PRIORITIES = {p.value for p in Priority}
# 9999-12-31T23:59:59.999Z, the last instant datetime can represent
MAX_EPOCH_MS = 253_402_300_799_999


def export_tasks(tasks: Iterable[Task]) -> str:
    """Serialize tasks as a pretty-printed JSON array."""
    return json.dumps([task.to_record() for task in tasks], indent=2, ensure_ascii=False)


def _as_epoch_ms(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or not 0 < value <= MAX_EPOCH_MS:
        return None
    return value


def _normalize_subtasks(value: Any) -> list[Subtask]:
    if not isinstance(value, list):
        return []
    subtasks = []
    for item in value:
        if not isinstance(item, dict):
            continue
        subtasks.append(
            Subtask(
                id=str(item.get("id") or new_id()),
                title=str(item.get("title") or DEFAULT_TITLE),
                done=bool(item.get("done")),
            )
        )
    return subtasks


def normalize_record(raw: dict[str, Any], now: int | None = None) -> Task:
    """Build a task from an imported record, defaulting missing fields.

    Defaults: fresh id, title "Untitled", empty notes, createdAt now, no due,
    empty tags and subtasks, priority medium, not done.
    """
    priority = raw.get("priority")
    if priority not in _PRIORITIES:
        priority = Priority.MEDIUM.value

    tags = raw.get("tags")
    title = str(raw.get("title") or "").strip() or DEFAULT_TITLE

    return Task(
        id=str(raw.get("id") or new_id()),
        title=title,
        notes=str(raw.get("notes") or ""),
        created_at=_as_epoch_ms(raw.get("createdAt")) or now or now_ms(),
        due=_as_epoch_ms(raw.get("due")),
        tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
        priority=priority,
        done=bool(raw.get("done")),
        subtasks=_normalize_subtasks(raw.get("subtasks")),
    )


def import_tasks(text: str, now: int | None = None) -> list[Task]:
    """Parse an exported JSON array back into tasks.

    Args:
        text: JSON document
        now: Epoch ms used for missing ``createdAt`` values

    Returns:
        Normalized tasks, in payload order

    Raises:
        TaskImportError: Invalid JSON, a top-level value that is not an
            array, or an entry that is not an object
    """
    try:
        payload = json.loads(text)
    except JSONDecodeError as e:
        raise TaskImportError(f"Invalid JSON: {e.msg}") from e

    if not isinstance(payload, list):
        raise TaskImportError("Invalid format: expected a JSON array of tasks")

    now = now or now_ms()
    tasks: list[Task] = []
    for index, raw in enumerate(payload):
        if not isinstance(raw, dict):
            raise TaskImportError(f"Invalid task at position {index}: expected an object")
        try:
            tasks.append(normalize_record(raw, now))
        except ValidationError as e:
            raise TaskImportError(f"Invalid task at position {index}: {e}") from e

    logger.info("imported %d task(s)", len(tasks))
    return tasks
