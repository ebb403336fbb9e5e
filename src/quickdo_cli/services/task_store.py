"""Task store - the single owner of the task collection.

The collection is an immutable tuple. Every operation builds a new tuple,
persists it through the :class:`TaskStorage` port and only then swaps it
in, bumping ``version``. Readers therefore always see a complete prior or
next collection, never a half-applied edit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

from quickdo_cli.models import BucketKey, Subtask, Task, TaskFilters
from quickdo_cli.models.exceptions import (
    EmptyTaskInputError,
    StorageError,
    TaskNotFoundError,
)
from quickdo_cli.repositories import TaskStorage
from quickdo_cli.services import organizer
from quickdo_cli.services.ingestion import TaskIngestionPipeline, new_task_from_draft
from quickdo_cli.services.transfer import export_tasks, import_tasks, normalize_record
from quickdo_cli.utils.logger import get_logger
from quickdo_cli.utils.timeutils import to_epoch_ms

logger = get_logger("store")


class TaskStore:
    """Load-on-init, save-on-every-mutation task collection."""

    def __init__(
        self,
        storage: TaskStorage,
        pipeline: TaskIngestionPipeline | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the store and load the persisted collection.

        Args:
            storage: Persistence port
            pipeline: Ingestion pipeline used by :meth:`ingest`
            clock: Source of "now" for ingestion, moves and import defaults
        """
        self.storage = storage
        self.pipeline = pipeline or TaskIngestionPipeline()
        self.clock = clock
        self.version = 0
        self._tasks: tuple[Task, ...] = self._load()

    def _load(self) -> tuple[Task, ...]:
        try:
            records = self.storage.load()
        except StorageError as e:
            logger.error("could not load tasks, starting empty: %s", e)
            return ()

        now = to_epoch_ms(self.clock())
        tasks = []
        for index, raw in enumerate(records):
            if not isinstance(raw, dict):
                logger.warning("skipping stored task %d: not an object", index)
                continue
            tasks.append(normalize_record(raw, now))
        logger.debug("loaded %d task(s)", len(tasks))
        return tuple(tasks)

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    def _commit(self, tasks: Iterable[Task], action: str) -> None:
        new_tasks = tuple(tasks)
        self.storage.save([task.to_record() for task in new_tasks])
        self._tasks = new_tasks
        self.version += 1
        logger.info("%s (version %d, %d task(s))", action, self.version, len(new_tasks))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, task_id: str) -> Task:
        """Find a task by full id or by a unique id prefix.

        Raises:
            TaskNotFoundError: No match, or the prefix is ambiguous
        """
        needle = task_id.strip().lower()
        if not needle:
            raise TaskNotFoundError("Task ID is required")

        for task in self._tasks:
            if task.id.lower() == needle:
                return task

        matches = [task for task in self._tasks if task.id.lower().startswith(needle)]
        if not matches:
            raise TaskNotFoundError(f"Task not found: {task_id}")
        if len(matches) > 1:
            shown = ", ".join(task.id[:8] for task in matches[:5])
            if len(matches) > 5:
                shown += f", ... ({len(matches)} total)"
            raise TaskNotFoundError(
                f"Ambiguous ID '{task_id}' matches {len(matches)} tasks: {shown}"
            )
        return matches[0]

    def _update(self, task_id: str, change: Callable[[Task], Task], action: str) -> Task:
        target = self.get(task_id)
        updated = change(target)
        self._commit(
            (updated if task.id == target.id else task for task in self._tasks),
            f"{action} {target.id}",
        )
        return updated

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def ingest(self, raw_input: str, notes: str | None = None) -> Task:
        """Parse *raw_input* into a new task and put it at the top."""
        if not raw_input or not raw_input.strip():
            raise EmptyTaskInputError("Task text is required")
        now = self.clock()
        draft = self.pipeline.ingest(raw_input, now)
        task = new_task_from_draft(draft, notes=notes, now=now)
        self._commit((task, *self._tasks), f"added {task.id}")
        return task

    def toggle(self, task_id: str) -> Task:
        return self._update(task_id, organizer.toggle_done, "toggled")

    def edit(self, task: Task) -> Task:
        """Replace the stored record that has ``task.id`` with *task*."""
        return self._update(task.id, lambda _old: task, "edited")

    def bump(self, task_id: str, direction: int) -> Task:
        return self._update(
            task_id, lambda t: organizer.bump_priority(t, direction), "bumped"
        )

    def move(self, task_id: str, bucket: BucketKey | str) -> Task:
        now = self.clock()
        return self._update(
            task_id, lambda t: organizer.move_to_bucket(t, bucket, now), "moved"
        )

    def toggle_subtask(self, task_id: str, subtask_id: str) -> Task:
        """Flip one subtask, found by full id or unique id prefix."""
        target = self.get(task_id)
        needle = subtask_id.strip().lower()
        matches = [sub for sub in target.subtasks if sub.id.lower() == needle]
        if not matches and needle:
            matches = [sub for sub in target.subtasks if sub.id.lower().startswith(needle)]
        if len(matches) != 1:
            raise TaskNotFoundError(f"Subtask not found: {subtask_id}")
        sub_id = matches[0].id
        return self._update(
            target.id, lambda t: organizer.toggle_subtask(t, sub_id), "toggled subtask of"
        )

    def add_subtasks(self, task_id: str, titles: Iterable[str]) -> Task:
        new = [Subtask(title=title.strip()) for title in titles if title.strip()]
        return self._update(
            task_id, lambda t: t.replace(subtasks=[*t.subtasks, *new]), "added subtasks to"
        )

    def delete(self, task_id: str) -> Task:
        target = self.get(task_id)
        self._commit(
            (task for task in self._tasks if task.id != target.id),
            f"deleted {target.id}",
        )
        return target

    def import_json(self, text: str) -> tuple[Task, ...]:
        """Replace the collection with an imported one.

        Raises:
            TaskImportError: The payload is malformed; nothing changes
        """
        tasks = import_tasks(text, now=to_epoch_ms(self.clock()))
        self._commit(tasks, "imported")
        return self._tasks

    def export_json(self) -> str:
        return export_tasks(self._tasks)

    def reset(self) -> None:
        """Drop every task and the persisted file."""
        self.storage.clear()
        self._tasks = ()
        self.version += 1
        logger.info("reset (version %d)", self.version)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def listing(self, filters: TaskFilters | None = None) -> list[Task]:
        """Filtered tasks in list-view order."""
        return organizer.sort_tasks(organizer.filter_tasks(self._tasks, filters))

    def board(self, filters: TaskFilters | None = None) -> dict[BucketKey, list[Task]]:
        """Filtered tasks grouped into board columns."""
        return organizer.bucket_tasks(
            organizer.filter_tasks(self._tasks, filters), self.clock()
        )

    def focus(self, limit: int = organizer.FOCUS_LIMIT) -> list[Task]:
        """Top open tasks by priority, then due date, over the whole collection."""
        return organizer.focus_tasks(self._tasks, limit)
