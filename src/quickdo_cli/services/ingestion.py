"""Ingestion pipeline - turn a line of free text into a draft task.

Stages run strictly in order: marker extraction, date resolution on the
marker-free text, excision of the first date match to form the title,
then priority (explicit marker, otherwise inferred).
"""

from __future__ import annotations

from datetime import datetime

from quickdo_cli.models import DraftTask, Task, project_from_tags
from quickdo_cli.parsing import (
    DateResolver,
    TokenExtractor,
    collapse_whitespace,
    get_date_resolver,
    infer_priority,
)
from quickdo_cli.utils.logger import get_logger
from quickdo_cli.utils.timeutils import to_epoch_ms

logger = get_logger("ingestion")


class TaskIngestionPipeline:
    """Pure text -> :class:`DraftTask` transformation.

    The pipeline never raises on user input; a failing resolver is treated
    as "no date found" and an empty title falls back to the cleaned text,
    then to the raw input.
    """

    def __init__(
        self,
        resolver: DateResolver | None = None,
        extractor: TokenExtractor | None = None,
    ):
        self.resolver = resolver or get_date_resolver()
        self.extractor = extractor or TokenExtractor()

    def _first_date(self, text: str, reference: datetime):
        try:
            matches = self.resolver.resolve(text, reference, forward_bias=True)
        except Exception as e:
            logger.warning("date resolution failed for %r: %s", text, e)
            return None
        return matches[0] if matches else None

    def ingest(self, raw_input: str, reference: datetime | None = None) -> DraftTask:
        """Parse *raw_input* relative to *reference* (defaults to now)."""
        raw = raw_input.strip()
        reference = reference or datetime.now()

        extraction = self.extractor.extract(raw)
        cleaned = extraction.cleaned_text

        due: datetime | None = None
        title = cleaned
        match = self._first_date(cleaned, reference)
        if match is not None:
            due = match.resolved
            title = collapse_whitespace(cleaned[: match.start] + " " + cleaned[match.end :])

        if extraction.explicit_priority is not None:
            priority = extraction.explicit_priority
        else:
            priority = infer_priority(cleaned, due, reference)

        tags = sorted(extraction.tags)
        draft = DraftTask(
            title=title or cleaned or raw,
            due=due,
            tags=tags,
            priority=priority,
            project=project_from_tags(tags),
        )
        logger.debug(
            "ingested %r -> title=%r due=%s tags=%s priority=%s",
            raw,
            draft.title,
            draft.due,
            draft.tags,
            draft.priority.value,
        )
        return draft


def new_task_from_draft(
    draft: DraftTask, notes: str | None = None, now: datetime | None = None
) -> Task:
    """Attach identity and audit fields to a draft."""
    now = now or datetime.now()
    return Task(
        title=draft.title,
        notes=(notes or "").strip(),
        created_at=to_epoch_ms(now),
        due=to_epoch_ms(draft.due) if draft.due is not None else None,
        tags=list(draft.tags),
        priority=draft.priority,
        done=False,
        subtasks=[],
    )
