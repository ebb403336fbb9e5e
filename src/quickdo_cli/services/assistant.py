"""Optional text-generation assistant.

Two prompt shapes are supported: a plan for today's open tasks and a
subtask breakdown for one task. Which backend answers is decided once by
configuration (:func:`get_assistant`): without an API key the local,
deterministic assistant replies; with one, an OpenAI-compatible chat
completions endpoint is called. Neither backend raises - failures come
back as a fixed message.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime

import httpx

from quickdo_cli.models import AssistantConfig, Task
from quickdo_cli.services.organizer import tasks_due_on
from quickdo_cli.utils.logger import get_logger
from quickdo_cli.utils.timeutils import from_epoch_ms, to_utc_iso

logger = get_logger("assistant")

SYSTEM_PROMPT = "You are a concise productivity assistant."
AI_FAILURE_MESSAGE = "AI call failed. Using local heuristic instead."
NO_RESPONSE_MESSAGE = "No response from the model."

LOCAL_SUMMARY = (
    "Here's a quick plan: focus on high-priority items due today, then tackle "
    "medium ones due this week. Leave low-priority tasks for later."
)
LOCAL_BREAKDOWN = (
    "Subtasks: 1) Clarify scope, 2) List resources, 3) Set milestones, "
    "4) Schedule work blocks, 5) Review & adjust."
)
LOCAL_DEFAULT = (
    "(Local assistant) Prioritize urgent, time-bound tasks first, then group "
    "related work for flow. Add deadlines when possible."
)

MAX_SUBTASKS = 6


def build_summary_prompt(tasks: Sequence[Task], now: datetime) -> str:
    """Prompt listing today's open tasks with their due times."""
    lines = []
    for task in tasks_due_on(tasks, now.date()):
        due = from_epoch_ms(task.due).strftime("%H:%M") if task.due else ""
        lines.append(f"• {task.title}" + (f" (due {due})" if due else ""))
    listing = "\n".join(lines) or "(none listed)"
    return (
        "Summarize my day and propose a focused 3-step plan. "
        f"Today's tasks (not done):\n{listing}"
    )


def build_breakdown_prompt(task: Task) -> str:
    due = to_utc_iso(task.due) if task.due else "none"
    return (
        f'Break down this task into 3-6 clear subtasks with verbs: "{task.title}". '
        f"Consider due date: {due}. Return a simple list."
    )


class Assistant(ABC):
    """Capability interface for the text-generation collaborator."""

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """Return generated text for *prompt*. Must not raise."""
        raise NotImplementedError("Assistant.complete() must be implemented")

    async def summarize_day(self, tasks: Sequence[Task], now: datetime) -> str:
        return await self.complete(build_summary_prompt(tasks, now))

    async def break_down(self, task: Task) -> str:
        return await self.complete(build_breakdown_prompt(task))


class LocalAssistant(Assistant):
    """Deterministic replies used when no API key is configured."""

    async def complete(self, prompt: str) -> str:
        if re.search(r"summarize", prompt, re.IGNORECASE):
            return LOCAL_SUMMARY
        if re.search(r"break down", prompt, re.IGNORECASE):
            return LOCAL_BREAKDOWN
        return LOCAL_DEFAULT


class RemoteAssistant(Assistant):
    """OpenAI-compatible chat completions client."""

    def __init__(
        self,
        config: AssistantConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
        }

    async def complete(self, prompt: str) -> str:
        url = f"{self.config.endpoint}/chat/completions"
        payload = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.config.temperature,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout, transport=self.transport
            ) as client:
                response = await client.post(url, headers=self._headers(), json=payload)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("assistant call to %s failed: %s", url, e)
            return AI_FAILURE_MESSAGE

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not isinstance(content, str) or not content.strip():
            logger.info("assistant returned no content")
            return NO_RESPONSE_MESSAGE
        return content.strip()


def get_assistant(config: AssistantConfig | None = None) -> Assistant:
    """Pick the remote assistant when an API key is configured."""
    if config is not None and config.enabled:
        return RemoteAssistant(config)
    return LocalAssistant()


_LABEL = re.compile(r"^\s*subtasks?\s*:\s*", re.IGNORECASE)
_LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")
_INLINE_NUMBER = re.compile(r"(?:^|[\s,;])\d+[.)]\s+")


def parse_subtask_suggestions(text: str) -> list[str]:
    """Turn an assistant reply into subtask titles.

    Understands one-item-per-line lists (numbered or bulleted) and inline
    ``1) a, 2) b`` lists. At most six titles are returned.
    """
    body = _LABEL.sub("", text.strip())
    lines = [line for line in body.splitlines() if line.strip()]

    if len(lines) > 1:
        # Lead-in lines such as "Here you go:" are not steps
        items = [_LIST_MARKER.sub("", line) for line in lines if not line.rstrip().endswith(":")]
    else:
        items = _INLINE_NUMBER.split(body)

    titles = []
    for item in items:
        title = item.strip().strip(",;").strip()
        if title:
            titles.append(title)
    return titles[:MAX_SUBTASKS]
