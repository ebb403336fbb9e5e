"""Tests for the local and remote text-generation assistants."""

import json
from datetime import datetime

import httpx
import pytest

from quickdo_cli.models import AssistantConfig, Task
from quickdo_cli.services.assistant import (
    AI_FAILURE_MESSAGE,
    LOCAL_BREAKDOWN,
    LOCAL_DEFAULT,
    LOCAL_SUMMARY,
    NO_RESPONSE_MESSAGE,
    LocalAssistant,
    RemoteAssistant,
    build_breakdown_prompt,
    build_summary_prompt,
    get_assistant,
    parse_subtask_suggestions,
)
from quickdo_cli.utils.timeutils import to_epoch_ms

NOW = datetime(2024, 6, 5, 10, 0, 0)


def _config(**kwargs) -> AssistantConfig:
    kwargs.setdefault("api_key", "sk-test")
    kwargs.setdefault("endpoint", "https://llm.example.com/v1/")
    return AssistantConfig(**kwargs)


def _chat_reply(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class TestPrompts:
    def test_summary_lists_open_tasks_due_today(self):
        tasks = [
            Task(title="Standup", created_at=0, due=to_epoch_ms(datetime(2024, 6, 5, 9, 30))),
            Task(title="Tomorrow", created_at=0, due=to_epoch_ms(datetime(2024, 6, 6, 9, 0))),
            Task(title="Done", created_at=0, done=True, due=to_epoch_ms(NOW)),
        ]
        prompt = build_summary_prompt(tasks, NOW)
        assert "• Standup (due 09:30)" in prompt
        assert "Tomorrow" not in prompt
        assert "Done" not in prompt

    def test_summary_without_tasks(self):
        assert "(none listed)" in build_summary_prompt([], NOW)

    def test_breakdown_mentions_title_and_due(self):
        task = Task(title="Launch page", created_at=0)
        prompt = build_breakdown_prompt(task)
        assert '"Launch page"' in prompt
        assert "due date: none" in prompt

    def test_breakdown_due_is_utc_iso(self):
        # 2024-06-06T13:00:00Z
        task = Task(title="Launch page", created_at=0, due=1_717_678_800_000)
        prompt = build_breakdown_prompt(task)
        assert "due date: 2024-06-06T13:00:00.000Z" in prompt


# ---------------------------------------------------------------------------
# Local assistant
# ---------------------------------------------------------------------------


class TestLocalAssistant:
    @pytest.mark.asyncio
    async def test_summary(self):
        assert await LocalAssistant().summarize_day([], NOW) == LOCAL_SUMMARY

    @pytest.mark.asyncio
    async def test_breakdown(self):
        task = Task(title="Launch page", created_at=0)
        assert await LocalAssistant().break_down(task) == LOCAL_BREAKDOWN

    @pytest.mark.asyncio
    async def test_other_prompts(self):
        assert await LocalAssistant().complete("hello") == LOCAL_DEFAULT


# ---------------------------------------------------------------------------
# Remote assistant
# ---------------------------------------------------------------------------


class TestRemoteAssistant:
    @pytest.mark.asyncio
    async def test_posts_chat_completion(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=_chat_reply("  1) Plan\n2) Do  "))

        assistant = RemoteAssistant(_config(model="m-1"), transport=httpx.MockTransport(handler))
        reply = await assistant.complete("Break down this")

        assert reply == "1) Plan\n2) Do"
        assert captured["url"] == "https://llm.example.com/v1/chat/completions"
        assert captured["auth"] == "Bearer sk-test"
        assert captured["body"]["model"] == "m-1"
        assert [m["role"] for m in captured["body"]["messages"]] == ["system", "user"]
        assert captured["body"]["messages"][1]["content"] == "Break down this"

    @pytest.mark.asyncio
    async def test_http_error_returns_failure_message(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="oops"))
        assistant = RemoteAssistant(_config(), transport=transport)
        assert await assistant.complete("x") == AI_FAILURE_MESSAGE

    @pytest.mark.asyncio
    async def test_network_error_returns_failure_message(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        assistant = RemoteAssistant(_config(), transport=httpx.MockTransport(handler))
        assert await assistant.complete("x") == AI_FAILURE_MESSAGE

    @pytest.mark.asyncio
    async def test_non_json_body_returns_failure_message(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
        assistant = RemoteAssistant(_config(), transport=transport)
        assert await assistant.complete("x") == AI_FAILURE_MESSAGE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"choices": []}, _chat_reply(""), _chat_reply(None)])
    async def test_missing_content(self, body):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=body))
        assistant = RemoteAssistant(_config(), transport=transport)
        assert await assistant.complete("x") == NO_RESPONSE_MESSAGE


def test_get_assistant_selects_backend():
    assert isinstance(get_assistant(None), LocalAssistant)
    assert isinstance(get_assistant(_config(api_key=None)), LocalAssistant)
    assert isinstance(get_assistant(_config(api_key="   ")), LocalAssistant)
    assert isinstance(get_assistant(_config()), RemoteAssistant)


# ---------------------------------------------------------------------------
# Subtask suggestions
# ---------------------------------------------------------------------------


class TestParseSuggestions:
    def test_local_breakdown(self):
        assert parse_subtask_suggestions(LOCAL_BREAKDOWN) == [
            "Clarify scope",
            "List resources",
            "Set milestones",
            "Schedule work blocks",
            "Review & adjust.",
        ]

    def test_line_list(self):
        text = "Here you go:\n- Write outline\n* Draft copy\n3. Proofread\n"
        assert parse_subtask_suggestions(text) == [
            "Write outline",
            "Draft copy",
            "Proofread",
        ]

    def test_caps_at_six(self):
        text = "\n".join(f"{i}. step {i}" for i in range(1, 10))
        assert len(parse_subtask_suggestions(text)) == 6

    def test_empty(self):
        assert parse_subtask_suggestions("   ") == []
