"""Tests for priority inference."""

from datetime import datetime, timedelta

import pytest

from quickdo_cli.models import Priority
from quickdo_cli.parsing import infer_priority

NOW = datetime(2024, 6, 5, 10, 0, 0)


@pytest.mark.parametrize("word", ["urgent", "ASAP", "critical", "today"])
def test_urgency_words_are_high(word):
    assert infer_priority(f"fix the build {word}", None, NOW) is Priority.HIGH


def test_urgency_words_need_word_boundaries():
    assert infer_priority("todays agenda", None, NOW) is Priority.MEDIUM


@pytest.mark.parametrize(
    "offset, expected",
    [
        (timedelta(hours=2), Priority.HIGH),
        (timedelta(hours=24), Priority.HIGH),
        (timedelta(hours=-5), Priority.HIGH),
        (timedelta(hours=25), Priority.MEDIUM),
        (timedelta(hours=72), Priority.MEDIUM),
    ],
)
def test_due_proximity(offset, expected):
    assert infer_priority("water plants", NOW + offset, NOW) is expected


def test_far_due_date_falls_through_to_words():
    assert infer_priority("plan the offsite", NOW + timedelta(days=10), NOW) is Priority.LOW


@pytest.mark.parametrize("word", ["review", "Plan", "someday"])
def test_planning_words_are_low(word):
    assert infer_priority(f"{word} the roadmap", None, NOW) is Priority.LOW


def test_urgency_beats_planning():
    assert infer_priority("urgent review", None, NOW) is Priority.HIGH


def test_near_due_beats_planning():
    assert infer_priority("review PR", NOW + timedelta(hours=3), NOW) is Priority.HIGH


def test_default_is_medium():
    assert infer_priority("buy milk", None, NOW) is Priority.MEDIUM


def test_planning_words_need_word_boundaries():
    assert infer_priority("planet earth documentary", None, NOW) is Priority.MEDIUM
