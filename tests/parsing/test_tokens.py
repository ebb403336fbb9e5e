"""Tests for tag and priority marker extraction."""

import pytest

from quickdo_cli.models import Priority
from quickdo_cli.parsing import TokenExtractor, collapse_whitespace, extract_tokens


@pytest.fixture
def extractor():
    return TokenExtractor()


class TestTags:
    def test_tags_are_lowercased_and_removed(self, extractor):
        result = extractor.extract("Email Alex #Work #urgent-ish")
        assert result.tags == frozenset({"work", "urgent-ish"})
        assert result.cleaned_text == "Email Alex"

    def test_project_tag_keeps_colon(self, extractor):
        result = extractor.extract("Plan launch #proj:Website")
        assert result.tags == frozenset({"proj:website"})
        assert result.cleaned_text == "Plan launch"

    def test_unicode_letters_in_tag(self, extractor):
        result = extractor.extract("Kaffee kaufen #einkäufe")
        assert "einkäufe" in result.tags

    def test_duplicate_tags_collapse(self, extractor):
        result = extractor.extract("a #x b #X")
        assert result.tags == frozenset({"x"})
        assert result.cleaned_text == "a b"

    def test_lone_hash_is_kept(self, extractor):
        result = extractor.extract("Issue # 42")
        assert result.tags == frozenset()
        assert result.cleaned_text == "Issue # 42"


class TestPriority:
    @pytest.mark.parametrize(
        "marker, expected",
        [
            ("!high", Priority.HIGH),
            ("!HIGH", Priority.HIGH),
            ("!med", Priority.MEDIUM),
            ("!medium", Priority.MEDIUM),
            ("!low", Priority.LOW),
        ],
    )
    def test_marker_sets_priority(self, extractor, marker, expected):
        result = extractor.extract(f"Do thing {marker}")
        assert result.explicit_priority is expected
        assert result.cleaned_text == "Do thing"

    def test_first_marker_wins_and_all_are_stripped(self, extractor):
        result = extractor.extract("Ship it !low now !high")
        assert result.explicit_priority is Priority.LOW
        assert result.cleaned_text == "Ship it now"

    def test_no_marker(self, extractor):
        assert extractor.extract("Just text").explicit_priority is None

    def test_unknown_marker_is_text(self, extractor):
        result = extractor.extract("Wow !urgent")
        assert result.explicit_priority is None
        assert result.cleaned_text == "Wow !urgent"


class TestCleaning:
    def test_whitespace_is_collapsed(self, extractor):
        result = extractor.extract("  Email   Alex #work   tomorrow  ")
        assert result.cleaned_text == "Email Alex tomorrow"

    def test_only_markers_leaves_empty_text(self, extractor):
        result = extractor.extract("#a !high")
        assert result.cleaned_text == ""
        assert result.tags == frozenset({"a"})

    @pytest.mark.parametrize(
        "text",
        [
            "Email Alex tomorrow 3pm #work !high",
            "#!highfoo bar",
            "a#b c !low!med",
            "   ",
        ],
    )
    def test_extract_is_idempotent(self, extractor, text):
        once = extractor.extract(text).cleaned_text
        assert extractor.extract(once).cleaned_text == once

    def test_marker_glued_by_removal_is_also_stripped(self, extractor):
        result = extractor.extract("#!highfoo bar")
        assert result.explicit_priority is Priority.HIGH
        assert "foo" in result.tags
        assert result.cleaned_text == "bar"


class TestSpans:
    def test_spans_are_ordered_and_disjoint(self, extractor):
        spans = extractor.find_spans("x #a !low y #b")
        assert [s.kind for s in spans] == ["tag", "priority", "tag"]
        for left, right in zip(spans, spans[1:]):
            assert left.end <= right.start

    def test_span_offsets_point_at_marker(self, extractor):
        text = "call #mom !high"
        for span in extractor.find_spans(text):
            assert text[span.start : span.end] == span.text


def test_collapse_whitespace():
    assert collapse_whitespace("  a \t  b\n\nc ") == "a b c"


def test_extract_tokens_wrapper():
    assert extract_tokens("Email Alex #work").tags == frozenset({"work"})
