"""Extraction of ``#tag`` and ``!priority`` markers from raw task input.

The tokenizer records the span of every marker it finds and rebuilds the
cleaned text from the gaps between spans, so a marker is removed exactly
where it was matched and never by a second, text-wide substitution.
"""

from __future__ import annotations

import re

from quickdo_cli.models import ExtractionResult, Priority, TokenSpan

# "#" followed by letters (any script), digits, "_", ":" or "-".
TAG_PATTERN = re.compile(r"#((?:[^\W_]|[_:\-])+)")
PRIORITY_PATTERN = re.compile(r"!(high|med(?:ium)?|low)", re.IGNORECASE)
_WHITESPACE_RUN = re.compile(r"\s{2,}")


def collapse_whitespace(text: str) -> str:
    """Collapse runs of 2+ whitespace characters to one space and trim."""
    return _WHITESPACE_RUN.sub(" ", text).strip()


def _priority_from_marker(word: str) -> Priority:
    word = word.lower()
    if word.startswith("high"):
        return Priority.HIGH
    if word.startswith("low"):
        return Priority.LOW
    return Priority.MEDIUM


class TokenExtractor:
    """Strip structured markers from text and report what was found."""

    def find_spans(self, text: str) -> list[TokenSpan]:
        """Locate all tag and priority markers, ordered by position.

        Overlapping matches are resolved in favour of the one that starts
        first.
        """
        candidates = [
            TokenSpan("tag", m.group(0), m.start(), m.end())
            for m in TAG_PATTERN.finditer(text)
        ]
        candidates.extend(
            TokenSpan("priority", m.group(0), m.start(), m.end())
            for m in PRIORITY_PATTERN.finditer(text)
        )
        candidates.sort(key=lambda span: (span.start, -span.end))

        spans: list[TokenSpan] = []
        cursor = 0
        for span in candidates:
            if span.start < cursor:
                continue
            spans.append(span)
            cursor = span.end
        return spans

    def extract(self, text: str) -> ExtractionResult:
        """Split *text* into cleaned text, tags and an optional priority.

        Args:
            text: Raw user input

        Returns:
            ExtractionResult whose ``explicit_priority`` comes from the first
            priority marker only; later markers are stripped but ignored.
        """
        first_spans = spans = self.find_spans(text)

        tags: set[str] = set()
        explicit: Priority | None = None
        cleaned = text
        # Removing a marker can glue its neighbours into a new one
        # ("#!highfoo" -> "#foo"), so strip until nothing is left.
        while spans:
            pieces: list[str] = []
            cursor = 0
            for span in spans:
                pieces.append(cleaned[cursor : span.start])
                cursor = span.end
                if span.kind == "tag":
                    tags.add(span.text[1:].lower())
                elif explicit is None:
                    explicit = _priority_from_marker(span.text[1:])
            pieces.append(cleaned[cursor:])
            cleaned = collapse_whitespace("".join(pieces))
            spans = self.find_spans(cleaned)

        return ExtractionResult(
            cleaned_text=collapse_whitespace(cleaned),
            tags=frozenset(tags),
            explicit_priority=explicit,
            spans=tuple(first_spans),
        )


_default_extractor = TokenExtractor()


def extract_tokens(text: str) -> ExtractionResult:
    """Convenience wrapper around a shared :class:`TokenExtractor`.

    Example:
        >>> extract_tokens("Email Alex #work !high").tags
        frozenset({'work'})
    """
    return _default_extractor.extract(text)
