"""Natural-language date/time resolution.

Resolvers locate date expressions in (marker-free) text and turn them into
absolute local datetimes relative to a reference instant. The ingestion
pipeline only talks to the :class:`DateResolver` interface, so the rule set,
the ``dateparser`` backend, or a synthetic fixture can be swapped freely.

Forward bias means an ambiguous expression (a bare weekday, a bare time that
has already passed today) resolves to its next future occurrence.
"""

from __future__ import annotations

import calendar
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime, timedelta

import dateparser

from quickdo_cli.models import DateMatch, ParsingConfig
from quickdo_cli.utils.logger import get_logger

logger = get_logger("parsing.dates")

# Time of day applied when an expression names a day but no time.
DEFAULT_HOUR = 12
TONIGHT_HOUR = 20

_WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

_DATE_PATTERN = re.compile(
    r"\b(?:"
    r"(?P<relative>today|tonight|tomorrow|next\s+week)"
    r"|in\s+(?P<count>\d{1,3})\s+(?P<unit>days?|weeks?)"
    r"|(?:(?P<modifier>next|this)\s+)?(?P<weekday>" + "|".join(_WEEKDAYS) + r")"
    r")\b",
    re.IGNORECASE,
)

_TIME_PATTERN = re.compile(
    r"(?:\bat\s+)?\b(?P<hour>\d{1,2})(?::(?P<minute>[0-5]\d))?\s*(?P<meridiem>am|pm)\b"
    r"|\bat\s+(?P<at_hour>\d{1,2})(?::(?P<at_minute>[0-5]\d))?\b"
    r"|\b(?P<clock_hour>\d{1,2}):(?P<clock_minute>[0-5]\d)\b",
    re.IGNORECASE,
)


class DateResolver(ABC):
    """Capability interface for date-expression resolution."""

    @abstractmethod
    def resolve(
        self, text: str, reference: datetime, forward_bias: bool = True
    ) -> list[DateMatch]:
        """Find date expressions in *text*.

        Args:
            text: Text to scan (markers already stripped)
            reference: Instant relative expressions are anchored to
            forward_bias: Resolve ambiguous expressions into the future

        Returns:
            Matches ordered by start offset, possibly empty
        """
        raise NotImplementedError("DateResolver.resolve() must be implemented")


def _parse_time(match: re.Match[str]) -> tuple[int, int] | None:
    """Return ``(hour, minute)`` for a time match, or None if out of range."""
    if match.group("hour") is not None:
        hour = int(match.group("hour"))
        minute = int(match.group("minute") or 0)
        if not 1 <= hour <= 12:
            return None
        meridiem = match.group("meridiem").lower()
        if meridiem == "pm" and hour < 12:
            hour += 12
        elif meridiem == "am" and hour == 12:
            hour = 0
        return hour, minute

    hour_text = match.group("at_hour") or match.group("clock_hour")
    minute_text = match.group("at_minute") or match.group("clock_minute")
    hour = int(hour_text)
    minute = int(minute_text or 0)
    if hour > 23:
        return None
    return hour, minute


class RuleBasedDateResolver(DateResolver):
    """Deterministic English rules for the phrasings people type most.

    Handles ``today``, ``tonight``, ``tomorrow``, ``next week``,
    ``in N days/weeks``, weekday names (optionally ``next``/``this``) and
    clock times (``3pm``, ``3:30 pm``, ``at 15:00``, ``at 9``). A day
    expression next to a time expression forms a single match.
    """

    def _resolve_day(
        self, match: re.Match[str], reference: datetime, forward_bias: bool
    ) -> tuple[datetime, int]:
        """Return the target date (at reference time) and its default hour."""
        relative = (match.group("relative") or "").lower()
        if relative:
            if relative == "today":
                return reference, DEFAULT_HOUR
            if relative == "tonight":
                return reference, TONIGHT_HOUR
            if relative == "tomorrow":
                return reference + timedelta(days=1), DEFAULT_HOUR
            return reference + timedelta(days=7), DEFAULT_HOUR  # next week

        if match.group("count"):
            count = int(match.group("count"))
            unit = match.group("unit").lower()
            days = count * 7 if unit.startswith("week") else count
            return reference + timedelta(days=days), DEFAULT_HOUR

        target = _WEEKDAYS[match.group("weekday").lower()]
        modifier = (match.group("modifier") or "").lower()
        days_ahead = (target - reference.weekday()) % 7
        if modifier == "this":
            pass
        elif forward_bias or modifier == "next":
            if days_ahead == 0:
                days_ahead = 7  # same weekday means next week
        else:
            days_ahead = target - reference.weekday()
        return reference + timedelta(days=days_ahead), DEFAULT_HOUR

    @staticmethod
    def _adjacent(text: str, left_end: int, right_start: int) -> bool:
        return left_end <= right_start and not text[left_end:right_start].strip()

    def resolve(
        self, text: str, reference: datetime, forward_bias: bool = True
    ) -> list[DateMatch]:
        day_matches = list(_DATE_PATTERN.finditer(text))
        time_matches: list[tuple[re.Match[str], tuple[int, int]]] = []
        for m in _TIME_PATTERN.finditer(text):
            parsed = _parse_time(m)
            if parsed is not None:
                time_matches.append((m, parsed))
        consumed: set[int] = set()
        results: list[DateMatch] = []

        for day in day_matches:
            start, end = day.start(), day.end()
            clock: tuple[int, int] | None = None
            for index, (tm, parsed) in enumerate(time_matches):
                if index in consumed:
                    continue
                if self._adjacent(text, end, tm.start()):
                    end, clock = tm.end(), parsed
                elif self._adjacent(text, tm.end(), start):
                    start, clock = tm.start(), parsed
                else:
                    continue
                consumed.add(index)
                break

            target, default_hour = self._resolve_day(day, reference, forward_bias)
            hour, minute = clock if clock is not None else (default_hour, 0)
            resolved = target.replace(hour=hour, minute=minute, second=0, microsecond=0)
            results.append(DateMatch(text[start:end], start, end, resolved))

        for index, (tm, (hour, minute)) in enumerate(time_matches):
            if index in consumed:
                continue
            resolved = reference.replace(hour=hour, minute=minute, second=0, microsecond=0)
            if forward_bias and resolved <= reference:
                resolved += timedelta(days=1)
            results.append(DateMatch(tm.group(0), tm.start(), tm.end(), resolved))

        results.sort(key=lambda m: m.start)
        return results


_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)
_DAY_OF_MONTH = r"\d{1,2}(?:st|nd|rd|th)?"
_YEAR = r"(?P<month_day_year>,?\s+\d{4})?"

# Date-like fragments handed to dateparser. Anything else in the sentence
# never reaches it, so ordinary words cannot turn into dates.
_FRAGMENT_PATTERN = re.compile(
    r"\b(?:on\s+)?(?:"
    r"(?P<month_day>" + _MONTH + r"\.?\s+" + _DAY_OF_MONTH + _YEAR + r")"
    r"|(?P<day_month>(?:the\s+)?" + _DAY_OF_MONTH + r"\s+(?:of\s+)?" + _MONTH
    + r"(?P<day_month_year>\s+\d{4})?)"
    r"|(?P<iso>\d{4}-\d{1,2}-\d{1,2})"
    r"|(?P<numeric>\d{1,2}/\d{1,2}(?P<numeric_year>/\d{2,4})?)"
    r"|(?P<ordinal>(?:on|by|before|until)\s+the\s+\d{1,2}(?:st|nd|rd|th))"
    r"|(?P<relative>in\s+\d{1,3}\s+(?:months?|years?|hours?|minutes?|mins?)|next\s+(?:month|year))"
    r")"
    r"(?P<clock>\s+(?:at\s+)?\d{1,2}(?::[0-5]\d)?\s*(?:am|pm)|\s+at\s+\d{1,2}(?::[0-5]\d)?)?"
    r"\b",
    re.IGNORECASE,
)

_FILLER_WORDS = re.compile(r"\b(?:on|by|before|until|the|of|at)\b", re.IGNORECASE)


def _next_month(value: datetime) -> datetime:
    year, month = (value.year + 1, 1) if value.month == 12 else (value.year, value.month + 1)
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def _next_year(value: datetime) -> datetime:
    try:
        return value.replace(year=value.year + 1)
    except ValueError:
        return value.replace(year=value.year + 1, day=28)  # Feb 29


class DateparserResolver(DateResolver):
    """Broader-coverage resolver backed by ``dateparser.parse``.

    Only date-like fragments (``June 20``, ``3rd of May``, ``6/21``,
    ``2024-07-01``, ``on the 1st``, ``in 2 months``) are cut out and parsed,
    never the whole sentence.
    """

    def __init__(self, languages: Sequence[str] | None = None):
        self.languages = list(languages or ["en"])

    def _parse(self, fragment: str, reference: datetime, forward_bias: bool) -> datetime | None:
        settings = {
            "PREFER_DATES_FROM": "future" if forward_bias else "current_period",
            "RELATIVE_BASE": reference,
            "RETURN_AS_TIMEZONE_AWARE": False,
        }
        cleaned = " ".join(_FILLER_WORDS.sub(" ", fragment).split())
        try:
            value = dateparser.parse(cleaned, languages=self.languages, settings=settings)
        except Exception as e:
            logger.warning("dateparser failed on %r: %s", fragment, e)
            return None
        if value is not None and value.tzinfo is not None:
            value = value.astimezone().replace(tzinfo=None)
        return value

    def resolve(
        self, text: str, reference: datetime, forward_bias: bool = True
    ) -> list[DateMatch]:
        results: list[DateMatch] = []
        for match in _FRAGMENT_PATTERN.finditer(text):
            value = self._parse(match.group(0), reference, forward_bias)
            if value is None:
                continue

            if match.group("clock") is None and not match.group("relative"):
                value = value.replace(hour=DEFAULT_HOUR, minute=0, second=0, microsecond=0)

            if forward_bias and value.date() < reference.date():
                if match.group("ordinal"):
                    value = _next_month(value)
                elif any(
                    match.group(kind) and not match.group(f"{kind}_year")
                    for kind in ("month_day", "day_month", "numeric")
                ):
                    value = _next_year(value)

            results.append(DateMatch(match.group(0), match.start(), match.end(), value))
        return results


class ChainedDateResolver(DateResolver):
    """Ask each resolver in turn; the first non-empty answer wins."""

    def __init__(self, resolvers: Sequence[DateResolver]):
        self.resolvers = list(resolvers)

    def resolve(
        self, text: str, reference: datetime, forward_bias: bool = True
    ) -> list[DateMatch]:
        for resolver in self.resolvers:
            matches = resolver.resolve(text, reference, forward_bias)
            if matches:
                return matches
        return []


def get_date_resolver(config: ParsingConfig | None = None) -> DateResolver:
    """Build the resolver chain described by *config*."""
    config = config or ParsingConfig()
    resolvers: list[DateResolver] = [RuleBasedDateResolver()]
    if config.use_dateparser:
        resolvers.append(DateparserResolver(config.languages))
    return ChainedDateResolver(resolvers)
