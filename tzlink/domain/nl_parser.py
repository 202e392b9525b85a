"""
Natural-language time parsing.

Turns phrases such as "tomorrow 2 PM", "next friday 10:30am" or "3 pm" into
an absolute instant relative to a reference time supplied by the caller.
Input that matches no phrase is an expected outcome and yields ``None``.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Tuple

import pendulum
from pendulum import DateTime

from .timezone_converter import resolve_host_timezone

logger = logging.getLogger(__name__)


WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

# The hour may not follow a digit or colon, so "1:5 pm" is not read as "5 pm".
_MERIDIEM_TOKEN = re.compile(r"(?<![\w:])(\d{1,2})(?::(\d{2}))?\s*([ap])\.?\s*m\b\.?")
_24_HOUR_TOKEN = re.compile(r"(?<![\w:])(\d{1,2}):(\d{2})(?![\w:])")
_TOMORROW = re.compile(r"\btomorrow\b")
_NEXT_WEEKDAY = re.compile(r"\bnext\s+(" + "|".join(WEEKDAYS) + r")\b")


class PatternKind(Enum):
    """Phrase shapes the parser understands, in the order they are tried."""
    TOMORROW = "tomorrow"
    NEXT_WEEKDAY = "next_weekday"
    TIME_ONLY = "time_only"


@dataclass(frozen=True)
class ClockTime:
    """Hour (0-23) and minute on a 24-hour clock."""
    hour: int
    minute: int = 0


DEFAULT_CLOCK = ClockTime(hour=9)


@dataclass(frozen=True)
class PhraseMatch:
    """
    Outcome of one matcher.

    ``clock`` is None when the phrase was recognised but its time token could
    not be read (for example "tomorrow 13 pm").
    """
    kind: PatternKind
    day_offset: int
    clock: Optional[ClockTime]


def to_24_hour(hour: int, meridiem: str | None) -> int:
    """
    Convert a 12-hour clock reading to a 24-hour one.

    Args:
        hour: Stated hour, 1-12 with a meridiem or 0-23 without
        meridiem: "am", "pm" or None for a 24-hour reading

    Returns:
        Hour between 0 and 23

    Raises:
        ValueError: If the hour is out of range for the given meridiem
    """
    if meridiem is None:
        if not 0 <= hour <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {hour}")
        return hour

    meridiem = meridiem.lower()
    if meridiem not in ("am", "pm"):
        raise ValueError(f"Meridiem must be 'am' or 'pm', got {meridiem!r}")
    if not 1 <= hour <= 12:
        raise ValueError(f"Hour must be between 1 and 12 with {meridiem}, got {hour}")

    if meridiem == "pm":
        return hour if hour == 12 else hour + 12
    return 0 if hour == 12 else hour


def find_clock(text: str, allow_24_hour: bool = False) -> Tuple[bool, Optional[ClockTime]]:
    """
    Look for a time token in lower-cased text.

    Only ``H[:MM] am|pm`` is read unless ``allow_24_hour`` is set, in
    which case a bare ``HH:MM`` is accepted as well.

    Returns:
        (found, clock). ``found`` is False when the text holds no token;
        ``clock`` is None when a token is present but out of range.
    """
    match = _MERIDIEM_TOKEN.search(text)
    if match:
        hour, minute, meridiem = match.group(1), match.group(2), match.group(3) + "m"
    else:
        match = _24_HOUR_TOKEN.search(text) if allow_24_hour else None
        if not match:
            return False, None
        hour, minute, meridiem = match.group(1), match.group(2), None

    minute_value = int(minute or 0)
    if not 0 <= minute_value <= 59:
        return True, None

    try:
        hour_value = to_24_hour(int(hour), meridiem)
    except ValueError:
        return True, None

    return True, ClockTime(hour=hour_value, minute=minute_value)


def _clock_or_default(text: str, allow_24_hour: bool = False) -> Optional[ClockTime]:
    found, clock = find_clock(text, allow_24_hour=allow_24_hour)
    return clock if found else DEFAULT_CLOCK


def match_tomorrow(text: str, now: DateTime) -> Optional[PhraseMatch]:
    """"tomorrow [time]" - the next calendar day, 09:00 unless a time is given."""
    if not _TOMORROW.search(text):
        return None
    clock = _clock_or_default(text, allow_24_hour=True)
    return PhraseMatch(kind=PatternKind.TOMORROW, day_offset=1, clock=clock)


def match_next_weekday(text: str, now: DateTime) -> Optional[PhraseMatch]:
    """
    "next <weekday> [time]" - the coming occurrence of that weekday.

    Said on the named weekday itself it means a week later, never today.
    """
    match = _NEXT_WEEKDAY.search(text)
    if not match:
        return None

    target = WEEKDAYS.index(match.group(1))
    days_until = (target - now.day_of_week + 7) % 7 or 7

    return PhraseMatch(
        kind=PatternKind.NEXT_WEEKDAY,
        day_offset=days_until,
        clock=_clock_or_default(text),
    )


def match_time_only(text: str, now: DateTime) -> Optional[PhraseMatch]:
    """A bare time such as "2 pm" or "2:30 pm", on the reference day."""
    found, clock = find_clock(text)
    if not found:
        return None
    return PhraseMatch(kind=PatternKind.TIME_ONLY, day_offset=0, clock=clock)


Matcher = Callable[[str, DateTime], Optional[PhraseMatch]]

MATCHERS: Tuple[Matcher, ...] = (match_tomorrow, match_next_weekday, match_time_only)


class NaturalLanguageTimeParser:
    """
    Parses free-form time phrases relative to an injected reference time.

    Phrases are read on the wall clock of ``timezone``: "tomorrow 9 am" means
    09:00 local time there. Zone abbreviations in the text ("2pm PST") are
    ignored and no check is made that the result lies in the future.
    """

    def __init__(self, timezone: str | None = None, matchers: Tuple[Matcher, ...] = MATCHERS):
        """
        Initialize the parser.

        Args:
            timezone: IANA zone the phrases are read in; the host zone if omitted
            matchers: Matcher functions, tried in order
        """
        self.timezone = timezone or resolve_host_timezone()
        self.matchers = matchers

    def match(self, text: str, now: datetime) -> Optional[PhraseMatch]:
        """Return the first phrase match for ``text``, or None."""
        cleaned = text.lower().strip()
        if not cleaned:
            return None

        local_now = self._local(now)
        for matcher in self.matchers:
            result = matcher(cleaned, local_now)
            if result is not None:
                return result
        return None

    def parse(self, text: str, now: datetime) -> Optional[DateTime]:
        """
        Parse ``text`` into an absolute instant.

        Args:
            text: Free-form phrase typed by a user
            now: Reference time; naive values are read in the parser's timezone

        Returns:
            UTC instant, or None when the text is not understood
        """
        phrase = self.match(text, now)

        if phrase is None:
            logger.debug("No time phrase recognised in %r", text)
            return None

        if phrase.clock is None:
            logger.debug("Unreadable time in %r (%s phrase)", text, phrase.kind.value)
            return None

        day = self._local(now).add(days=phrase.day_offset)
        result = day.set(
            hour=phrase.clock.hour,
            minute=phrase.clock.minute,
            second=0,
            microsecond=0,
        )

        logger.debug("Parsed %r as %s phrase -> %s", text, phrase.kind.value, result)
        return result.in_timezone("UTC")

    def _local(self, now: datetime) -> DateTime:
        return pendulum.instance(now, tz=self.timezone).in_timezone(self.timezone)
