"""Day-part lookup table and hour calculations.

Seasonal overrides describe availability with coarse day-part tokens
instead of exact clock times. This module maps those tokens to clock
hours and converts both token sets and start/end times into hours.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


class PartOfDay(Enum):
    """Named day-part tokens used by seasonal overrides."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    ANYTIME = "anytime"  # Subsumes all other tokens


@dataclass(frozen=True)
class PeriodHours:
    """Clock range covered by a day-part token.

    Attributes:
        start_hour: Hour the period starts (24-hour clock).
        end_hour: Hour the period ends (24-hour clock).
        hours: Duration of the period in hours.
    """

    start_hour: int
    end_hour: int
    hours: float

    @property
    def start_time_str(self) -> str:
        return f"{self.start_hour:02d}:00:00"

    @property
    def end_time_str(self) -> str:
        return f"{self.end_hour:02d}:00:00"


PERIOD_HOURS: dict[str, PeriodHours] = {
    PartOfDay.MORNING.value: PeriodHours(6, 12, 6.0),
    PartOfDay.AFTERNOON.value: PeriodHours(12, 18, 6.0),
    PartOfDay.EVENING.value: PeriodHours(18, 22, 4.0),
    PartOfDay.ANYTIME.value: PeriodHours(6, 22, 16.0),
}


def hours_from_parts(tokens: Iterable[str]) -> float:
    """Total hours covered by a set of day-part tokens.

    "anytime" absorbs every other token. Unknown tokens contribute 0.

    Args:
        tokens: Day-part tokens, e.g. ["morning", "evening"].

    Returns:
        Hours of availability (0.0 for an empty set).
    """
    tokens = list(tokens)
    if PartOfDay.ANYTIME.value in tokens:
        return PERIOD_HOURS[PartOfDay.ANYTIME.value].hours
    return sum(
        PERIOD_HOURS[t].hours if t in PERIOD_HOURS else 0.0
        for t in tokens
    )


def _minutes_of_day(clock: str) -> int:
    """Minutes since midnight for an "HH:MM[:SS]" string (seconds ignored)."""
    parts = clock.split(":")
    hours = int(parts[0])
    minutes = int(parts[1]) if len(parts) > 1 else 0
    return hours * 60 + minutes


def hours_from_range(start: Optional[str], end: Optional[str]) -> float:
    """Hours between two wall-clock times on the same day.

    Returns 0.0 if either bound is missing. An end before the start
    yields a negative figure; there is no wraparound past midnight.

    Args:
        start: Start time as "HH:MM:SS".
        end: End time as "HH:MM:SS".
    """
    if not start or not end:
        return 0.0
    return (_minutes_of_day(end) - _minutes_of_day(start)) / 60


def representative_period(tokens: Iterable[str]) -> Optional[str]:
    """Token used for display times: "anytime" if present, else the first."""
    tokens = list(tokens)
    if not tokens:
        return None
    if PartOfDay.ANYTIME.value in tokens:
        return PartOfDay.ANYTIME.value
    return tokens[0]


def display_window(tokens: Iterable[str]) -> tuple[Optional[str], Optional[str]]:
    """Display start/end for a token set, or (None, None) if not resolvable."""
    period = PERIOD_HOURS.get(representative_period(tokens) or "")
    if period is None:
        return None, None
    return period.start_time_str, period.end_time_str
