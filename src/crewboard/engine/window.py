"""Day-axis generation for the board.

The window always starts at an explicit anchor date so the engine never
reads the wall clock.
"""

import calendar
from datetime import date, timedelta
from typing import Optional

from crewboard.domain.models import DayDescriptor

BOARD_WINDOW_DAYS = 30
TV_WINDOW_DAYS = 60


def sunday_weekday(d: date) -> int:
    """Day of week with Sunday=0 through Saturday=6."""
    return (d.weekday() + 1) % 7


def describe_day(d: date, is_today: bool = False) -> DayDescriptor:
    """Build the descriptor for a single date."""
    day_of_week = sunday_weekday(d)
    return DayDescriptor(
        date=d,
        date_str=d.isoformat(),
        day_of_week=day_of_week,
        is_today=is_today,
        is_weekend=day_of_week in (0, 6),
    )


def generate_window(anchor_date: date, days: int = BOARD_WINDOW_DAYS) -> list[DayDescriptor]:
    """Generate consecutive day descriptors starting at the anchor.

    Args:
        anchor_date: First day of the window ("today").
        days: Number of days in the window.

    Returns:
        Descriptors for [anchor_date, anchor_date + days - 1].
    """
    return [
        describe_day(anchor_date + timedelta(days=i), is_today=(i == 0))
        for i in range(max(0, days))
    ]


def generate_month_window(
    month_date: date,
    today: Optional[date] = None,
) -> list[DayDescriptor]:
    """Generate descriptors for every day of the month containing a date.

    Args:
        month_date: Any date inside the month.
        today: If given and inside the month, that day is flagged as today.
    """
    first = month_date.replace(day=1)
    _, last_day = calendar.monthrange(first.year, first.month)
    return [
        describe_day(first + timedelta(days=i), is_today=(first + timedelta(days=i) == today))
        for i in range(last_day)
    ]
