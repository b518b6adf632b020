"""Weekly availability status for worker pickers.

Summarizes a worker's week as available, partially available or
unavailable, and sorts a roster so the most available workers come
first.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Optional

from crewboard.domain.models import (
    RecurringScheduleEntry,
    UnavailabilityRange,
    Worker,
)
from crewboard.engine.window import sunday_weekday


class AvailabilityStatus(Enum):
    """Coarse availability for a week."""

    AVAILABLE = "available"
    PARTIAL = "partial"
    UNAVAILABLE = "unavailable"


STATUS_ORDER = {
    AvailabilityStatus.AVAILABLE: 0,
    AvailabilityStatus.PARTIAL: 1,
    AvailabilityStatus.UNAVAILABLE: 2,
}


@dataclass(frozen=True)
class WeeklyStatus:
    """A worker's status for one week.

    Attributes:
        worker: The worker.
        status: Coarse availability.
        reason: Human-readable explanation, if any.
    """

    worker: Worker
    status: AvailabilityStatus
    reason: Optional[str] = None


def week_start(d: date) -> date:
    """Sunday on or before a date."""
    return d - timedelta(days=sunday_weekday(d))


def weekly_status(
    worker: Worker,
    schedules: Iterable[RecurringScheduleEntry],
    unavailability: Iterable[UnavailabilityRange],
    week_of: date,
) -> WeeklyStatus:
    """Classify a worker's week.

    Only scheduled days count. A scheduled day covered by an
    unavailability range is blocked.

    Args:
        worker: The worker.
        schedules: Schedule entries (any worker; filtered here).
        unavailability: Unavailability ranges (any worker; filtered here).
        week_of: Any date inside the Sunday-start week.
    """
    start = week_start(week_of)
    week_days = [start + timedelta(days=i) for i in range(7)]

    scheduled_weekdays = {
        s.day_of_week for s in schedules
        if s.worker_id == worker.id and s.is_active
    }
    ranges = [u for u in unavailability if u.worker_id == worker.id]

    scheduled_days = 0
    blocked_days = 0
    blocked_reason = ""

    for day in week_days:
        if sunday_weekday(day) not in scheduled_weekdays:
            continue
        scheduled_days += 1
        blocking = next((u for u in ranges if u.contains(day)), None)
        if blocking is not None:
            blocked_days += 1
            if blocking.reason and not blocked_reason:
                blocked_reason = blocking.reason

    if scheduled_days == 0:
        return WeeklyStatus(worker, AvailabilityStatus.UNAVAILABLE, "No schedule set")

    if blocked_days == scheduled_days:
        return WeeklyStatus(
            worker,
            AvailabilityStatus.UNAVAILABLE,
            blocked_reason or "Unavailable all week",
        )

    if blocked_days > 0:
        available_days = scheduled_days - blocked_days
        reason = f"Available {available_days}/{scheduled_days} days"
        if blocked_reason:
            reason += f" ({blocked_reason})"
        return WeeklyStatus(worker, AvailabilityStatus.PARTIAL, reason)

    return WeeklyStatus(worker, AvailabilityStatus.AVAILABLE)


def sort_by_availability(
    workers: Iterable[Worker],
    schedules: list[RecurringScheduleEntry],
    unavailability: list[UnavailabilityRange],
    week_of: date,
) -> list[WeeklyStatus]:
    """Weekly statuses sorted available first, then partial, then by name."""
    statuses = [
        weekly_status(worker, schedules, unavailability, week_of)
        for worker in workers
    ]
    return sorted(
        statuses,
        key=lambda s: (STATUS_ORDER[s.status], s.worker.name.lower()),
    )
