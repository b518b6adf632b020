"""Domain models for the availability board.

This module contains the input records consumed by the engine (workers,
recurring schedules, unavailability ranges, seasonal overrides and
bookings) and the immutable records it produces.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class InputError(ValueError):
    """Raised when a raw input row cannot be converted to a domain record."""

    def __init__(self, collection: str, message: str, index: Optional[int] = None):
        self.collection = collection
        self.message = message
        self.index = index
        where = collection if index is None else f"{collection}[{index}]"
        super().__init__(f"{where}: {message}")


class AvailabilitySource(Enum):
    """Which rule produced a resolved day."""

    UNAVAILABLE = "unavailable"  # Unavailability range matched
    SEASONAL = "seasonal"  # Seasonal override matched
    SCHEDULE = "schedule"  # Recurring weekly schedule matched
    NONE = "none"  # Nothing matched


@dataclass
class Worker:
    """A worker shown on the board.

    Attributes:
        id: Unique identifier for the worker.
        first_name: Given name.
        last_name: Family name.
        region: State/region label used for grouping (None means unknown).
        is_active: Inactive workers are skipped by the board.
    """

    id: str
    first_name: str
    last_name: str = ""
    region: Optional[str] = None
    is_active: bool = True

    @property
    def name(self) -> str:
        """Display name."""
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class RecurringScheduleEntry:
    """A standing weekly availability window.

    Attributes:
        worker_id: ID of the worker.
        day_of_week: Day of week, Sunday=0 through Saturday=6.
        start_time: Wall-clock start as "HH:MM:SS".
        end_time: Wall-clock end as "HH:MM:SS".
        is_active: Inactive entries are never consulted.
    """

    worker_id: str
    day_of_week: int
    start_time: Optional[str]
    end_time: Optional[str]
    is_active: bool = True


@dataclass
class UnavailabilityRange:
    """A closed date interval during which a worker cannot work.

    Attributes:
        worker_id: ID of the worker.
        start_date: First unavailable date (inclusive).
        end_date: Last unavailable date (inclusive).
        reason: Optional free-text reason shown on the board.
        notes: Optional free-text notes.
    """

    worker_id: str
    start_date: date
    end_date: date
    reason: Optional[str] = None
    notes: Optional[str] = None

    @property
    def span_days(self) -> int:
        """Days between start and end (end - start, not inclusive count)."""
        return (self.end_date - self.start_date).days

    def contains(self, day: date) -> bool:
        """Check if a calendar date falls inside the range (inclusive)."""
        return self.start_date <= day <= self.end_date


@dataclass
class SeasonalOverride:
    """Day-part availability for one worker on one specific date.

    Attributes:
        worker_id: ID of the worker.
        override_date: The calendar date being overridden.
        tokens: Ordered day-part tokens (morning, afternoon, evening, anytime).
    """

    worker_id: str
    override_date: date
    tokens: list[str] = field(default_factory=list)


@dataclass
class Booking:
    """A booked job used only for assigned-hours totals.

    Attributes:
        start_time: Booking start timestamp.
        end_time: Booking end timestamp.
        worker_ids: IDs of all workers assigned (may be empty).
        id: Optional booking identifier.
    """

    start_time: datetime
    end_time: datetime
    worker_ids: list[str] = field(default_factory=list)
    id: Optional[str] = None

    @property
    def start_date(self) -> date:
        """Calendar date the booking is attributed to."""
        return self.start_time.date()

    @property
    def duration_hours(self) -> float:
        """Duration in hours, truncated to whole minutes toward zero."""
        minutes = int((self.end_time - self.start_time).total_seconds() / 60)
        return minutes / 60


@dataclass(frozen=True)
class DayDescriptor:
    """One column of the availability window.

    Attributes:
        date: The calendar date.
        date_str: ISO "YYYY-MM-DD" form of the date.
        day_of_week: Day of week, Sunday=0.
        is_today: True for the anchor date.
        is_weekend: True for Saturday and Sunday.
    """

    date: date
    date_str: str
    day_of_week: int
    is_today: bool = False
    is_weekend: bool = False

    @property
    def day_number(self) -> str:
        return str(self.date.day)

    @property
    def day_name(self) -> str:
        return self.date.strftime("%a")

    @property
    def month_name(self) -> str:
        return self.date.strftime("%b")


@dataclass(frozen=True)
class DayAvailability:
    """Resolved availability verdict for one worker on one day.

    Attributes:
        date: The calendar date.
        date_str: ISO form of the date.
        day_of_week: Day of week, Sunday=0.
        is_available: Whether the worker can be booked at all.
        start_time: Display start ("HH:MM:SS") or None.
        end_time: Display end ("HH:MM:SS") or None.
        is_unavailable: True when an unavailability range covers the day.
        unavailability_reason: Reason copied from the matching range.
        available_hours: Hours of availability.
        assigned_hours: Hours already booked.
        seasonal_periods: Tokens of the seasonal override that applied.
        is_seasonal_override: True when a seasonal override was the source.
    """

    date: date
    date_str: str
    day_of_week: int
    is_available: bool = False
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_unavailable: bool = False
    unavailability_reason: Optional[str] = None
    available_hours: float = 0.0
    assigned_hours: float = 0.0
    seasonal_periods: tuple[str, ...] = ()
    is_seasonal_override: bool = False

    @property
    def source(self) -> AvailabilitySource:
        """Which rule produced this record."""
        if self.is_unavailable:
            return AvailabilitySource.UNAVAILABLE
        if self.is_seasonal_override:
            return AvailabilitySource.SEASONAL
        if self.is_available:
            return AvailabilitySource.SCHEDULE
        return AvailabilitySource.NONE

    @property
    def remaining_hours(self) -> float:
        """Available hours not yet booked."""
        return self.available_hours - self.assigned_hours


@dataclass
class WorkerAvailability:
    """A worker together with their resolved days."""

    worker: Worker
    days: list[DayAvailability] = field(default_factory=list)

    @property
    def total_available_hours(self) -> float:
        return sum(d.available_hours for d in self.days)

    @property
    def total_assigned_hours(self) -> float:
        return sum(d.assigned_hours for d in self.days)

    def has_any_availability(self) -> bool:
        """True if any day is available or came from a seasonal override."""
        return any(d.is_available or d.is_seasonal_override for d in self.days)


@dataclass
class UnavailableWorker:
    """A worker on long leave and the range that triggered it."""

    worker: Worker
    unavailability: UnavailabilityRange


@dataclass
class GroupedWorkers:
    """Workers grouped by region plus the long-leave list.

    Attributes:
        by_state: Region label to workers, in worker input order.
        unavailable_workers: Long-leave workers with their triggering range.
    """

    by_state: dict[str, list[WorkerAvailability]] = field(default_factory=dict)
    unavailable_workers: list[UnavailableWorker] = field(default_factory=list)

    @property
    def worker_count(self) -> int:
        return sum(len(group) for group in self.by_state.values())


@dataclass
class AvailabilityBoard:
    """Complete output of one board computation pass.

    Attributes:
        anchor_date: First date of the window ("today").
        days: Day descriptors for column headers.
        grouped_workers: Region-grouped workers and the long-leave list.
    """

    anchor_date: date
    days: list[DayDescriptor] = field(default_factory=list)
    grouped_workers: GroupedWorkers = field(default_factory=GroupedWorkers)

    @property
    def end_date(self) -> Optional[date]:
        """Last date of the window."""
        return self.days[-1].date if self.days else None

    def get_summary(self) -> dict:
        """Get summary statistics for the board."""
        hours_by_state = {}
        available_hours = 0.0
        assigned_hours = 0.0

        for state, group in self.grouped_workers.by_state.items():
            state_available = sum(w.total_available_hours for w in group)
            state_assigned = sum(w.total_assigned_hours for w in group)
            hours_by_state[state] = {
                "workers": len(group),
                "available_hours": state_available,
                "assigned_hours": state_assigned,
            }
            available_hours += state_available
            assigned_hours += state_assigned

        return {
            "window_days": len(self.days),
            "total_workers": self.grouped_workers.worker_count,
            "long_leave_workers": len(self.grouped_workers.unavailable_workers),
            "total_available_hours": available_hours,
            "total_assigned_hours": assigned_hours,
            "hours_by_state": hours_by_state,
        }
