"""Per-day availability resolution.

For one worker on one day, four sources are consulted in strict priority
order, stopping at the first match:

1. Unavailability ranges (the worker is on leave).
2. Seasonal overrides for that exact date.
3. The recurring weekly schedule for that weekday.
4. Nothing: the worker is simply not available.

Bookings are consulted separately for assigned hours and never change
which branch is taken.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from crewboard.domain.models import (
    DayAvailability,
    DayDescriptor,
    RecurringScheduleEntry,
    SeasonalOverride,
    UnavailabilityRange,
    Worker,
)
from crewboard.domain.periods import display_window, hours_from_parts, hours_from_range
from crewboard.domain.policies import DefaultHoursPolicy, HoursPolicy
from crewboard.engine.workload import WorkloadAggregator

logger = logging.getLogger(__name__)


@dataclass
class WorkerIndex:
    """Lookup structures for one worker, built once per pass.

    Duplicate rows resolve as "last one wins": a later schedule entry for
    the same weekday, or a later override for the same date, replaces the
    earlier one. Unavailability ranges keep input order.

    Attributes:
        worker: The worker being indexed.
        schedule_by_day: Active schedule entries keyed by weekday (Sunday=0).
        unavailability: The worker's unavailability ranges in input order.
        overrides_by_date: Seasonal overrides keyed by date.
    """

    worker: Worker
    schedule_by_day: dict[int, RecurringScheduleEntry] = field(default_factory=dict)
    unavailability: list[UnavailabilityRange] = field(default_factory=list)
    overrides_by_date: dict[date, SeasonalOverride] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        worker: Worker,
        schedules: Iterable[RecurringScheduleEntry] = (),
        unavailability: Iterable[UnavailabilityRange] = (),
        overrides: Iterable[SeasonalOverride] = (),
    ) -> "WorkerIndex":
        """Build the index from rows already filtered to this worker."""
        index = cls(worker=worker)

        for entry in schedules:
            if not entry.is_active:
                continue
            if entry.day_of_week in index.schedule_by_day:
                logger.debug(
                    "Worker %s has duplicate schedule for weekday %d; using last",
                    worker.id,
                    entry.day_of_week,
                )
            if hours_from_range(entry.start_time, entry.end_time) < 0:
                logger.warning(
                    "Worker %s schedule for weekday %d ends before it starts (%s-%s)",
                    worker.id,
                    entry.day_of_week,
                    entry.start_time,
                    entry.end_time,
                )
            index.schedule_by_day[entry.day_of_week] = entry

        index.unavailability = list(unavailability)

        for override in overrides:
            if override.override_date in index.overrides_by_date:
                logger.debug(
                    "Worker %s has duplicate seasonal override for %s; using last",
                    worker.id,
                    override.override_date,
                )
            index.overrides_by_date[override.override_date] = override

        return index

    def unavailability_on(self, day: date) -> Optional[UnavailabilityRange]:
        """First unavailability range containing a date, if any."""
        for unavailability in self.unavailability:
            if unavailability.contains(day):
                return unavailability
        return None


class AvailabilityResolver:
    """Resolves one worker's availability for one day.

    Example:
        >>> resolver = AvailabilityResolver(WorkloadAggregator(bookings))
        >>> index = WorkerIndex.build(worker, schedules, unavailability, overrides)
        >>> resolver.resolve_day(index, generate_window(date(2024, 1, 16), 1)[0])
    """

    def __init__(
        self,
        workload: WorkloadAggregator,
        hours_policy: Optional[HoursPolicy] = None,
    ):
        """Initialize resolver.

        Args:
            workload: Aggregator used for assigned hours.
            hours_policy: Policy for recurring schedule hours.
        """
        self.workload = workload
        self.hours_policy = hours_policy or DefaultHoursPolicy()

    def resolve_day(self, index: WorkerIndex, day: DayDescriptor) -> DayAvailability:
        """Apply the priority rule for one worker on one day."""
        worker_id = index.worker.id

        # Unavailability wins over everything; bookings are not counted
        unavailability = index.unavailability_on(day.date)
        if unavailability is not None:
            return DayAvailability(
                date=day.date,
                date_str=day.date_str,
                day_of_week=day.day_of_week,
                is_unavailable=True,
                unavailability_reason=unavailability.reason,
            )

        override = index.overrides_by_date.get(day.date)
        if override is not None and override.tokens:
            start_time, end_time = display_window(override.tokens)
            return DayAvailability(
                date=day.date,
                date_str=day.date_str,
                day_of_week=day.day_of_week,
                is_available=True,
                start_time=start_time,
                end_time=end_time,
                available_hours=hours_from_parts(override.tokens),
                assigned_hours=self.workload.assigned_hours(worker_id, day.date),
                seasonal_periods=tuple(override.tokens),
                is_seasonal_override=True,
            )

        schedule = index.schedule_by_day.get(day.day_of_week)
        if schedule is not None and schedule.is_active:
            hours = self.hours_policy.schedule_hours(schedule.start_time, schedule.end_time)
            return DayAvailability(
                date=day.date,
                date_str=day.date_str,
                day_of_week=day.day_of_week,
                is_available=True,
                start_time=schedule.start_time,
                end_time=schedule.end_time,
                available_hours=hours,
                assigned_hours=self.workload.assigned_hours(worker_id, day.date),
            )

        return DayAvailability(
            date=day.date,
            date_str=day.date_str,
            day_of_week=day.day_of_week,
        )

    def resolve_window(
        self,
        index: WorkerIndex,
        days: Iterable[DayDescriptor],
    ) -> list[DayAvailability]:
        """Resolve every day of a window for one worker."""
        return [self.resolve_day(index, day) for day in days]
