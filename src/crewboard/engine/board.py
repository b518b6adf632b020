"""Board assembly across the full worker x day matrix.

This module provides the BoardAssembler that drives the resolver and the
workload aggregator for every worker and every day of the window, then
filters and groups the results for display.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from crewboard.domain.models import (
    AvailabilityBoard,
    Booking,
    GroupedWorkers,
    RecurringScheduleEntry,
    SeasonalOverride,
    UnavailabilityRange,
    UnavailableWorker,
    Worker,
    WorkerAvailability,
)
from crewboard.domain.policies import (
    DefaultHoursPolicy,
    DefaultLeavePolicy,
    HoursPolicy,
    LeavePolicy,
)
from crewboard.engine.resolver import AvailabilityResolver, WorkerIndex
from crewboard.engine.window import (
    BOARD_WINDOW_DAYS,
    TV_WINDOW_DAYS,
    generate_month_window,
    generate_window,
)
from crewboard.engine.workload import WorkloadAggregator

logger = logging.getLogger(__name__)


@dataclass
class BoardConfig:
    """Configuration for board assembly.

    Attributes:
        window_days: Number of days in the window.
        unknown_region_label: Bucket used for workers without a region.
        active_only: If True, inactive workers are skipped.
        leave_policy: Decides which absences count as long leave.
        hours_policy: Computes hours for recurring schedule windows.
    """

    window_days: int = BOARD_WINDOW_DAYS
    unknown_region_label: str = "Unknown"
    active_only: bool = True
    leave_policy: LeavePolicy = field(default_factory=DefaultLeavePolicy)
    hours_policy: HoursPolicy = field(default_factory=DefaultHoursPolicy)

    @classmethod
    def board(cls) -> "BoardConfig":
        """Standard 30-day board."""
        return cls(window_days=BOARD_WINDOW_DAYS)

    @classmethod
    def tv(cls) -> "BoardConfig":
        """60-day wall display board."""
        return cls(window_days=TV_WINDOW_DAYS)


def _group_by_worker(rows: Iterable, attr: str = "worker_id") -> dict[str, list]:
    grouped = defaultdict(list)
    for row in rows:
        grouped[getattr(row, attr)].append(row)
    return grouped


class BoardAssembler:
    """Builds the availability board for a window of days.

    The assembler is pure: given the same collections and anchor date it
    returns a structurally identical board.

    Example:
        >>> assembler = BoardAssembler(BoardConfig.tv())
        >>> board = assembler.assemble(
        ...     workers, schedules, unavailability, overrides, bookings,
        ...     anchor_date=date(2024, 1, 15),
        ... )
        >>> board.grouped_workers.by_state["NSW"]
    """

    def __init__(self, config: Optional[BoardConfig] = None):
        self.config = config or BoardConfig()

    def assemble(
        self,
        workers: list[Worker],
        schedules: list[RecurringScheduleEntry],
        unavailability: list[UnavailabilityRange],
        overrides: list[SeasonalOverride],
        bookings: list[Booking],
        anchor_date: date,
    ) -> AvailabilityBoard:
        """Run one full computation pass.

        Args:
            workers: Worker roster.
            schedules: Recurring weekly schedule entries.
            unavailability: Unavailability ranges.
            overrides: Seasonal date overrides.
            bookings: Bookings used for assigned hours.
            anchor_date: First day of the window ("today").

        Returns:
            AvailabilityBoard with day descriptors and grouped workers.
        """
        days = generate_window(anchor_date, self.config.window_days)
        eligible = [
            w for w in workers if w.is_active or not self.config.active_only
        ]
        workers_by_id = {w.id: w for w in eligible}

        # Long leave removes a worker from per-day processing entirely
        unavailable_workers = []
        long_leave_ids = set()
        for entry in unavailability:
            if not self.config.leave_policy.is_long_leave(entry):
                continue
            worker = workers_by_id.get(entry.worker_id)
            if worker is not None:
                long_leave_ids.add(worker.id)
                unavailable_workers.append(UnavailableWorker(worker, entry))

        schedules_by_worker = _group_by_worker(schedules)
        unavailability_by_worker = _group_by_worker(unavailability)
        overrides_by_worker = _group_by_worker(overrides)

        workload = WorkloadAggregator(bookings, known_worker_ids=workers_by_id.keys())
        resolver = AvailabilityResolver(workload, self.config.hours_policy)

        by_state: dict[str, list[WorkerAvailability]] = {}
        dropped = 0
        for worker in eligible:
            if worker.id in long_leave_ids:
                continue

            index = WorkerIndex.build(
                worker,
                schedules_by_worker.get(worker.id, []),
                unavailability_by_worker.get(worker.id, []),
                overrides_by_worker.get(worker.id, []),
            )
            availability = WorkerAvailability(
                worker=worker,
                days=resolver.resolve_window(index, days),
            )

            if not availability.has_any_availability():
                dropped += 1
                continue

            state = worker.region or self.config.unknown_region_label
            by_state.setdefault(state, []).append(availability)

        if workload.orphaned_worker_ids:
            logger.debug(
                "Ignored bookings for %d unknown worker(s)",
                len(workload.orphaned_worker_ids),
            )
        logger.info(
            "Board %s +%dd: %d worker(s) in %d region(s), %d on long leave, %d without availability",
            anchor_date,
            len(days),
            sum(len(group) for group in by_state.values()),
            len(by_state),
            len(unavailable_workers),
            dropped,
        )

        return AvailabilityBoard(
            anchor_date=anchor_date,
            days=days,
            grouped_workers=GroupedWorkers(
                by_state=by_state,
                unavailable_workers=unavailable_workers,
            ),
        )

    def assemble_month(
        self,
        workers: list[Worker],
        schedules: list[RecurringScheduleEntry],
        unavailability: list[UnavailabilityRange],
        overrides: list[SeasonalOverride],
        bookings: list[Booking],
        month_date: date,
    ) -> list[WorkerAvailability]:
        """Resolve a whole calendar month for every worker with a region.

        Unlike the rolling board there is no long-leave partition, no
        availability filter and no grouping: every eligible worker gets a
        row for every day of the month.

        Args:
            workers: Worker roster.
            schedules: Recurring weekly schedule entries.
            unavailability: Unavailability ranges.
            overrides: Seasonal date overrides.
            bookings: Bookings used for assigned hours.
            month_date: Any date inside the month.
        """
        days = generate_month_window(month_date)
        eligible = [
            w for w in workers
            if w.region is not None and (w.is_active or not self.config.active_only)
        ]

        schedules_by_worker = _group_by_worker(schedules)
        unavailability_by_worker = _group_by_worker(unavailability)
        overrides_by_worker = _group_by_worker(overrides)

        workload = WorkloadAggregator(bookings, known_worker_ids=[w.id for w in eligible])
        resolver = AvailabilityResolver(workload, self.config.hours_policy)

        result = []
        for worker in eligible:
            index = WorkerIndex.build(
                worker,
                schedules_by_worker.get(worker.id, []),
                unavailability_by_worker.get(worker.id, []),
                overrides_by_worker.get(worker.id, []),
            )
            result.append(WorkerAvailability(worker, resolver.resolve_window(index, days)))

        return result


def create_board_assembler(
    window_days: int = BOARD_WINDOW_DAYS,
    clamp_negative_hours: bool = False,
    long_leave_days: int = 7,
) -> BoardAssembler:
    """Factory function to create a board assembler.

    Args:
        window_days: Number of days in the window (30 or 60 in practice).
        clamp_negative_hours: Clamp inverted schedule windows to 0 hours.
        long_leave_days: Span above which an absence counts as long leave.

    Returns:
        Configured BoardAssembler.
    """
    config = BoardConfig(
        window_days=window_days,
        leave_policy=DefaultLeavePolicy(threshold_days=long_leave_days),
        hours_policy=DefaultHoursPolicy(clamp_negative=clamp_negative_hours),
    )
    return BoardAssembler(config)
