"""Assigned-hours aggregation from bookings.

Bookings never grant or remove availability. They only feed the
assigned-hours figure shown next to a worker's available hours.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from crewboard.domain.models import Booking

logger = logging.getLogger(__name__)


class WorkloadAggregator:
    """Sums booking durations per worker per day.

    Bookings are attributed entirely to the calendar date of their start
    timestamp, so a booking running past midnight counts toward the day
    it started.

    Example:
        >>> workload = WorkloadAggregator(bookings)
        >>> workload.assigned_hours("W1", date(2024, 1, 16))
        2.0
    """

    def __init__(
        self,
        bookings: Iterable[Booking],
        known_worker_ids: Optional[Iterable[str]] = None,
    ):
        """Index bookings by (worker, start date).

        Args:
            bookings: All bookings for the pass.
            known_worker_ids: If given, booking worker IDs outside this set
                are recorded as orphaned. They never affect any total.
        """
        self._by_worker_day: dict[tuple[str, date], list[Booking]] = defaultdict(list)
        self.orphaned_worker_ids: set[str] = set()

        known = set(known_worker_ids) if known_worker_ids is not None else None

        for booking in bookings:
            for worker_id in booking.worker_ids:
                if known is not None and worker_id not in known:
                    if worker_id not in self.orphaned_worker_ids:
                        logger.debug(
                            "Booking %s references unknown worker %s",
                            booking.id or booking.start_time.isoformat(),
                            worker_id,
                        )
                    self.orphaned_worker_ids.add(worker_id)
                self._by_worker_day[(worker_id, booking.start_date)].append(booking)

    def bookings_for(self, worker_id: str, day: date) -> list[Booking]:
        """Get bookings attributed to a worker on a date."""
        return list(self._by_worker_day.get((worker_id, day), []))

    def assigned_hours(self, worker_id: str, day: date) -> float:
        """Total booked hours for a worker on a date."""
        return sum(
            (b.duration_hours for b in self._by_worker_day.get((worker_id, day), [])),
            0.0,
        )
