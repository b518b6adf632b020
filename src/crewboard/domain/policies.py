"""Policy definitions for board rules.

Policies hold the business rules that are easy to argue about: when an
absence counts as long leave, and how schedule hours are computed.
They are kept separate from the engine so they can be tested and
swapped independently.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from crewboard.domain.models import UnavailabilityRange
from crewboard.domain.periods import hours_from_range


class LeavePolicy(ABC):
    """Abstract base class for long-leave classification."""

    @abstractmethod
    def is_long_leave(self, unavailability: UnavailabilityRange) -> bool:
        """Check if a range removes the worker from the per-day board."""
        pass


class HoursPolicy(ABC):
    """Abstract base class for recurring schedule hour calculation."""

    @abstractmethod
    def schedule_hours(self, start_time: Optional[str], end_time: Optional[str]) -> float:
        """Get available hours for a recurring schedule window."""
        pass


@dataclass
class DefaultLeavePolicy(LeavePolicy):
    """Default long-leave policy.

    A range whose end is more than `threshold_days` after its start is
    long leave. The comparison is strict: a 7-day span is not long leave,
    an 8-day span is.
    """

    threshold_days: int = 7

    def is_long_leave(self, unavailability: UnavailabilityRange) -> bool:
        return unavailability.span_days > self.threshold_days


@dataclass
class DefaultHoursPolicy(HoursPolicy):
    """Default hours policy.

    Inverted windows (end before start) pass through as negative hours
    unless `clamp_negative` is set.
    """

    clamp_negative: bool = False

    def schedule_hours(self, start_time: Optional[str], end_time: Optional[str]) -> float:
        hours = hours_from_range(start_time, end_time)
        if self.clamp_negative and hours < 0:
            return 0.0
        return hours
