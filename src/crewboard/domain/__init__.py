"""Domain models and business rules for the availability board."""

from crewboard.domain.models import (
    AvailabilityBoard,
    AvailabilitySource,
    Booking,
    DayAvailability,
    DayDescriptor,
    GroupedWorkers,
    InputError,
    RecurringScheduleEntry,
    SeasonalOverride,
    UnavailabilityRange,
    UnavailableWorker,
    Worker,
    WorkerAvailability,
)
from crewboard.domain.periods import (
    PERIOD_HOURS,
    PartOfDay,
    PeriodHours,
    display_window,
    hours_from_parts,
    hours_from_range,
    representative_period,
)
from crewboard.domain.policies import (
    DefaultHoursPolicy,
    DefaultLeavePolicy,
    HoursPolicy,
    LeavePolicy,
)

__all__ = [
    # Models
    "AvailabilityBoard",
    "AvailabilitySource",
    "Booking",
    "DayAvailability",
    "DayDescriptor",
    "GroupedWorkers",
    "InputError",
    "RecurringScheduleEntry",
    "SeasonalOverride",
    "UnavailabilityRange",
    "UnavailableWorker",
    "Worker",
    "WorkerAvailability",
    # Periods
    "PERIOD_HOURS",
    "PartOfDay",
    "PeriodHours",
    "display_window",
    "hours_from_parts",
    "hours_from_range",
    "representative_period",
    # Policies
    "DefaultHoursPolicy",
    "DefaultLeavePolicy",
    "HoursPolicy",
    "LeavePolicy",
]
