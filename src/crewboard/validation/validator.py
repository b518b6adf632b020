"""Validation of raw input collections.

The engine absorbs data-quality problems silently (last row wins,
negative hours pass through, orphaned bookings are ignored). This module
reports those problems so a caller can reject bad data at the boundary
before running a pass.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from crewboard.domain.models import (
    Booking,
    RecurringScheduleEntry,
    SeasonalOverride,
    UnavailabilityRange,
    Worker,
)
from crewboard.domain.periods import PERIOD_HOURS, hours_from_range


class ValidationErrorType(Enum):
    """Types of input validation errors."""

    DUPLICATE_SCHEDULE = "duplicate_schedule"
    DUPLICATE_OVERRIDE = "duplicate_override"
    INVERTED_TIME_RANGE = "inverted_time_range"
    INVERTED_DATE_RANGE = "inverted_date_range"
    INVALID_DAY_OF_WEEK = "invalid_day_of_week"
    UNKNOWN_PERIOD = "unknown_period"
    UNKNOWN_WORKER = "unknown_worker"
    ORPHANED_BOOKING = "orphaned_booking"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    worker_id: Optional[str] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.worker_id:
            parts.append(f"Worker {self.worker_id}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating input collections."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)

    def errors_of_type(self, error_type: ValidationErrorType) -> list[ValidationError]:
        return [e for e in self.errors if e.error_type == error_type]


class InputValidator:
    """Validates board input collections.

    Duplicates, inverted ranges and bad weekdays are errors. References to
    unknown workers are warnings by default because the engine ignores
    them safely.

    Example:
        >>> validator = InputValidator()
        >>> result = validator.validate(workers, schedules, unavailability, overrides, bookings)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(self, strict_references: bool = False):
        """Initialize validator.

        Args:
            strict_references: If True, unknown worker references and
                orphaned bookings are errors instead of warnings.
        """
        self.strict_references = strict_references

    def validate(
        self,
        workers: list[Worker],
        schedules: list[RecurringScheduleEntry],
        unavailability: list[UnavailabilityRange],
        overrides: list[SeasonalOverride],
        bookings: list[Booking],
    ) -> ValidationResult:
        """Validate all input collections.

        Returns:
            ValidationResult with is_valid flag and any errors.
        """
        result = ValidationResult(is_valid=True)
        worker_ids = {w.id for w in workers}

        self._validate_schedules(schedules, worker_ids, result)
        self._validate_unavailability(unavailability, worker_ids, result)
        self._validate_overrides(overrides, worker_ids, result)
        self._validate_bookings(bookings, worker_ids, result)

        return result

    def _report_reference(
        self,
        result: ValidationResult,
        error_type: ValidationErrorType,
        message: str,
        worker_id: str,
    ) -> None:
        if self.strict_references:
            result.add_error(ValidationError(error_type, message, worker_id=worker_id))
        else:
            result.add_warning(f"Worker {worker_id}: {message}")

    def _validate_schedules(
        self,
        schedules: list[RecurringScheduleEntry],
        worker_ids: set[str],
        result: ValidationResult,
    ) -> None:
        """Check weekday range, inverted windows and duplicates."""
        active_keys = Counter(
            (s.worker_id, s.day_of_week) for s in schedules if s.is_active
        )
        for (worker_id, day_of_week), count in active_keys.items():
            if count > 1:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.DUPLICATE_SCHEDULE,
                        message=f"{count} active schedule entries for weekday {day_of_week}",
                        worker_id=worker_id,
                        details={"day_of_week": day_of_week, "count": count},
                    )
                )

        unknown = set()
        for entry in schedules:
            if not 0 <= entry.day_of_week <= 6:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.INVALID_DAY_OF_WEEK,
                        message=f"Day of week {entry.day_of_week} is outside 0-6",
                        worker_id=entry.worker_id,
                    )
                )
            if hours_from_range(entry.start_time, entry.end_time) < 0:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.INVERTED_TIME_RANGE,
                        message=(
                            f"Schedule {entry.start_time}-{entry.end_time} "
                            f"ends before it starts"
                        ),
                        worker_id=entry.worker_id,
                        details={"day_of_week": entry.day_of_week},
                    )
                )
            if entry.worker_id not in worker_ids:
                unknown.add(entry.worker_id)

        for worker_id in sorted(unknown):
            self._report_reference(
                result,
                ValidationErrorType.UNKNOWN_WORKER,
                "Schedule entries reference an unknown worker",
                worker_id,
            )

    def _validate_unavailability(
        self,
        unavailability: list[UnavailabilityRange],
        worker_ids: set[str],
        result: ValidationResult,
    ) -> None:
        """Check for ranges that end before they start."""
        for entry in unavailability:
            if entry.end_date < entry.start_date:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.INVERTED_DATE_RANGE,
                        message=(
                            f"Unavailability {entry.start_date}..{entry.end_date} "
                            f"ends before it starts"
                        ),
                        worker_id=entry.worker_id,
                    )
                )
            if entry.worker_id not in worker_ids:
                self._report_reference(
                    result,
                    ValidationErrorType.UNKNOWN_WORKER,
                    f"Unavailability from {entry.start_date} references an unknown worker",
                    entry.worker_id,
                )

    def _validate_overrides(
        self,
        overrides: list[SeasonalOverride],
        worker_ids: set[str],
        result: ValidationResult,
    ) -> None:
        """Check for duplicate dates and unknown day-part tokens."""
        keys = Counter((o.worker_id, o.override_date) for o in overrides)
        for (worker_id, override_date), count in keys.items():
            if count > 1:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.DUPLICATE_OVERRIDE,
                        message=f"{count} seasonal overrides for {override_date}",
                        worker_id=worker_id,
                        details={"date": override_date, "count": count},
                    )
                )

        for override in overrides:
            unknown_tokens = [t for t in override.tokens if t not in PERIOD_HOURS]
            if unknown_tokens:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.UNKNOWN_PERIOD,
                        message=(
                            f"Unknown day part(s) {', '.join(unknown_tokens)} "
                            f"on {override.override_date}"
                        ),
                        worker_id=override.worker_id,
                    )
                )
            if override.worker_id not in worker_ids:
                self._report_reference(
                    result,
                    ValidationErrorType.UNKNOWN_WORKER,
                    f"Seasonal override on {override.override_date} references an unknown worker",
                    override.worker_id,
                )

    def _validate_bookings(
        self,
        bookings: list[Booking],
        worker_ids: set[str],
        result: ValidationResult,
    ) -> None:
        """Check for bookings assigned to workers that do not exist."""
        for booking in bookings:
            label = booking.id or booking.start_time.isoformat()
            for worker_id in booking.worker_ids:
                if worker_id not in worker_ids:
                    self._report_reference(
                        result,
                        ValidationErrorType.ORPHANED_BOOKING,
                        f"Booking {label} is assigned to an unknown worker",
                        worker_id,
                    )
