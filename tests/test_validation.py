"""Tests for input validation."""

from datetime import date, datetime

import pytest

from crewboard.domain.models import (
    Booking,
    RecurringScheduleEntry,
    SeasonalOverride,
    UnavailabilityRange,
    Worker,
)
from crewboard.validation.validator import (
    InputValidator,
    ValidationError,
    ValidationErrorType,
    ValidationResult,
)


@pytest.fixture
def workers():
    return [Worker("W1", "Alice", region="NSW"), Worker("W2", "Bob", region="VIC")]


@pytest.fixture
def validator():
    return InputValidator()


def validate(validator, workers, schedules=(), unavailability=(), overrides=(), bookings=()):
    return validator.validate(
        workers, list(schedules), list(unavailability), list(overrides), list(bookings)
    )


class TestValidationResult:
    def test_add_error_marks_invalid(self):
        result = ValidationResult(is_valid=True)
        result.add_error(ValidationError(ValidationErrorType.UNKNOWN_PERIOD, "bad"))
        assert not result.is_valid

    def test_warning_keeps_valid(self):
        result = ValidationResult(is_valid=True)
        result.add_warning("careful")
        assert result.is_valid
        assert result.warnings == ["careful"]

    def test_error_str(self):
        error = ValidationError(
            ValidationErrorType.DUPLICATE_SCHEDULE, "2 entries", worker_id="W1"
        )
        assert str(error) == "[duplicate_schedule] Worker W1: 2 entries"


class TestInputValidator:
    """Tests for InputValidator."""

    def test_clean_input(self, validator, workers):
        result = validate(
            validator,
            workers,
            schedules=[RecurringScheduleEntry("W1", 1, "09:00:00", "17:00:00")],
            unavailability=[UnavailabilityRange("W1", date(2024, 1, 16), date(2024, 1, 18))],
            overrides=[SeasonalOverride("W2", date(2024, 1, 20), ["morning", "evening"])],
            bookings=[Booking(datetime(2024, 1, 16, 9), datetime(2024, 1, 16, 11), ["W1"])],
        )
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_duplicate_active_schedule(self, validator, workers):
        schedules = [
            RecurringScheduleEntry("W1", 2, "09:00:00", "17:00:00"),
            RecurringScheduleEntry("W1", 2, "10:00:00", "14:00:00"),
        ]
        result = validate(validator, workers, schedules=schedules)

        errors = result.errors_of_type(ValidationErrorType.DUPLICATE_SCHEDULE)
        assert len(errors) == 1
        assert errors[0].worker_id == "W1"
        assert errors[0].details == {"day_of_week": 2, "count": 2}

    def test_inactive_duplicate_allowed(self, validator, workers):
        schedules = [
            RecurringScheduleEntry("W1", 2, "09:00:00", "17:00:00"),
            RecurringScheduleEntry("W1", 2, "10:00:00", "14:00:00", is_active=False),
        ]
        result = validate(validator, workers, schedules=schedules)
        assert result.is_valid

    def test_inverted_schedule(self, validator, workers):
        schedules = [RecurringScheduleEntry("W1", 3, "17:00:00", "09:00:00")]
        result = validate(validator, workers, schedules=schedules)
        assert len(result.errors_of_type(ValidationErrorType.INVERTED_TIME_RANGE)) == 1

    def test_invalid_day_of_week(self, validator, workers):
        schedules = [RecurringScheduleEntry("W1", 7, "09:00:00", "17:00:00")]
        result = validate(validator, workers, schedules=schedules)
        assert len(result.errors_of_type(ValidationErrorType.INVALID_DAY_OF_WEEK)) == 1

    def test_inverted_date_range(self, validator, workers):
        unavailability = [UnavailabilityRange("W1", date(2024, 1, 20), date(2024, 1, 10))]
        result = validate(validator, workers, unavailability=unavailability)
        assert len(result.errors_of_type(ValidationErrorType.INVERTED_DATE_RANGE)) == 1

    def test_duplicate_override(self, validator, workers):
        overrides = [
            SeasonalOverride("W1", date(2024, 1, 20), ["morning"]),
            SeasonalOverride("W1", date(2024, 1, 20), ["evening"]),
        ]
        result = validate(validator, workers, overrides=overrides)
        assert len(result.errors_of_type(ValidationErrorType.DUPLICATE_OVERRIDE)) == 1

    def test_unknown_period(self, validator, workers):
        overrides = [SeasonalOverride("W1", date(2024, 1, 20), ["morning", "night"])]
        result = validate(validator, workers, overrides=overrides)

        errors = result.errors_of_type(ValidationErrorType.UNKNOWN_PERIOD)
        assert len(errors) == 1
        assert "night" in errors[0].message

    def test_unknown_references_are_warnings(self, validator, workers):
        result = validate(
            validator,
            workers,
            schedules=[
                RecurringScheduleEntry("GHOST", 1, "09:00:00", "17:00:00"),
                RecurringScheduleEntry("GHOST", 2, "09:00:00", "17:00:00"),
            ],
            bookings=[Booking(datetime(2024, 1, 16, 9), datetime(2024, 1, 16, 11), ["GHOST"], "B1")],
        )

        assert result.is_valid
        # One warning per unknown worker for schedules, one per booking assignment
        assert len(result.warnings) == 2
        assert any("B1" in w for w in result.warnings)

    def test_strict_references(self, workers):
        result = validate(
            InputValidator(strict_references=True),
            workers,
            unavailability=[UnavailabilityRange("GHOST", date(2024, 1, 1), date(2024, 1, 2))],
            bookings=[Booking(datetime(2024, 1, 16, 9), datetime(2024, 1, 16, 11), ["GHOST"])],
        )

        assert not result.is_valid
        assert len(result.errors_of_type(ValidationErrorType.UNKNOWN_WORKER)) == 1
        assert len(result.errors_of_type(ValidationErrorType.ORPHANED_BOOKING)) == 1
