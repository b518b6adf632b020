"""Tests for per-day availability resolution."""

import logging
from datetime import date, datetime

import pytest

from crewboard.domain.models import (
    AvailabilitySource,
    Booking,
    RecurringScheduleEntry,
    SeasonalOverride,
    UnavailabilityRange,
    Worker,
)
from crewboard.domain.policies import DefaultHoursPolicy
from crewboard.engine.resolver import AvailabilityResolver, WorkerIndex
from crewboard.engine.window import describe_day, generate_window
from crewboard.engine.workload import WorkloadAggregator

TUESDAY = date(2024, 1, 16)  # Sunday=0 weekday 2


@pytest.fixture
def worker():
    return Worker(id="W1", first_name="Alice", last_name="Nguyen", region="NSW")


@pytest.fixture
def tuesday_schedule():
    return RecurringScheduleEntry(
        worker_id="W1", day_of_week=2, start_time="09:00:00", end_time="17:00:00"
    )


@pytest.fixture
def morning_booking():
    return Booking(
        start_time=datetime(2024, 1, 16, 10, 0),
        end_time=datetime(2024, 1, 16, 12, 0),
        worker_ids=["W1"],
    )


def make_resolver(bookings=(), hours_policy=None) -> AvailabilityResolver:
    return AvailabilityResolver(WorkloadAggregator(bookings), hours_policy)


class TestWorkerIndex:
    """Tests for WorkerIndex construction."""

    def test_inactive_schedule_entries_skipped(self, worker):
        index = WorkerIndex.build(
            worker,
            schedules=[
                RecurringScheduleEntry("W1", 2, "09:00:00", "17:00:00", is_active=False),
            ],
        )
        assert index.schedule_by_day == {}

    def test_duplicate_schedule_last_wins(self, worker):
        first = RecurringScheduleEntry("W1", 2, "09:00:00", "17:00:00")
        last = RecurringScheduleEntry("W1", 2, "10:00:00", "14:00:00")
        index = WorkerIndex.build(worker, schedules=[first, last])
        assert index.schedule_by_day[2] is last

    def test_duplicate_override_last_wins(self, worker):
        first = SeasonalOverride("W1", TUESDAY, ["morning"])
        last = SeasonalOverride("W1", TUESDAY, ["evening"])
        index = WorkerIndex.build(worker, overrides=[first, last])
        assert index.overrides_by_date[TUESDAY] is last

    def test_inverted_schedule_logs_warning(self, worker, caplog):
        with caplog.at_level(logging.WARNING, logger="crewboard.engine.resolver"):
            WorkerIndex.build(
                worker,
                schedules=[RecurringScheduleEntry("W1", 2, "17:00:00", "09:00:00")],
            )
        assert "ends before it starts" in caplog.text

    def test_first_matching_unavailability(self, worker):
        first = UnavailabilityRange("W1", date(2024, 1, 15), date(2024, 1, 17), "Sick")
        second = UnavailabilityRange("W1", date(2024, 1, 16), date(2024, 1, 16), "Other")
        index = WorkerIndex.build(worker, unavailability=[first, second])
        assert index.unavailability_on(TUESDAY) is first
        assert index.unavailability_on(date(2024, 1, 18)) is None


class TestPriorityOrder:
    """Tests for the four-step priority rule."""

    def test_unavailability_beats_everything(self, worker, tuesday_schedule, morning_booking):
        index = WorkerIndex.build(
            worker,
            schedules=[tuesday_schedule],
            unavailability=[UnavailabilityRange("W1", TUESDAY, TUESDAY, "Doctor")],
            overrides=[SeasonalOverride("W1", TUESDAY, ["anytime"])],
        )
        result = make_resolver([morning_booking]).resolve_day(index, describe_day(TUESDAY))

        assert result.is_unavailable is True
        assert result.is_available is False
        assert result.unavailability_reason == "Doctor"
        assert result.available_hours == 0
        assert result.assigned_hours == 0  # Bookings ignored on unavailable days
        assert result.start_time is None and result.end_time is None
        assert result.is_seasonal_override is False
        assert result.seasonal_periods == ()
        assert result.source == AvailabilitySource.UNAVAILABLE

    def test_seasonal_beats_schedule(self, worker, tuesday_schedule):
        index = WorkerIndex.build(
            worker,
            schedules=[tuesday_schedule],
            overrides=[SeasonalOverride("W1", TUESDAY, ["afternoon"])],
        )
        result = make_resolver().resolve_day(index, describe_day(TUESDAY))

        assert result.available_hours == 6.0
        assert result.start_time == "12:00:00"
        assert result.end_time == "18:00:00"
        assert result.is_seasonal_override is True
        assert result.source == AvailabilitySource.SEASONAL

    def test_empty_override_falls_through_to_schedule(self, worker, tuesday_schedule):
        index = WorkerIndex.build(
            worker,
            schedules=[tuesday_schedule],
            overrides=[SeasonalOverride("W1", TUESDAY, [])],
        )
        result = make_resolver().resolve_day(index, describe_day(TUESDAY))

        assert result.is_seasonal_override is False
        assert result.available_hours == 8.0

    def test_no_match(self, worker, tuesday_schedule, morning_booking):
        index = WorkerIndex.build(worker, schedules=[tuesday_schedule])
        wednesday = date(2024, 1, 17)
        result = make_resolver([morning_booking]).resolve_day(index, describe_day(wednesday))

        assert result.is_available is False
        assert result.is_unavailable is False
        assert result.available_hours == 0
        assert result.assigned_hours == 0
        assert result.source == AvailabilitySource.NONE

    def test_unavailable_boundaries_inclusive(self, worker, tuesday_schedule):
        index = WorkerIndex.build(
            worker,
            schedules=[tuesday_schedule],
            unavailability=[UnavailabilityRange("W1", TUESDAY, TUESDAY)],
        )
        result = make_resolver().resolve_day(index, describe_day(TUESDAY))
        assert result.is_unavailable is True
        assert result.unavailability_reason is None


class TestScenarios:
    """Worked examples."""

    def test_regular_schedule_with_booking(self, worker, tuesday_schedule, morning_booking):
        index = WorkerIndex.build(worker, schedules=[tuesday_schedule])
        result = make_resolver([morning_booking]).resolve_day(index, describe_day(TUESDAY))

        assert result.is_available is True
        assert result.start_time == "09:00:00"
        assert result.end_time == "17:00:00"
        assert result.available_hours == 8.0
        assert result.assigned_hours == 2.0
        assert result.is_seasonal_override is False
        assert result.remaining_hours == 6.0

    def test_morning_and_evening_override(self, worker):
        index = WorkerIndex.build(
            worker, overrides=[SeasonalOverride("W1", TUESDAY, ["morning", "evening"])]
        )
        result = make_resolver().resolve_day(index, describe_day(TUESDAY))

        assert result.available_hours == 10.0
        assert result.start_time == "06:00:00"
        assert result.end_time == "12:00:00"
        assert result.is_seasonal_override is True
        assert result.seasonal_periods == ("morning", "evening")

    def test_seasonal_day_counts_bookings(self, worker, morning_booking):
        index = WorkerIndex.build(
            worker, overrides=[SeasonalOverride("W1", TUESDAY, ["anytime"])]
        )
        result = make_resolver([morning_booking]).resolve_day(index, describe_day(TUESDAY))
        assert result.assigned_hours == 2.0

    def test_unknown_token_override_still_seasonal(self, worker):
        index = WorkerIndex.build(
            worker, overrides=[SeasonalOverride("W1", TUESDAY, ["night"])]
        )
        result = make_resolver().resolve_day(index, describe_day(TUESDAY))

        assert result.is_available is True
        assert result.is_seasonal_override is True
        assert result.available_hours == 0
        assert result.start_time is None and result.end_time is None

    def test_inverted_schedule_passes_through(self, worker):
        index = WorkerIndex.build(
            worker, schedules=[RecurringScheduleEntry("W1", 2, "17:00:00", "09:00:00")]
        )
        result = make_resolver().resolve_day(index, describe_day(TUESDAY))
        assert result.available_hours == -8.0

    def test_inverted_schedule_clamped_by_policy(self, worker):
        index = WorkerIndex.build(
            worker, schedules=[RecurringScheduleEntry("W1", 2, "17:00:00", "09:00:00")]
        )
        resolver = make_resolver(hours_policy=DefaultHoursPolicy(clamp_negative=True))
        result = resolver.resolve_day(index, describe_day(TUESDAY))
        assert result.available_hours == 0.0
        assert result.is_available is True

    def test_schedule_with_missing_times(self, worker):
        index = WorkerIndex.build(
            worker, schedules=[RecurringScheduleEntry("W1", 2, None, "17:00:00")]
        )
        result = make_resolver().resolve_day(index, describe_day(TUESDAY))
        assert result.is_available is True
        assert result.available_hours == 0


class TestResolveWindow:
    """Tests for resolving a whole window."""

    def test_weekly_pattern(self, worker, tuesday_schedule):
        index = WorkerIndex.build(worker, schedules=[tuesday_schedule])
        days = generate_window(date(2024, 1, 15), 14)
        results = make_resolver().resolve_window(index, days)

        assert len(results) == 14
        available = [r.date for r in results if r.is_available]
        assert available == [date(2024, 1, 16), date(2024, 1, 23)]

    def test_results_are_immutable(self, worker, tuesday_schedule):
        index = WorkerIndex.build(worker, schedules=[tuesday_schedule])
        result = make_resolver().resolve_day(index, describe_day(TUESDAY))
        with pytest.raises(AttributeError):
            result.available_hours = 1.0
