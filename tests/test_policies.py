"""Tests for board policies."""

from datetime import date, timedelta

import pytest

from crewboard.domain.models import UnavailabilityRange
from crewboard.domain.policies import DefaultHoursPolicy, DefaultLeavePolicy


def leave(days: int) -> UnavailabilityRange:
    start = date(2024, 1, 10)
    return UnavailabilityRange("W1", start, start + timedelta(days=days))


class TestDefaultLeavePolicy:
    """Tests for DefaultLeavePolicy."""

    @pytest.fixture
    def policy(self):
        return DefaultLeavePolicy()

    def test_single_day_is_short(self, policy):
        assert not policy.is_long_leave(leave(0))

    def test_seven_day_span_is_short(self, policy):
        assert not policy.is_long_leave(leave(7))

    def test_eight_day_span_is_long(self, policy):
        assert policy.is_long_leave(leave(8))

    def test_custom_threshold(self):
        policy = DefaultLeavePolicy(threshold_days=14)
        assert not policy.is_long_leave(leave(14))
        assert policy.is_long_leave(leave(15))


class TestDefaultHoursPolicy:
    """Tests for DefaultHoursPolicy."""

    def test_regular_window(self):
        assert DefaultHoursPolicy().schedule_hours("09:00:00", "17:00:00") == 8.0

    def test_inverted_window_passes_through(self):
        assert DefaultHoursPolicy().schedule_hours("17:00:00", "09:00:00") == -8.0

    def test_inverted_window_clamped(self):
        policy = DefaultHoursPolicy(clamp_negative=True)
        assert policy.schedule_hours("17:00:00", "09:00:00") == 0.0
        assert policy.schedule_hours("09:00:00", "17:00:00") == 8.0

    def test_missing_times(self):
        assert DefaultHoursPolicy().schedule_hours(None, None) == 0
