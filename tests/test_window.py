"""Tests for day-axis generation."""

from datetime import date, timedelta

from crewboard.engine.window import (
    BOARD_WINDOW_DAYS,
    TV_WINDOW_DAYS,
    generate_month_window,
    generate_window,
    sunday_weekday,
)


class TestSundayWeekday:
    """Tests for the Sunday=0 weekday convention."""

    def test_known_days(self):
        assert sunday_weekday(date(2024, 1, 14)) == 0  # Sunday
        assert sunday_weekday(date(2024, 1, 15)) == 1  # Monday
        assert sunday_weekday(date(2024, 1, 20)) == 6  # Saturday


class TestGenerateWindow:
    """Tests for generate_window."""

    def test_length_and_bounds(self):
        anchor = date(2024, 1, 15)
        days = generate_window(anchor, 30)

        assert len(days) == 30
        assert days[0].date == anchor
        assert days[-1].date == anchor + timedelta(days=29)

    def test_days_are_consecutive(self):
        days = generate_window(date(2024, 2, 27), 5)
        assert [d.date_str for d in days] == [
            "2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01", "2024-03-02",
        ]

    def test_only_first_day_is_today(self):
        days = generate_window(date(2024, 1, 15), 10)
        assert days[0].is_today
        assert not any(d.is_today for d in days[1:])

    def test_weekend_flags(self):
        days = generate_window(date(2024, 1, 15), 7)  # Monday..Sunday
        weekend = [d.date for d in days if d.is_weekend]
        assert weekend == [date(2024, 1, 20), date(2024, 1, 21)]

    def test_presets(self):
        anchor = date(2024, 1, 15)
        assert len(generate_window(anchor, BOARD_WINDOW_DAYS)) == 30
        assert len(generate_window(anchor, TV_WINDOW_DAYS)) == 60

    def test_zero_days(self):
        assert generate_window(date(2024, 1, 15), 0) == []

    def test_display_helpers(self):
        day = generate_window(date(2024, 1, 16), 1)[0]
        assert day.day_number == "16"
        assert day.day_name == "Tue"
        assert day.month_name == "Jan"
        assert day.day_of_week == 2


class TestGenerateMonthWindow:
    """Tests for the calendar month window."""

    def test_leap_february(self):
        days = generate_month_window(date(2024, 2, 10))
        assert len(days) == 29
        assert days[0].date == date(2024, 2, 1)
        assert days[-1].date == date(2024, 2, 29)

    def test_today_flag_inside_month(self):
        days = generate_month_window(date(2024, 3, 1), today=date(2024, 3, 5))
        assert [d.date for d in days if d.is_today] == [date(2024, 3, 5)]

    def test_no_today_outside_month(self):
        days = generate_month_window(date(2024, 3, 1), today=date(2024, 4, 5))
        assert not any(d.is_today for d in days)
