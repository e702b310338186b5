"""Tests for business-day date adjustment."""

from datetime import date

import pytest

from config import get_seed_dir
from tools.business_days import (
    HolidayCalendar,
    adjust_date,
    is_weekend,
    load_holiday_calendar,
)

CHRISTMAS = HolidayCalendar(holidays=[date(2024, 12, 25), date(2024, 12, 26)])


class TestAdjustDate:
    """Tests for adjust_date function."""

    def test_weekday_unchanged(self):
        """Test that a working day is returned as is."""
        assert adjust_date(date(2024, 1, 3), True, True, "next", CHRISTMAS) == date(
            2024, 1, 3
        )

    def test_weekend_next(self):
        """Test moving a Saturday forward to Monday."""
        assert adjust_date(date(2024, 1, 6), True, False, "next") == date(2024, 1, 8)

    def test_weekend_previous(self):
        """Test moving a Sunday back to Friday."""
        assert adjust_date(date(2024, 1, 7), True, False, "previous") == date(2024, 1, 5)

    def test_weekend_not_adjusted_when_disabled(self):
        """Test that weekends are kept when weekend adjustment is off."""
        assert adjust_date(date(2024, 1, 6), False, True, "next", CHRISTMAS) == date(
            2024, 1, 6
        )

    def test_consecutive_holidays(self):
        """Test stepping over back-to-back holidays."""
        assert adjust_date(
            date(2024, 12, 25), False, True, "next", CHRISTMAS
        ) == date(2024, 12, 27)
        assert adjust_date(
            date(2024, 12, 26), False, True, "previous", CHRISTMAS
        ) == date(2024, 12, 24)

    def test_holiday_then_weekend(self):
        """Test that a holiday followed by a weekend lands on Monday."""
        calendar = HolidayCalendar(holidays=[date(2024, 3, 29)])  # Good Friday

        assert adjust_date(date(2024, 3, 29), True, True, "next", calendar) == date(
            2024, 4, 1
        )

    def test_holidays_ignored_without_calendar(self):
        """Test that holiday adjustment needs a calendar."""
        assert adjust_date(date(2024, 12, 25), False, True, "next") == date(2024, 12, 25)

    def test_invalid_direction(self):
        """Test that an unknown direction is rejected."""
        with pytest.raises(ValueError, match="direction"):
            adjust_date(date(2024, 1, 6), True, False, "sideways")

    def test_is_weekend(self):
        """Test weekend detection."""
        assert is_weekend(date(2024, 1, 6))
        assert is_weekend(date(2024, 1, 7))
        assert not is_weekend(date(2024, 1, 8))


class TestHolidayCalendar:
    """Tests for HolidayCalendar loading."""

    def test_load_from_yaml(self, tmp_path):
        """Test reading quoted and unquoted dates from a YAML file."""
        holidays_file = tmp_path / "holidays.yaml"
        holidays_file.write_text(
            "name: Test\nholidays:\n  - 2024-05-06\n  - '2024-08-26'\n"
        )

        calendar = HolidayCalendar(holidays_file)

        assert calendar.holidays == {date(2024, 5, 6), date(2024, 8, 26)}
        assert calendar.is_holiday(date(2024, 8, 26))

    def test_missing_file(self, tmp_path):
        """Test that a missing holiday file is reported."""
        calendar = HolidayCalendar(tmp_path / "missing.yaml")

        with pytest.raises(FileNotFoundError):
            calendar.is_holiday(date(2024, 1, 1))

    def test_no_file(self):
        """Test that a calendar without a file has no holidays."""
        assert not HolidayCalendar().is_holiday(date(2024, 12, 25))

    def test_bundled_calendar(self, test_config):
        """Test the bundled holiday file through the configuration."""
        calendar = load_holiday_calendar(test_config)

        assert calendar.holidays_file == get_seed_dir() / "holidays.yaml"
        assert calendar.is_holiday(date(2024, 12, 25))
        assert not calendar.is_holiday(date(2024, 12, 24))
