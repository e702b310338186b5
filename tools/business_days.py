"""Business-day adjustment for payment dates.

Used when a payment is entered: a date that lands on a weekend or a bank
holiday can be moved to the previous or next working day. The adjusted date
is what gets stored, so recurrence expansion later starts from it.
"""

from datetime import date, timedelta
from pathlib import Path
from typing import Optional, Set

import yaml

from config import Config
from logger import get_logger

logger = get_logger()

PREVIOUS = "previous"
NEXT = "next"
DIRECTIONS = (PREVIOUS, NEXT)


class HolidayCalendar:
    """Set of holiday dates loaded from a YAML file.

    The file holds a ``holidays`` list of ISO dates (an optional ``name`` key
    is informational). The file is read on first use and cached.
    """

    def __init__(self, holidays_file: Optional[Path] = None, holidays=None):
        """Initialize the calendar.

        Args:
            holidays_file: YAML file to load holidays from.
            holidays: Explicit iterable of dates; takes precedence over the file.
        """
        self.holidays_file = holidays_file
        self._holidays: Optional[Set[date]] = (
            {self._to_date(day) for day in holidays} if holidays is not None else None
        )

    @property
    def holidays(self) -> Set[date]:
        if self._holidays is None:
            self._holidays = self._load()
        return self._holidays

    def is_holiday(self, day: date) -> bool:
        return day in self.holidays

    def _load(self) -> Set[date]:
        if self.holidays_file is None:
            return set()

        if not self.holidays_file.exists():
            raise FileNotFoundError(f"Holiday file not found: {self.holidays_file}")

        logger.info(f"Loading holidays from {self.holidays_file}")

        with open(self.holidays_file, "r") as f:
            data = yaml.safe_load(f) or {}

        return {self._to_date(day) for day in data.get("holidays", [])}

    @staticmethod
    def _to_date(value) -> date:
        # PyYAML already turns unquoted ISO dates into date objects
        if isinstance(value, date):
            return value
        return date.fromisoformat(str(value))


def load_holiday_calendar(config: Config) -> HolidayCalendar:
    """Build the holiday calendar configured for this installation."""
    return HolidayCalendar(config.holidays_file)


def is_weekend(day: date) -> bool:
    """Saturday or Sunday."""
    return day.weekday() >= 5


def adjust_date(
    day: date,
    adjust_weekends: bool,
    adjust_holidays: bool,
    direction: str = NEXT,
    holidays: Optional[HolidayCalendar] = None,
) -> date:
    """Move a date off weekends and/or holidays.

    If the date is a weekend (and adjust_weekends) or a holiday (and
    adjust_holidays), step one day at a time in the given direction until
    the date is neither a weekend (when checked) nor a holiday (when checked).

    Args:
        day: The date to adjust.
        adjust_weekends: Treat Saturdays and Sundays as non-working days.
        adjust_holidays: Treat calendar holidays as non-working days.
        direction: "previous" or "next".
        holidays: Holiday calendar; required for holiday adjustment to have
                  any effect.

    Returns:
        The adjusted date, or the original date if no adjustment applies.

    Raises:
        ValueError: If direction is not "previous" or "next".
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be one of: {', '.join(DIRECTIONS)}")

    def blocked(candidate: date) -> bool:
        if adjust_weekends and is_weekend(candidate):
            return True
        return bool(adjust_holidays and holidays and holidays.is_holiday(candidate))

    step = timedelta(days=-1 if direction == PREVIOUS else 1)
    adjusted = day
    while blocked(adjusted):
        adjusted += step

    if adjusted != day:
        logger.debug(f"Adjusted {day.isoformat()} to {adjusted.isoformat()}")
    return adjusted
