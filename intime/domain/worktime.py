"""Pure functions for converting money into working time.

This module contains the functional core for work-time calculations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Monetary values here are plain amounts in reais (float or Decimal), not
centavos, since the results are fractional hours anyway.
"""

import math
from dataclasses import dataclass
from decimal import Decimal

# 52 weeks / 12 months, rounded
WEEKS_PER_MONTH = 4.33

MIN_MONTHLY_SALARY = 1
MIN_WEEKLY_HOURS = 1
MAX_WEEKLY_HOURS = 168

Number = float | int | Decimal


@dataclass(frozen=True)
class WorkTimeDuration:
    """Immutable work time needed to earn an amount.

    ``minutes`` is rounded from the fractional hour independently of
    ``total_minutes``, so it can be 60 right below an hour boundary.
    ``computable`` is False only for the zero duration returned when the
    salary profile is incomplete.
    """

    hours: int
    minutes: int
    total_minutes: int
    computable: bool = True


ZERO_DURATION = WorkTimeDuration(hours=0, minutes=0, total_minutes=0, computable=False)


@dataclass(frozen=True)
class UserRateProfile:
    """Immutable salary profile used for conversions."""

    monthly_salary: float | None = None
    weekly_hours: float | None = None

    @property
    def is_configured(self) -> bool:
        """True if both salary and weekly hours are set and positive."""
        return _is_positive(self.monthly_salary) and _is_positive(self.weekly_hours)

    @property
    def hourly_rate(self) -> float:
        return compute_hourly_rate(self.monthly_salary, self.weekly_hours)

    @property
    def daily_rate(self) -> float:
        return compute_daily_rate(self.monthly_salary, self.weekly_hours)


def _is_positive(value: Number | None) -> bool:
    return value is not None and value > 0


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; amounts here are never negative
    return math.floor(value + 0.5)


def compute_hourly_rate(monthly_salary: Number | None, weekly_hours: Number | None) -> float:
    """Calculate hourly pay from a monthly salary.

    Args:
        monthly_salary: Monthly salary in reais.
        weekly_hours: Hours worked per week.

    Returns:
        Hourly rate in reais, or 0 if either input is missing, zero or negative.
    """
    if not _is_positive(monthly_salary) or not _is_positive(weekly_hours):
        return 0.0

    monthly_hours = float(weekly_hours) * WEEKS_PER_MONTH
    return float(monthly_salary) / monthly_hours


def compute_daily_rate(monthly_salary: Number | None, weekly_hours: Number | None) -> float:
    """Calculate pay per calendar day (weekly hours spread over 7 days).

    Args:
        monthly_salary: Monthly salary in reais.
        weekly_hours: Hours worked per week.

    Returns:
        Daily rate in reais, or 0 if either input is missing, zero or negative.
    """
    hourly_rate = compute_hourly_rate(monthly_salary, weekly_hours)
    if hourly_rate == 0:
        return 0.0

    daily_hours = float(weekly_hours) / 7
    return hourly_rate * daily_hours


def convert(value: Number, monthly_salary: Number | None, weekly_hours: Number | None) -> WorkTimeDuration:
    """Convert an amount of money into the work time needed to earn it.

    Args:
        value: Amount in reais.
        monthly_salary: Monthly salary in reais.
        weekly_hours: Hours worked per week.

    Returns:
        WorkTimeDuration. ZERO_DURATION if the salary profile is incomplete.
    """
    if not _is_positive(monthly_salary) or not _is_positive(weekly_hours):
        return ZERO_DURATION

    hourly_rate = compute_hourly_rate(monthly_salary, weekly_hours)
    total_hours = float(value) / hourly_rate

    hours = math.floor(total_hours)
    minutes = _round_half_up((total_hours - hours) * 60)
    total_minutes = _round_half_up(total_hours * 60)

    return WorkTimeDuration(hours=hours, minutes=minutes, total_minutes=total_minutes)


def convert_for_profile(value: Number, profile: UserRateProfile) -> WorkTimeDuration:
    """Convert an amount using a stored salary profile."""
    return convert(value, profile.monthly_salary, profile.weekly_hours)


def format_duration(duration: WorkTimeDuration) -> str:
    """Format a duration for display.

    Args:
        duration: Work time duration.

    Returns:
        "0m", "15m", "2h" or "2h 15m".
    """
    if duration.hours == 0 and duration.minutes == 0:
        return "0m"

    if duration.hours == 0:
        return f"{duration.minutes}m"

    if duration.minutes == 0:
        return f"{duration.hours}h"

    return f"{duration.hours}h {duration.minutes}m"


def validate_profile(monthly_salary: Number | None, weekly_hours: Number | None) -> str | None:
    """Validate salary profile input.

    Args:
        monthly_salary: Monthly salary in reais.
        weekly_hours: Hours worked per week.

    Returns:
        Error message, or None if the profile is valid.
    """
    if monthly_salary is None or monthly_salary < MIN_MONTHLY_SALARY:
        return "Monthly salary must be greater than zero"

    if weekly_hours is None or weekly_hours < MIN_WEEKLY_HOURS:
        return "Weekly hours must be greater than zero"

    if weekly_hours > MAX_WEEKLY_HOURS:
        return f"Weekly hours cannot exceed {MAX_WEEKLY_HOURS}"

    return None
