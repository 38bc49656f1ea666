"""Pay date and pay period rules for each schedule.

Always computed from the calendar; nothing is cached between paydays.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from payroll_kata.models.payroll import (
    BiweeklySchedule,
    MonthlySchedule,
    PaymentSchedule,
    PayPeriod,
    WeeklySchedule,
)

FRIDAY = 4  # date.weekday()


def is_last_day_of_month(day: date) -> bool:
    return day.day == calendar.monthrange(day.year, day.month)[1]


def is_pay_date(schedule: PaymentSchedule, day: date) -> bool:
    """Return True if ``day`` is a pay date under ``schedule``."""
    match schedule:
        case MonthlySchedule():
            return is_last_day_of_month(day)
        case WeeklySchedule():
            return day.weekday() == FRIDAY
        case BiweeklySchedule():
            return day.weekday() == FRIDAY and day.isocalendar()[1] % 2 == 0
    raise TypeError(f"unknown payment schedule: {schedule!r}")


def get_pay_period(schedule: PaymentSchedule, pay_date: date) -> PayPeriod:
    """Return the inclusive pay period that ends on ``pay_date``.

    Monthly: first of the month through ``pay_date``.
    Weekly: the 7 days ending on ``pay_date``.
    Biweekly: the 14 days ending on ``pay_date``.

    Raises:
        OverflowError: the period would start before ``date.min``
    """
    match schedule:
        case MonthlySchedule():
            return PayPeriod(pay_date.replace(day=1), pay_date)
        case WeeklySchedule():
            return PayPeriod(pay_date - timedelta(days=6), pay_date)
        case BiweeklySchedule():
            return PayPeriod(pay_date - timedelta(days=13), pay_date)
    raise TypeError(f"unknown payment schedule: {schedule!r}")
