"""Gross pay rules for each pay classification."""

from __future__ import annotations

import logging
from decimal import Decimal

from payroll_kata.models import (
    CommissionedClassification,
    HourlyClassification,
    PaymentClassification,
    PayPeriod,
    SalariedClassification,
    TimeCard,
)

logger = logging.getLogger(__name__)

STRAIGHT_TIME_HOURS = Decimal("8")
OVERTIME_MULTIPLIER = Decimal("1.5")
ZERO = Decimal("0")


def pay_for_timecard(hourly_rate: Decimal, timecard: TimeCard) -> Decimal:
    """Pay for one day: hours past 8 earn time and a half."""
    overtime = max(timecard.hours - STRAIGHT_TIME_HOURS, ZERO)
    straight_time = timecard.hours - overtime
    return (straight_time + overtime * OVERTIME_MULTIPLIER) * hourly_rate


def calculate_pay(classification: PaymentClassification, period: PayPeriod) -> Decimal:
    """Compute gross pay for ``period``.

    Only activity dated inside the period counts. Salaried and commissioned
    base salary is paid in full for any period the schedule produces.
    """
    match classification:
        case SalariedClassification(salary=salary):
            return salary
        case HourlyClassification(hourly_rate=rate, timecards=timecards):
            total = sum(
                (pay_for_timecard(rate, tc) for tc in timecards if tc.date in period),
                ZERO,
            )
            logger.debug("hourly pay for %s: %s", period, total)
            return total
        case CommissionedClassification(
            salary=salary, commission_rate=rate, sales_receipts=receipts
        ):
            commission = sum(
                (sr.amount * rate for sr in receipts if sr.date in period),
                ZERO,
            )
            logger.debug("commission for %s: %s", period, commission)
            return salary + commission
    raise TypeError(f"unknown payment classification: {classification!r}")
