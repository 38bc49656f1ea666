"""Deduction rules for each affiliation."""

from __future__ import annotations

import logging
from decimal import Decimal

from payroll_kata.models import Affiliation, NoAffiliation, PayPeriod, UnionAffiliation
from payroll_kata.models.schedule import FRIDAY

logger = logging.getLogger(__name__)


def count_fridays(period: PayPeriod) -> int:
    return sum(1 for day in period.days() if day.weekday() == FRIDAY)


def calculate_deductions(affiliation: Affiliation, period: PayPeriod) -> Decimal:
    """Union dues once per Friday in the period, plus service charges in it."""
    match affiliation:
        case NoAffiliation():
            return Decimal("0")
        case UnionAffiliation(dues=dues, service_charges=charges):
            dues_amount = dues * count_fridays(period)
            service_amount = sum(
                (sc.amount for sc in charges if sc.date in period), Decimal("0")
            )
            logger.debug(
                "deductions for %s: dues=%s service=%s", period, dues_amount, service_amount
            )
            return dues_amount + service_amount
    raise TypeError(f"unknown affiliation: {affiliation!r}")
