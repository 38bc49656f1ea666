"""Pay classification, schedule and affiliation variants plus paychecks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator, Union

MemberId = int


@dataclass(frozen=True)
class PayPeriod:
    """An inclusive date range covered by one paycheck."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"pay period start {self.start} is after end {self.end}")

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    def days(self) -> Iterator[date]:
        """Iterate every day of the period, start and end included."""
        for offset in range((self.end - self.start).days + 1):
            yield self.start + timedelta(days=offset)

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


@dataclass(frozen=True)
class Paycheck:
    """Pay computed for one employee on one pay date. Never mutated."""

    pay_period: PayPeriod
    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal

    @property
    def pay_date(self) -> date:
        return self.pay_period.end


# =============================================================================
# Accumulated activity
# =============================================================================


@dataclass(frozen=True)
class TimeCard:
    date: date
    hours: Decimal


@dataclass(frozen=True)
class SalesReceipt:
    date: date
    amount: Decimal


@dataclass(frozen=True)
class ServiceCharge:
    date: date
    amount: Decimal


# =============================================================================
# Classifications
# =============================================================================


@dataclass
class SalariedClassification:
    salary: Decimal


@dataclass
class HourlyClassification:
    hourly_rate: Decimal
    timecards: list[TimeCard] = field(default_factory=list)

    def add_timecard(self, day: date, hours: Decimal) -> None:
        self.timecards.append(TimeCard(day, hours))


@dataclass
class CommissionedClassification:
    salary: Decimal
    commission_rate: Decimal
    sales_receipts: list[SalesReceipt] = field(default_factory=list)

    def add_sales_receipt(self, day: date, amount: Decimal) -> None:
        self.sales_receipts.append(SalesReceipt(day, amount))


PaymentClassification = Union[
    SalariedClassification, HourlyClassification, CommissionedClassification
]


# =============================================================================
# Schedules
# =============================================================================


@dataclass(frozen=True)
class MonthlySchedule:
    """Paid on the last calendar day of each month."""


@dataclass(frozen=True)
class WeeklySchedule:
    """Paid every Friday."""


@dataclass(frozen=True)
class BiweeklySchedule:
    """Paid on Fridays of even ISO weeks."""


PaymentSchedule = Union[MonthlySchedule, WeeklySchedule, BiweeklySchedule]


# =============================================================================
# Affiliations
# =============================================================================


@dataclass(frozen=True)
class NoAffiliation:
    """Not a union member; no deductions."""


@dataclass
class UnionAffiliation:
    member_id: MemberId
    dues: Decimal
    service_charges: list[ServiceCharge] = field(default_factory=list)

    def add_service_charge(self, day: date, amount: Decimal) -> None:
        self.service_charges.append(ServiceCharge(day, amount))


Affiliation = Union[NoAffiliation, UnionAffiliation]
