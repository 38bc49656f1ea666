"""Employee record."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from payroll_kata.models.payments import PaymentMethod
from payroll_kata.models.payroll import (
    Affiliation,
    MemberId,
    PaymentClassification,
    PaymentSchedule,
    PayPeriod,
    UnionAffiliation,
)
from payroll_kata.models.schedule import get_pay_period, is_pay_date

EmployeeId = int


@dataclass
class Employee:
    """An employee and the four rule facets it owns.

    Facets are replaced wholesale by Change* commands. Only the activity
    lists inside an accumulating facet are ever mutated in place.
    """

    id: EmployeeId
    name: str
    address: str
    classification: PaymentClassification
    schedule: PaymentSchedule
    method: PaymentMethod
    affiliation: Affiliation

    @property
    def member_id(self) -> MemberId | None:
        """Union member id, or None when not a union member."""
        if isinstance(self.affiliation, UnionAffiliation):
            return self.affiliation.member_id
        return None

    def is_pay_date(self, day: date) -> bool:
        return is_pay_date(self.schedule, day)

    def get_pay_period(self, pay_date: date) -> PayPeriod:
        return get_pay_period(self.schedule, pay_date)
