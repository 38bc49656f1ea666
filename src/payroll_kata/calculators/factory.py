"""Rule factory: the single place facet instances are constructed.

Transactions never instantiate facet variants directly, so tests can
substitute a factory that records or alters what gets built.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from payroll_kata.models import (
    Affiliation,
    BiweeklySchedule,
    CommissionedClassification,
    DirectMethod,
    HoldMethod,
    HourlyClassification,
    MailMethod,
    MemberId,
    MonthlySchedule,
    NoAffiliation,
    PaymentClassification,
    PaymentMethod,
    PaymentSchedule,
    SalariedClassification,
    UnionAffiliation,
    WeeklySchedule,
)


class PayrollFactory(Protocol):
    """Protocol for constructing rule facets."""

    def salaried_classification(self, salary: Decimal) -> PaymentClassification:
        ...

    def hourly_classification(self, hourly_rate: Decimal) -> PaymentClassification:
        ...

    def commissioned_classification(
        self, salary: Decimal, commission_rate: Decimal
    ) -> PaymentClassification:
        ...

    def monthly_schedule(self) -> PaymentSchedule:
        ...

    def weekly_schedule(self) -> PaymentSchedule:
        ...

    def biweekly_schedule(self) -> PaymentSchedule:
        ...

    def hold_method(self) -> PaymentMethod:
        ...

    def direct_method(self, bank: str, account: str) -> PaymentMethod:
        ...

    def mail_method(self, address: str) -> PaymentMethod:
        ...

    def union_affiliation(self, member_id: MemberId, dues: Decimal) -> Affiliation:
        ...

    def no_affiliation(self) -> Affiliation:
        ...


class DefaultPayrollFactory:
    """Builds the standard facet variants."""

    def salaried_classification(self, salary: Decimal) -> PaymentClassification:
        return SalariedClassification(salary=salary)

    def hourly_classification(self, hourly_rate: Decimal) -> PaymentClassification:
        return HourlyClassification(hourly_rate=hourly_rate)

    def commissioned_classification(
        self, salary: Decimal, commission_rate: Decimal
    ) -> PaymentClassification:
        return CommissionedClassification(salary=salary, commission_rate=commission_rate)

    def monthly_schedule(self) -> PaymentSchedule:
        return MonthlySchedule()

    def weekly_schedule(self) -> PaymentSchedule:
        return WeeklySchedule()

    def biweekly_schedule(self) -> PaymentSchedule:
        return BiweeklySchedule()

    def hold_method(self) -> PaymentMethod:
        return HoldMethod()

    def direct_method(self, bank: str, account: str) -> PaymentMethod:
        return DirectMethod(bank=bank, account=account)

    def mail_method(self, address: str) -> PaymentMethod:
        return MailMethod(address=address)

    def union_affiliation(self, member_id: MemberId, dues: Decimal) -> Affiliation:
        return UnionAffiliation(member_id=member_id, dues=dues)

    def no_affiliation(self) -> Affiliation:
        return NoAffiliation()
