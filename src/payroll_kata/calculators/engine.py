"""Payday calculation - turns employees and a pay date into paychecks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from payroll_kata.calculators.affiliation import calculate_deductions
from payroll_kata.calculators.classification import calculate_pay
from payroll_kata.models import Employee, EmployeeId, Paycheck
from payroll_kata.models.schedule import get_pay_period, is_pay_date

logger = logging.getLogger(__name__)


@dataclass
class PaydayResult:
    """Paychecks produced for one pay date."""

    pay_date: date
    paychecks: dict[EmployeeId, Paycheck] = field(default_factory=dict)

    @property
    def total_gross(self) -> Decimal:
        return sum((pc.gross_pay for pc in self.paychecks.values()), Decimal("0"))

    @property
    def total_net(self) -> Decimal:
        return sum((pc.net_pay for pc in self.paychecks.values()), Decimal("0"))


class PayrollEngine:
    """Stateless payday calculator.

    Pipeline per employee:
    1) Skip unless the schedule says ``pay_date`` is a pay date
    2) Pay period from the schedule
    3) Gross pay from the classification
    4) Deductions from the affiliation
    5) Net = gross - deductions
    """

    def compute_paycheck(self, employee: Employee, pay_date: date) -> Paycheck | None:
        """Return the paycheck for ``employee`` or None when not paid today."""
        if not is_pay_date(employee.schedule, pay_date):
            return None

        period = get_pay_period(employee.schedule, pay_date)
        gross = calculate_pay(employee.classification, period)
        deductions = calculate_deductions(employee.affiliation, period)
        paycheck = Paycheck(
            pay_period=period,
            gross_pay=gross,
            deductions=deductions,
            net_pay=gross - deductions,
        )
        logger.debug("paycheck for employee %s: %s", employee.id, paycheck)
        return paycheck

    def run_payday(
        self, employees: dict[EmployeeId, Employee], pay_date: date
    ) -> PaydayResult:
        """Compute paychecks for every employee paid on ``pay_date``."""
        result = PaydayResult(pay_date=pay_date)
        for emp_id in sorted(employees):
            paycheck = self.compute_paycheck(employees[emp_id], pay_date)
            if paycheck is not None:
                result.paychecks[emp_id] = paycheck

        logger.info(
            "payday %s: %d paycheck(s), gross=%s net=%s",
            pay_date.isoformat(),
            len(result.paychecks),
            result.total_gross,
            result.total_net,
        )
        return result
