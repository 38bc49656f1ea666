"""Payroll calculation rules."""

from payroll_kata.calculators.affiliation import calculate_deductions
from payroll_kata.calculators.classification import calculate_pay
from payroll_kata.calculators.engine import PaydayResult, PayrollEngine
from payroll_kata.calculators.factory import DefaultPayrollFactory, PayrollFactory
from payroll_kata.models.schedule import get_pay_period, is_pay_date

__all__ = [
    "DefaultPayrollFactory",
    "PaydayResult",
    "PayrollEngine",
    "PayrollFactory",
    "calculate_deductions",
    "calculate_pay",
    "get_pay_period",
    "is_pay_date",
]
